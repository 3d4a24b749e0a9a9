"""
Per request application context: who is calling and which request this is.
Read by the log formatter and sentry, never by business logic.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict

import sentry_sdk

from salesdesk.common.enum import BaseEnum

_app_context: ContextVar[Dict[str, Any] | None] = ContextVar('_app_context', default=None)


class AppContextUserType(BaseEnum):
    UNKNOWN = 'UNKNOWN'  # Until a guard identifies the caller
    USER = 'U'  # Bearer token holder
    SYSTEM = 'S'  # Scripts and tests


def initialize(
    user_type: AppContextUserType = AppContextUserType.UNKNOWN,
    user_id: str | None = None,
    request_id: str | None = None,
    breadcrumb: str | None = None,
) -> Token[Dict[str, Any] | None]:
    return _app_context.set(
        {
            'user_type': user_type,
            'user_id': user_id,
            'request_id': request_id,
            'breadcrumb': breadcrumb,
        }
    )


def reset(token: Token[Dict[str, Any] | None]) -> None:
    _app_context.reset(token)


def _require() -> Dict[str, Any]:
    app_ctx = _app_context.get()
    if app_ctx is None:
        raise RuntimeError('Application context not initialized')
    return app_ctx


def set_user(user_type: AppContextUserType, user_id: str | None = None) -> None:
    app_ctx = _require()
    app_ctx['user_type'] = user_type
    app_ctx['user_id'] = user_id
    sentry_sdk.set_user({'id': user_id})


def set_request_id(request_id: str) -> None:
    _require()['request_id'] = request_id
    sentry_sdk.set_tag('request_id', request_id)


def get_safe_request_id() -> str | None:
    app_ctx = _app_context.get()
    return app_ctx.get('request_id') if app_ctx else None


def get_safe_user_id() -> str | None:
    app_ctx = _app_context.get()
    return app_ctx.get('user_id') if app_ctx else None


def get_safe_breadcrumb() -> str | None:
    app_ctx = _app_context.get()
    return app_ctx.get('breadcrumb') if app_ctx else None
