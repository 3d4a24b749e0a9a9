from typing import Any

import sentry_sdk
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


def _error_body(code: str, message: str, **extra: Any) -> dict[str, Any]:
    return {'error': {'code': code, 'message': message, **extra}}


class InternalException(Exception):
    """
    All internal exceptions should inherit from this. We are handled
    vaguely publicly
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal failure.'
    default_code = 'INTERNAL_ERROR'

    def __init__(self, message: str | None = None, context: dict[Any, Any] | Any = None):
        self.message = message or self.default_detail
        self.context = context or dict()

    def __str__(self) -> str:
        return f'{self.__class__.__name__}({self.message})'


class APIException(Exception):
    """
    API view layer exceptions, rendered as {"error": {"code", "message"}}
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Request.'
    default_code = 'INVALID_REQUEST'

    # Match the internal interface message
    def __init__(self, message: str | None = None, code: int | None = None, error_type: str | None = None):
        self.message = message or self.default_detail
        self.code = code or self.status_code
        self.error_type = error_type or self.default_code

    def __str__(self) -> str:
        return f'{self.__class__.__name__}({self.error_type}: {self.message})'


class AuthenticationError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Not authenticated'
    default_code = 'UNAUTHORIZED'


class ValidationError(APIException):
    """
    Malformed or out of policy input. Raised before any aggregation runs.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Request.'
    default_code = 'INVALID_REQUEST'


class InvalidPeriod(ValidationError):
    default_detail = 'Period must be one of: weekly, monthly, quarterly'
    default_code = 'INVALID_PERIOD'


class InvalidDateRange(ValidationError):
    default_detail = 'Date range cannot exceed 12 months.'
    default_code = 'INVALID_DATE_RANGE'


async def internal_exception_handler(request: Request, exc: InternalException) -> JSONResponse:
    """
    Registered at the app level, details stay in the logs
    """
    logger.exception(exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(_error_body(exc.default_code, exc.message)),
    )


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """
    Registered at the app level
    """
    return JSONResponse(
        status_code=exc.code,
        content=jsonable_encoder(_error_body(exc.error_type, exc.message)),
    )


async def inbound_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    This catches pydantic validation errors and is registered at the app level
    """
    details = exc.errors()

    # We want to know about these:
    sentry_sdk.capture_exception(exc)

    modified_details = []
    for error in details:
        modified_details.append(
            {
                'loc': error['loc'],
                'message': error['msg'],
                'input': error.get('input'),
                'type': error['type'],
            }
        )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(
            _error_body('INVALID_REQUEST', 'Request validation failed.', details=modified_details)
        ),
    )
