from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request

from salesdesk.common import context


class HTTPAppContextMiddleware(BaseHTTPMiddleware):
    """
    Every request gets a fresh application context. Guards fill in the user
    once the caller has been identified.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        token = context.initialize(
            user_type=context.AppContextUserType.UNKNOWN,
            breadcrumb=f'{request.method} {request.url.path}',
        )
        try:
            return await call_next(request)
        finally:
            context.reset(token)
