from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from salesdesk import settings

# The API only ever serves per user JSON
SECURITY_HEADERS = {
    'X-Frame-Options': 'DENY',
    'X-Content-Type-Options': 'nosniff',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
    'Cache-Control': 'no-store',
}
HSTS_HEADER = ('Strict-Transport-Security', 'max-age=31536000; includeSubDomains; preload')


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        if not settings.ENABLE_SECURITY_HEADERS:
            return response

        response.headers.update(SECURITY_HEADERS)
        if settings.ENABLE_HSTS:
            name, value = HSTS_HEADER
            response.headers[name] = value
        return response
