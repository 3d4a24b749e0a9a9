import time
import uuid

from fastapi import status
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request

from salesdesk.common import context

REQUEST_ID_HEADER = 'X-Request-ID'


def get_user_ip_address(request: Request) -> str:
    """
    First hop of "x-forwarded-for", the header lists every proxy on the way in
    """
    forwarded_for = request.headers.get('x-forwarded-for') or ''
    return forwarded_for.split(',')[0].strip()


def _request_log_meta(request: Request, started_at: float, status_code: int) -> dict:
    return dict(
        http_status_code=status_code,
        http_method=request.method,
        endpoint=request.url.path,
        query=request.url.query,
        duration=round(time.perf_counter() - started_at, 3),
        user_agent=request.headers.get('user-agent', 'unknown'),
        user_ip=get_user_ip_address(request),
        client_host=request.client.host if request.client else '',
    )


class RequestResponseMiddleware(BaseHTTPMiddleware):
    """
    Tags the request with an id (reusing one assigned upstream), binds it to
    every log line written while handling the request and echoes it back.
    Writes one summary line per request.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        started_at = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        context.set_request_id(request_id)

        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
                logger.error(
                    f'{request.method} {request.url.path} {status_code}',
                    **_request_log_meta(request, started_at, status_code),
                )
                raise

            if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                log = logger.error
            elif response.status_code >= status.HTTP_400_BAD_REQUEST:
                log = logger.warning
            else:
                log = logger.info
            log(
                f'{request.method} {request.url.path} {response.status_code}',
                **_request_log_meta(request, started_at, response.status_code),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
