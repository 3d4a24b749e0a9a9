from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.errors import ServerErrorMiddleware

from salesdesk import settings
from salesdesk.common.exceptions import (
    APIException,
    InternalException,
    api_exception_handler,
    inbound_validation_exception_handler,
    internal_exception_handler,
)
from salesdesk.common.middleware import HTTPAppContextMiddleware
from salesdesk.common.request import RequestResponseMiddleware
from salesdesk.common.security_headers import SecurityHeadersMiddleware
from salesdesk.network.database.middleware import HTTPSessionManagerMiddleware
from salesdesk.network.http.router import api_router

# Hit every few seconds by the load balancer
UNTRACED_PATHS = {'/healthcheck/api', '/healthcheck/database'}


def traces_sampler(sampling_context: dict) -> float:
    asgi_scope = sampling_context.get('asgi_scope') or {}
    if asgi_scope.get('path') in UNTRACED_PATHS:
        return 0
    return settings.SENTRY_DEFAULT_SAMPLE_RATE


def configure_sentry() -> None:
    if settings.USE_MOCK_SENTRY_CLIENT:
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        # Client errors are expected traffic, not incidents
        ignore_errors=[APIException],
        integrations=[StarletteIntegration(), FastApiIntegration()],
        traces_sampler=traces_sampler,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'{app.title} is ready!')
    if settings.IS_LOCAL:
        logger.info(f'check out API docs here: {settings.HOST}/docs')
    yield
    logger.info('💀 Shutting down!')


def add_middlewares(app: FastAPI) -> None:
    # add_middleware inserts at 0, the last one added runs first
    if settings.ENABLE_SECURITY_HEADERS:
        app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(HTTPSessionManagerMiddleware, commit_on_success=settings.ATOMIC_REQUESTS)
    app.add_middleware(RequestResponseMiddleware)
    app.add_middleware(HTTPAppContextMiddleware)

    if settings.DEBUG:
        app.add_middleware(ServerErrorMiddleware, debug=True)

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=settings.CORS_ALLOWED_METHODS,
            allow_headers=settings.CORS_ALLOWED_HEADERS,
        )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, inbound_validation_exception_handler)
    app.add_exception_handler(InternalException, internal_exception_handler)
    app.add_exception_handler(APIException, api_exception_handler)


configure_sentry()

server = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan,
    redirect_slashes=False,
    generate_unique_id_function=lambda route: route.name,
    openapi_url=f'{settings.API_PREFIX}/openapi.json' if settings.IS_LOCAL else None,
    docs_url='/docs' if settings.IS_LOCAL else None,
    redoc_url=None,
    separate_input_output_schemas=False,
)
add_middlewares(server)
add_exception_handlers(server)
server.include_router(api_router, prefix=settings.API_PREFIX)
