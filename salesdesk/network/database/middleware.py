from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.routing import BaseRoute, Match
from starlette.types import ASGIApp

from salesdesk.network.database.decorator import route_database_mode_checker
from salesdesk.network.database.session import DatabaseMode, db


class HTTPSessionManagerMiddleware(BaseHTTPMiddleware):
    """
    Opens one session per request and closes it once the response is ready.
    Metrics routes are flagged read-only so each request reads from a single
    snapshot on the replica. Error responses never commit.
    """

    def __init__(self, app: ASGIApp, commit_on_success: bool = True):
        super().__init__(app)
        self.commit_on_success = commit_on_success
        # (method, path) -> mode, the route table is fixed once the app is built
        self._modes: dict[tuple[str, str], DatabaseMode] = {}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        with db(commit_on_success=self.commit_on_success, mode=self._database_mode(request)):
            response = await call_next(request)
            if response.status_code >= 400:
                db.session.rollback()

        return response

    def _database_mode(self, request: Request) -> DatabaseMode:
        # Starlette matches routes after middlewares run so we match here ourselves
        # https://github.com/encode/starlette/issues/685
        key = (request.method, request.url.path)
        if key in self._modes:
            return self._modes[key]

        route = self._match_route(request)
        mode = route_database_mode_checker(route)
        if route is not None:
            # Only matched paths are cached
            self._modes[key] = mode
        return mode

    @staticmethod
    def _match_route(request: Request) -> BaseRoute | None:
        for route in request.app.routes:
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return route
        return None
