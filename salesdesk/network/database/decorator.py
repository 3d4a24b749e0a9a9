from starlette.routing import BaseRoute, Route

from salesdesk.network.database.session import DatabaseMode

_ROUTE_DATABASE_MODE_KEY = '_database_mode'


def read_only_route(func):
    """
    Flags an endpoint so its request session is opened against the read-only
    database in a single snapshot transaction. Order relative to the router
    decorator does not matter, the flag lives on the function itself.

    Example:
        @read_only_route
        @router.get('/demos-by-size')
        def get_demos_by_size():
            ...
    """
    setattr(func, _ROUTE_DATABASE_MODE_KEY, DatabaseMode.READ_ONLY)
    return func


def route_database_mode_checker(route: BaseRoute | None) -> DatabaseMode:
    """
    Anything that is not a flagged endpoint gets read / write
    """
    if not isinstance(route, Route):
        return DatabaseMode.READ_WRITE
    return getattr(route.endpoint, _ROUTE_DATABASE_MODE_KEY, DatabaseMode.READ_WRITE)
