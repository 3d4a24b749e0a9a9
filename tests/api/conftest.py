from contextlib import contextmanager
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from starlette.middleware import Middleware

from salesdesk.core.authentication import CurrentIdentity, get_current_identity
from salesdesk.core.authorization.constants import Role


@contextmanager
def _make_persistent_client(dependency_overrides: Dict[Callable, Callable] | None = None):
    """
    Helper to create a persistent TestClient with optional dependency overrides.

    Removes HTTPSessionManagerMiddleware so requests run inside the test's
    session and can see the rows the test created.
    """
    from salesdesk.network.database.middleware import HTTPSessionManagerMiddleware
    from salesdesk.network.http.server import server

    @contextmanager
    def _temporary_remove_middleware(target_name: str):
        """
        Temporarily remove middleware and restore it after use
        We use this to mimic a persistent client
        """
        # Store original middleware state
        original_middleware = server.user_middleware.copy()

        # Remove from server
        new_middlewares: list[Middleware] = []
        for middleware in server.user_middleware:
            if not middleware.cls.__name__ == target_name:
                new_middlewares.append(middleware)
        server.user_middleware = new_middlewares
        server.middleware_stack = server.build_middleware_stack()

        try:
            yield server
        finally:
            # Restore original middleware state
            server.user_middleware = original_middleware
            server.middleware_stack = server.build_middleware_stack()

    # Apply dependency overrides if provided
    if dependency_overrides:
        for dependency, override in dependency_overrides.items():
            server.dependency_overrides[dependency] = override

    try:
        with _temporary_remove_middleware(HTTPSessionManagerMiddleware.__name__) as modified_server:
            with TestClient(modified_server) as client:
                yield client
    finally:
        # Clean up dependency overrides
        if dependency_overrides:
            for dependency in dependency_overrides:
                server.dependency_overrides.pop(dependency, None)


@pytest.fixture(scope='module')
def client() -> TestClient:
    from salesdesk.network.http.server import server

    with TestClient(server) as c:
        yield c


@pytest.fixture(scope='function')
def persistent_client() -> TestClient:
    """
    TestClient that shares the test's session, authenticate with real bearer tokens
    """
    with _make_persistent_client() as client:
        yield client


@pytest.fixture(scope='function')
def admin_client(admin_user) -> TestClient:
    """
    Persistent client authenticated as an admin
    """

    def _admin_identity():
        return CurrentIdentity(user_id=admin_user.id, role=Role.ADMIN)

    with _make_persistent_client(dependency_overrides={get_current_identity: _admin_identity}) as client:
        yield client


@pytest.fixture(scope='function')
def basic_client(basic_user) -> TestClient:
    """
    Persistent client authenticated as a basic user
    """

    def _basic_identity():
        return CurrentIdentity(user_id=basic_user.id, role=Role.BASIC)

    with _make_persistent_client(dependency_overrides={get_current_identity: _basic_identity}) as client:
        yield client
