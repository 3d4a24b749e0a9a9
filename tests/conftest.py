import os
import sys

from sqlalchemy.orm import Session

# Test Environment Overrides will override .env files
# THESE MUST BE IMPORTED BEFORE ANYTHING

EXPECTED_SECRET_KEY = 'test'
os.environ.setdefault('SECRET_KEY', 'test')
os.environ.setdefault('ENVIRONMENT', 'testing')
os.environ.setdefault('COMPANY_NAME', 'TestCompany')
os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('ATOMIC_REQUESTS', 'False')
os.environ.setdefault('ENABLE_HSTS', 'False')
os.environ.setdefault('USE_MOCK_SENTRY_CLIENT', 'True')

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from salesdesk import setup

setup.run()

from unittest import mock

import pytest

from salesdesk.common import context
from salesdesk.common.model import BaseModel
from salesdesk.network.database.session import get_engine

# Add fixtures here
pytest_plugins = [
    'tests.factories.core.user',
    'tests.factories.app.accounts',
    'tests.factories.app.demos',
]

# ruff: noqa: E402
from salesdesk import settings
from salesdesk.app.accounts.models import Account, AccountSize
from salesdesk.app.demos.models import Demo
from salesdesk.core.authorization.constants import Role
from salesdesk.core.user import UserService
from salesdesk.network.database.session import db as session_manager

# When salesdesk files are imported before the above patching, tests will use
# incorrect database settings as well as non mocked services.
if settings.SECRET_KEY != EXPECTED_SECRET_KEY:
    print(settings.SECRET_KEY, EXPECTED_SECRET_KEY)
    raise ValueError(
        'Patching of environment variables failed.\n'
        'This will cause unexpected test failures'
        'Check all salesdesk imports are delayed until after patching.\n'
    )

# The in memory database lives as long as the shared connection
BaseModel.metadata.create_all(get_engine())


@pytest.fixture(autouse=True)
def mock_sentry_capture():
    """
    Ensure nothing makes it to sentry
    """
    with mock.patch('sentry_sdk.capture_exception') as capture_exception:
        yield capture_exception


@pytest.fixture(scope='function', autouse=True)
def db() -> Session:
    # This needs to be set first for fixtures to be able to create
    token = context.initialize(
        user_type=context.AppContextUserType.SYSTEM,
        user_id='user-system',
        breadcrumb='testing',
    )

    with session_manager(commit_on_success=False):
        session = session_manager.session

        # Patch commit() to prevent accidental commits in tests
        # This allows production code to use db.session.commit() naturally
        # without breaking test rollbacks
        def no_op_commit():
            # In tests, flush changes but don't actually commit
            # This makes the changes visible within the transaction
            # but keeps them rollbackable
            session.flush()

        session.commit = no_op_commit

        yield session_manager.session

    session.rollback()
    context.reset(token)


@pytest.fixture(scope='function')
def admin_user(user_factory):
    admin = user_factory.build(email='admin@example.com', display_name='Ada Admin', role=Role.ADMIN)
    return UserService.factory().create_user(admin)


@pytest.fixture(scope='function')
def basic_user(user_factory):
    basic = user_factory.build(email='basic@example.com', display_name='Bo Basic', role=Role.BASIC)
    return UserService.factory().create_user(basic)


@pytest.fixture(scope='function')
def account_sizes(account_size_factory) -> dict[str, str]:
    """
    Size lookup rows keyed by name
    """
    sizes = {}
    for display_order, name in enumerate(['Small', 'Medium', 'Enterprise']):
        size = AccountSize.create(account_size_factory.build(name=name, display_order=display_order))
        sizes[name] = size.id
    return sizes


@pytest.fixture(scope='function')
def create_account(account_factory):
    def _create_account(created_by_user_id: str, **overrides):
        return Account.create(account_factory.build(created_by_user_id=created_by_user_id, **overrides))

    return _create_account


@pytest.fixture(scope='function')
def create_demo(demo_factory):
    def _create_demo(account_id: str, aligned_by_user_id: str, **overrides):
        demo = demo_factory.build(account_id=account_id, aligned_by_user_id=aligned_by_user_id, **overrides)
        return Demo.create(demo)

    return _create_demo
