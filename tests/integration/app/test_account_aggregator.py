import pytest

from salesdesk.app.accounts.constants import DealStageEnum
from salesdesk.app.accounts.domains import AccountAnalytics, DashboardSummary
from salesdesk.app.accounts.service import AccountAggregator, get_dashboard_summary
from salesdesk.app.demos.constants import DemoStatusEnum
from salesdesk.common.date_range import parse_date_bounds
from tests.utils import at


@pytest.fixture
def aggregator() -> AccountAggregator:
    return AccountAggregator.factory()


@pytest.fixture
def january_accounts(basic_user, admin_user, create_account):
    """
    basic_user: created in Jan, one of them WON in Jan and one LOST in Feb
    admin_user: created in Feb
    plus a deleted account that should never count
    """
    create_account(basic_user.id, created_at=at(2024, 1, 5), updated_at=at(2024, 1, 5))
    create_account(
        basic_user.id,
        created_at=at(2024, 1, 10),
        updated_at=at(2024, 1, 20),
        deal_stage=DealStageEnum.WON,
        closed_at=at(2024, 1, 20),
    )
    create_account(
        basic_user.id,
        created_at=at(2024, 1, 15),
        updated_at=at(2024, 2, 3),
        deal_stage=DealStageEnum.LOST,
        closed_at=at(2024, 2, 3),
    )
    create_account(admin_user.id, created_at=at(2024, 2, 1), updated_at=at(2024, 2, 1))
    create_account(basic_user.id, created_at=at(2024, 1, 6), updated_at=at(2024, 1, 6), is_deleted=True)


def test_lifetime_totals(aggregator, january_accounts):
    analytics = aggregator.get_account_analytics(scope=None, bounds=parse_date_bounds(None, None))

    assert analytics == AccountAnalytics(created=4, modified=4, booked=1, lost=1)


def test_won_without_closed_at_is_not_booked(aggregator, basic_user, create_account):
    create_account(basic_user.id, deal_stage=DealStageEnum.WON, closed_at=None)

    analytics = aggregator.get_account_analytics(scope=None, bounds=parse_date_bounds(None, None))

    assert analytics.booked == 0
    assert analytics.created == 1


def test_bounded_counters_use_their_own_timestamp(aggregator, january_accounts):
    bounds = parse_date_bounds('2024-01-01', '2024-01-31')

    analytics = aggregator.get_account_analytics(scope=None, bounds=bounds)

    # Created in Jan: 3, updated in Jan: 2, won in Jan: 1, lost in Feb: 0
    assert analytics == AccountAnalytics(created=3, modified=2, booked=1, lost=0)


def test_half_open_bounds(aggregator, january_accounts):
    analytics = aggregator.get_account_analytics(scope=None, bounds=parse_date_bounds('2024-02-01', None))

    assert analytics == AccountAnalytics(created=1, modified=2, booked=0, lost=1)


def test_boundaries_are_inclusive(aggregator, basic_user, create_account):
    create_account(basic_user.id, created_at=at(2024, 3, 1), updated_at=at(2024, 3, 1))
    create_account(basic_user.id, created_at=at(2024, 3, 31, 23, 59, 59), updated_at=at(2024, 3, 31, 23, 59, 59))
    create_account(basic_user.id, created_at=at(2024, 4, 1), updated_at=at(2024, 4, 1))

    analytics = aggregator.get_account_analytics(scope=None, bounds=parse_date_bounds('2024-03-01', '2024-03-31'))

    assert analytics.created == 2


def test_scope_limits_to_creators(aggregator, january_accounts, basic_user, admin_user):
    bounds = parse_date_bounds(None, None)

    basic_only = aggregator.get_account_analytics(scope=frozenset([basic_user.id]), bounds=bounds)
    admin_only = aggregator.get_account_analytics(scope=frozenset([admin_user.id]), bounds=bounds)

    assert basic_only.created == 3
    assert admin_only.created == 1
    assert basic_only.created + admin_only.created == 4


def test_empty_store_reports_zeros(aggregator):
    analytics = aggregator.get_account_analytics(scope=None, bounds=parse_date_bounds('2024-01-01', '2024-01-31'))

    assert analytics == AccountAnalytics()


def test_dashboard_summary(basic_user, admin_user, create_account, create_demo):
    live = create_account(basic_user.id)
    gone = create_account(basic_user.id, is_deleted=True)
    create_account(admin_user.id)

    create_demo(live.id, basic_user.id, status=DemoStatusEnum.SCHEDULED)
    create_demo(
        live.id,
        admin_user.id,
        done_by_user_id=basic_user.id,
        status=DemoStatusEnum.COMPLETED,
        done_at=at(2024, 1, 1),
    )
    create_demo(live.id, basic_user.id, status=DemoStatusEnum.CANCELLED)
    create_demo(live.id, basic_user.id, status=DemoStatusEnum.SCHEDULED, is_deleted=True)
    create_demo(gone.id, basic_user.id, status=DemoStatusEnum.SCHEDULED)

    assert get_dashboard_summary(None) == DashboardSummary(
        total_accounts_created=2,
        demos_scheduled=1,
        demos_completed=1,
    )
    assert get_dashboard_summary(frozenset([admin_user.id])) == DashboardSummary(
        total_accounts_created=1,
        demos_scheduled=0,
        demos_completed=1,
    )
