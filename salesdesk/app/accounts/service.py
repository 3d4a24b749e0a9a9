from loguru import logger
from sqlalchemy import and_, case, func, true

from salesdesk.app.accounts.constants import SIZE_BUCKET_UPPER_BOUNDS, DealStageEnum, SizeBucketEnum
from salesdesk.app.accounts.domains import AccountAnalytics, DashboardSummary
from salesdesk.app.accounts.models import Account
from salesdesk.app.demos.constants import DemoStatusEnum
from salesdesk.app.demos.models import Demo
from salesdesk.common.date_range import DateBounds
from salesdesk.common.utils import as_naive_utc
from salesdesk.core.authorization.scope import VisibilityScope
from salesdesk.network.database import db


def classify_number_of_users(number_of_users: int | None) -> SizeBucketEnum:
    """
    Headcount buckets used by analytics:
        none        missing or <= 0
        little      1 - 9
        small       10 - 24
        medium      25 - 49
        enterprise  50+
    """
    if number_of_users is None:
        return SizeBucketEnum.NONE

    for upper_bound, bucket in SIZE_BUCKET_UPPER_BOUNDS:
        if number_of_users <= upper_bound:
            return bucket
    return SizeBucketEnum.ENTERPRISE


def within_bounds(column, bounds: DateBounds):
    """
    Inclusive range predicate, each side only applied when present
    """
    clauses = [column.is_not(None)]
    if bounds.start is not None:
        clauses.append(column >= as_naive_utc(bounds.start))
    if bounds.end is not None:
        clauses.append(column <= as_naive_utc(bounds.end))
    return and_(*clauses)


def _count_where(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class AccountAggregator:
    @classmethod
    def factory(cls) -> 'AccountAggregator':
        return cls()

    def get_account_analytics(self, scope: VisibilityScope, bounds: DateBounds) -> AccountAnalytics:
        """
        All counters come from a single statement so they always agree with
        each other, even outside a snapshot transaction.
        """
        won = Account.deal_stage == DealStageEnum.WON.value
        lost = Account.deal_stage == DealStageEnum.LOST.value

        if bounds.is_unbounded:
            created = true()
            # No window to compare updates against, lifetime modified mirrors created
            modified = true()
            booked = and_(won, Account.closed_at.is_not(None))
            closed_lost = and_(lost, Account.closed_at.is_not(None))
        else:
            created = within_bounds(Account.created_at, bounds)
            modified = within_bounds(Account.updated_at, bounds)
            booked = and_(won, within_bounds(Account.closed_at, bounds))
            closed_lost = and_(lost, within_bounds(Account.closed_at, bounds))

        row = (
            db.session.query(
                _count_where(created).label('created'),
                _count_where(modified).label('modified'),
                _count_where(booked).label('booked'),
                _count_where(closed_lost).label('lost'),
            )
            .select_from(Account)
            .filter(Account.is_deleted == False, Account.visible_to(scope))  # noqa: E712
            .one()
        )

        analytics = AccountAnalytics(
            created=int(row.created),
            modified=int(row.modified),
            booked=int(row.booked),
            lost=int(row.lost),
        )
        logger.info(
            'account analytics computed',
            scoped_users=None if scope is None else len(scope),
            bounded=not bounds.is_unbounded,
            **analytics.to_dict(),
        )
        return analytics

    def get_dashboard_summary(self, scope: VisibilityScope) -> DashboardSummary:
        """
        Lifetime totals for the dashboard cards. Demos only count while their
        account still exists.
        """
        total_accounts_created = Account.count(Account.visible_to(scope))

        demo_counts = (
            db.session.query(
                _count_where(Demo.status == DemoStatusEnum.SCHEDULED.value).label('scheduled'),
                _count_where(Demo.status == DemoStatusEnum.COMPLETED.value).label('completed'),
            )
            .select_from(Demo)
            .join(Account, Demo.account_id == Account.id)
            .filter(
                Demo.is_deleted == False,  # noqa: E712
                Account.is_deleted == False,  # noqa: E712
                Demo.visible_to(scope),
            )
            .one()
        )

        return DashboardSummary(
            total_accounts_created=total_accounts_created,
            demos_scheduled=int(demo_counts.scheduled),
            demos_completed=int(demo_counts.completed),
        )


def get_dashboard_summary(scope: VisibilityScope) -> DashboardSummary:
    return AccountAggregator.factory().get_dashboard_summary(scope)
