import datetime
from functools import reduce
from typing import Iterable

from loguru import logger
from sqlalchemy import func

from salesdesk.app.accounts.models import Account, AccountSize
from salesdesk.app.demos.constants import DemoStatusEnum
from salesdesk.app.demos.models import Demo
from salesdesk.app.leaderboard.constants import DEFAULT_USER_NAME, SizeCategoryEnum
from salesdesk.app.leaderboard.domains import DemoBreakdown, LeaderboardResponse, LeaderboardUser, Scoring
from salesdesk.common.date_range import DateRange, resolve_period
from salesdesk.common.utils import as_naive_utc
from salesdesk.core.user import UserService
from salesdesk.network.database import db


def classify_size_category(size_name: str | None) -> SizeCategoryEnum:
    """
    Maps an assigned size name onto a scoring category. Missing or unknown
    names score as small.
    """
    key = (size_name or '').strip().lower()
    if key == SizeCategoryEnum.MEDIUM.value:
        return SizeCategoryEnum.MEDIUM
    if key == SizeCategoryEnum.ENTERPRISE.value:
        return SizeCategoryEnum.ENTERPRISE
    if key != SizeCategoryEnum.SMALL.value:
        logger.debug(f'demo account size {size_name!r} scored as small')
    return SizeCategoryEnum.SMALL


def tally_demos(rows: Iterable[tuple[str, str | None]]) -> dict[str, DemoBreakdown]:
    """
    Folds (user_id, size name) rows into a breakdown per user
    """

    def _add(tally: dict[str, DemoBreakdown], row: tuple[str, str | None]) -> dict[str, DemoBreakdown]:
        user_id, size_name = row
        breakdown = tally.get(user_id, DemoBreakdown()).add(classify_size_category(size_name))
        return {**tally, user_id: breakdown}

    return reduce(_add, rows, {})


def rank_users(users: Iterable[LeaderboardUser]) -> list[LeaderboardUser]:
    """
    Most points first, then most demos, then name
    """
    return sorted(users, key=lambda user: (-user.points, -user.demos.total, user.name))


class LeaderboardEngine:
    @staticmethod
    def get_leaderboard(period: str | None, now: datetime.datetime | None = None) -> LeaderboardResponse:
        """
        Everyone's standing for the current week, month or quarter. Rankings are
        shared by the whole team so no visibility scope applies.
        """
        date_range = resolve_period(period, now=now)
        scoring = Scoring()

        user_names = LeaderboardEngine._get_active_user_names()
        accounts_by_user = LeaderboardEngine._count_accounts_created(date_range)
        demos_by_user = tally_demos(LeaderboardEngine._list_completed_demos(date_range))

        users = []
        for user_id, name in user_names.items():
            accounts_created = accounts_by_user.get(user_id, 0)
            demos = demos_by_user.get(user_id, DemoBreakdown())
            points = scoring.score(accounts_created=accounts_created, demos=demos)
            if points <= 0:
                continue

            users.append(
                LeaderboardUser(
                    user_id=user_id,
                    name=name,
                    accounts_created=accounts_created,
                    demos=demos,
                    points=points,
                )
            )

        ranked = rank_users(users)
        logger.info(
            f'leaderboard computed for {date_range.period}',
            start=date_range.start_date,
            end=date_range.end_date,
            active_users=len(user_names),
            ranked_users=len(ranked),
        )

        return LeaderboardResponse(
            period=date_range.period,
            start_date=date_range.start_date,
            end_date=date_range.end_date,
            users=ranked,
            scoring=scoring,
        )

    @staticmethod
    def _get_active_user_names() -> dict[str, str]:
        users = UserService.factory().list_active_users()
        return {
            user.id: user.display_name if user.display_name and user.display_name.strip() else DEFAULT_USER_NAME
            for user in users
        }

    @staticmethod
    def _count_accounts_created(date_range: DateRange) -> dict[str, int]:
        results = (
            db.session.query(
                Account.created_by_user_id,
                func.count(Account.id).label('accounts_created'),
            )
            .filter(
                Account.is_deleted == False,  # noqa: E712
                Account.created_at >= as_naive_utc(date_range.start),
                Account.created_at <= as_naive_utc(date_range.end),
            )
            .group_by(Account.created_by_user_id)
            .all()
        )
        return {row.created_by_user_id: row.accounts_created for row in results}

    @staticmethod
    def _list_completed_demos(date_range: DateRange) -> list[tuple[str, str | None]]:
        """
        (aligned by user, account size name) for each demo completed in the period.
        Demos on deleted or missing accounts are left out, a missing size scores as small.
        """
        results = (
            db.session.query(Demo.aligned_by_user_id, AccountSize.name)
            .select_from(Demo)
            .join(Account, Demo.account_id == Account.id)
            .outerjoin(AccountSize, Account.account_size_id == AccountSize.id)
            .filter(
                Demo.is_deleted == False,  # noqa: E712
                Account.is_deleted == False,  # noqa: E712
                Demo.status == DemoStatusEnum.COMPLETED.value,
                Demo.done_at.is_not(None),
                Demo.done_at >= as_naive_utc(date_range.start),
                Demo.done_at <= as_naive_utc(date_range.end),
            )
            .all()
        )
        return [(row[0], row[1]) for row in results]
