from collections import Counter

from loguru import logger
from sqlalchemy import and_, or_

from salesdesk.app.accounts.constants import SizeBucketEnum
from salesdesk.app.accounts.models import Account
from salesdesk.app.accounts.service import classify_number_of_users, within_bounds
from salesdesk.app.demos.constants import DemoStatusEnum
from salesdesk.app.demos.domains import DemosBySize
from salesdesk.app.demos.models import Demo
from salesdesk.common.date_range import DateBounds
from salesdesk.core.authorization.scope import VisibilityScope
from salesdesk.network.database import db


class DemoAggregator:
    @classmethod
    def factory(cls) -> 'DemoAggregator':
        return cls()

    def _list_account_headcounts(self, scope: VisibilityScope, bounds: DateBounds) -> list[int | None]:
        """
        Headcount of the owning account for every demo that counts: scheduled
        demos by when they are scheduled, completed demos by when they were done.
        """
        scheduled = and_(
            Demo.status == DemoStatusEnum.SCHEDULED.value,
            within_bounds(Demo.scheduled_at, bounds),
        )
        completed = and_(
            Demo.status == DemoStatusEnum.COMPLETED.value,
            within_bounds(Demo.done_at, bounds),
        )

        rows = (
            db.session.query(Account.number_of_users)
            .select_from(Demo)
            .join(Account, Demo.account_id == Account.id)
            .filter(
                Demo.is_deleted == False,  # noqa: E712
                Account.is_deleted == False,  # noqa: E712
                Demo.visible_to(scope),
                or_(scheduled, completed),
            )
            .all()
        )
        return [row.number_of_users for row in rows]

    def get_demos_by_size(self, scope: VisibilityScope, bounds: DateBounds) -> DemosBySize:
        headcounts = self._list_account_headcounts(scope=scope, bounds=bounds)
        counts = Counter(classify_number_of_users(headcount) for headcount in headcounts)

        if counts[SizeBucketEnum.NONE]:
            logger.debug(f'{counts[SizeBucketEnum.NONE]} demos belong to accounts without a headcount')

        demos_by_size = DemosBySize(
            little=counts[SizeBucketEnum.LITTLE],
            small=counts[SizeBucketEnum.SMALL],
            medium=counts[SizeBucketEnum.MEDIUM],
            enterprise=counts[SizeBucketEnum.ENTERPRISE],
        )
        logger.info('demos by size computed', demos=len(headcounts), **demos_by_size.to_dict())
        return demos_by_size
