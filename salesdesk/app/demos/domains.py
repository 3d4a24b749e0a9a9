import datetime

from pydantic import Field

from salesdesk.app.demos.constants import DemoStatusEnum
from salesdesk.common.domain import BaseDomain
from salesdesk.common.utils import naive_utcnow


class DemoRead(BaseDomain):
    id: str
    account_id: str
    aligned_by_user_id: str
    done_by_user_id: str | None = None
    status: DemoStatusEnum
    scheduled_at: datetime.datetime
    done_at: datetime.datetime | None = None
    is_deleted: bool = False


class DemoCreate(BaseDomain):
    account_id: str
    aligned_by_user_id: str
    done_by_user_id: str | None = None
    status: DemoStatusEnum = DemoStatusEnum.SCHEDULED
    scheduled_at: datetime.datetime = Field(default_factory=naive_utcnow)
    # Only set once the demo is Completed
    done_at: datetime.datetime | None = None
    is_deleted: bool = False


class DemosBySize(BaseDomain):
    """
    Demo counts per headcount bucket. Accounts without a headcount are counted
    internally but not reported.
    """

    little: int = 0
    small: int = 0
    medium: int = 0
    enterprise: int = 0
