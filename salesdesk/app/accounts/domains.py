import datetime

from pydantic import Field

from salesdesk.app.accounts.constants import DealStageEnum
from salesdesk.common.domain import BaseDomain
from salesdesk.common.utils import naive_utcnow


class AccountSizeRead(BaseDomain):
    id: str
    name: str
    display_order: int = 0


class AccountSizeCreate(BaseDomain):
    name: str
    display_order: int = 0


class AccountRead(BaseDomain):
    id: str
    company_name: str
    created_by_user_id: str
    created_at: datetime.datetime
    updated_at: datetime.datetime
    deal_stage: DealStageEnum
    closed_at: datetime.datetime | None = None
    number_of_users: int | None = None
    is_deleted: bool = False
    account_size_id: str | None = None


class AccountCreate(BaseDomain):
    company_name: str
    created_by_user_id: str
    created_at: datetime.datetime = Field(default_factory=naive_utcnow)
    updated_at: datetime.datetime = Field(default_factory=naive_utcnow)
    deal_stage: DealStageEnum = DealStageEnum.NEW
    closed_at: datetime.datetime | None = None
    number_of_users: int | None = None
    is_deleted: bool = False
    account_size_id: str | None = None


class AccountAnalytics(BaseDomain):
    """
    Account counters over one window. Without a window `modified` mirrors `created`.
    """

    created: int = 0
    modified: int = 0
    booked: int = 0
    lost: int = 0


class DashboardSummary(BaseDomain):
    total_accounts_created: int = 0
    demos_scheduled: int = 0
    demos_completed: int = 0
