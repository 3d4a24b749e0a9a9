import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, or_, true
from sqlalchemy.orm import Mapped, mapped_column

from salesdesk.app.demos.constants import DemoStatusEnum
from salesdesk.app.demos.domains import DemoCreate, DemoRead
from salesdesk.common.model import BaseModel
from salesdesk.common.utils import naive_utcnow
from salesdesk.network.database.repository.mixin import NotDeletedManager


class Demo(BaseModel[DemoRead, DemoCreate]):
    account_id: Mapped[str] = mapped_column(ForeignKey('account.id'), index=True, nullable=False)
    # The user credited with the demo
    aligned_by_user_id: Mapped[str] = mapped_column(ForeignKey('user.id'), index=True, nullable=False)
    done_by_user_id: Mapped[Optional[str]] = mapped_column(ForeignKey('user.id'), index=True, nullable=True)
    status: Mapped[str] = mapped_column(String(length=20), default=DemoStatusEnum.SCHEDULED.value, nullable=False)
    scheduled_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=naive_utcnow, nullable=False, index=True)
    done_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True, index=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __read_domain__ = DemoRead
    __create_domain__ = DemoCreate
    query_manager = NotDeletedManager

    @classmethod
    def visible_to(cls, scope: Optional[frozenset[str]]):
        """
        A demo belongs to whoever aligned it and whoever ran it
        """
        if scope is None:
            return true()
        return or_(cls.aligned_by_user_id.in_(scope), cls.done_by_user_id.in_(scope))
