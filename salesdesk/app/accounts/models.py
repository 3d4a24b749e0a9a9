import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column

from salesdesk.app.accounts.constants import DealStageEnum
from salesdesk.app.accounts.domains import AccountCreate, AccountRead, AccountSizeCreate, AccountSizeRead
from salesdesk.common.model import BaseModel
from salesdesk.common.utils import naive_utcnow
from salesdesk.network.database.repository.mixin import NotDeletedManager


class AccountSize(BaseModel[AccountSizeRead, AccountSizeCreate]):
    """
    Lookup of named size categories an account can be assigned to
    """

    name: Mapped[str] = mapped_column(String(length=50), unique=True, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __read_domain__ = AccountSizeRead
    __create_domain__ = AccountSizeCreate


class Account(BaseModel[AccountRead, AccountCreate]):
    company_name: Mapped[str] = mapped_column(String(length=200), nullable=False)
    created_by_user_id: Mapped[str] = mapped_column(ForeignKey('user.id'), index=True, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, default=naive_utcnow, onupdate=naive_utcnow, nullable=False, index=True
    )
    deal_stage: Mapped[str] = mapped_column(String(length=20), default=DealStageEnum.NEW.value, nullable=False)
    # Only set once the deal is WON or LOST
    closed_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True, index=True)
    number_of_users: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    account_size_id: Mapped[Optional[str]] = mapped_column(ForeignKey('accountsize.id'), nullable=True)

    __read_domain__ = AccountRead
    __create_domain__ = AccountCreate
    query_manager = NotDeletedManager

    @classmethod
    def visible_to(cls, scope: Optional[frozenset[str]]):
        if scope is None:
            return true()
        return cls.created_by_user_id.in_(scope)
