from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from salesdesk.common.model import BaseModel
from salesdesk.core.authorization.constants import Role
from salesdesk.core.user.domains import UserCreate, UserRead


class User(BaseModel[UserRead, UserCreate]):
    display_name: Mapped[Optional[str]] = mapped_column(String(length=200), nullable=True)
    email: Mapped[str] = mapped_column(String(length=320), unique=True, index=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    role: Mapped[str] = mapped_column(String(length=20), default=Role.BASIC.value, nullable=False)

    __read_domain__ = UserRead
    __create_domain__ = UserCreate
