from pydantic import EmailStr, model_validator

from salesdesk.common.domain import BaseDomain
from salesdesk.core.authorization.constants import Role


class UserRead(BaseDomain):
    id: str
    display_name: str | None = None
    email: str
    is_active: bool = True
    is_deleted: bool = False
    role: Role = Role.BASIC


class UserCreate(BaseDomain):
    display_name: str | None = None
    email: EmailStr
    is_active: bool = True
    is_deleted: bool = False
    role: Role = Role.BASIC

    @model_validator(mode='after')
    def return_type_validator(self):
        self.display_name = self.display_name.strip() if self.display_name else None
        return self
