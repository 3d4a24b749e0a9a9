from salesdesk.common.enum import BaseEnum


class Role(BaseEnum):
    """
    Closed set of caller roles. Anything we do not recognise is treated as Basic
    so an unexpected claim can only ever narrow what a caller sees.
    """

    ADMIN = 'Admin'
    BASIC = 'Basic'

    @classmethod
    def parse(cls, raw: str | None) -> 'Role':
        if raw is not None and raw.strip().lower() == cls.ADMIN.value.lower():
            return cls.ADMIN
        return cls.BASIC
