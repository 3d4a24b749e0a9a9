import enum
from typing import Any


class BaseEnum(str, enum.Enum):
    """
    String valued enum, compares equal to and serialises as its value
    """

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def has(cls, value: Any) -> bool:
        return value in cls._value2member_map_

    @classmethod
    def list_all(cls) -> list[str]:
        return [member.value for member in cls]
