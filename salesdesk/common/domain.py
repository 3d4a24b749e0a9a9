from typing import Any, Dict, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


BaseDomainConfig = ConfigDict(
    extra='forbid',
    use_enum_values=True,
    from_attributes=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class BaseDomain(BaseModel):
    model_config = BaseDomainConfig

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def to_response_dict(self) -> Dict[str, Any]:
        """
        Camel cased payload matching what the API emits
        """
        return self.model_dump(mode='json', by_alias=True)

    def __repr_str__(self, join_str: str) -> str:  # type: ignore[override]
        tab = '\n    '
        return (
            tab
            + f'{join_str}{tab}'.join(repr(v) if a is None else f'{a}={v!r}' for a, v in self.__repr_args__())
            + '\n'
        )


DataType = TypeVar('DataType')


class DataResponse(BaseDomain, Generic[DataType]):
    """
    Every successful metrics payload is wrapped as {"data": ...}
    """

    data: DataType

