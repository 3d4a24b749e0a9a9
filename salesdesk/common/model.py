from datetime import datetime
from importlib import import_module
from typing import Any

from loguru import logger
from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from salesdesk import settings
from salesdesk.common.utils import generate_uuid, naive_utcnow
from salesdesk.network.database.repository.mixin import (
    CreateDomainType,
    ReadDomainType,
    RepositoryMixin,
)


class BaseModel(DeclarativeBase, RepositoryMixin[ReadDomainType, CreateDomainType]):
    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String(length=36), primary_key=True, default=generate_uuid)

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime, default=naive_utcnow, nullable=False, index=True)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(id={self.id!r})'


def import_model_modules() -> list[Any]:
    """
    Used by things like test setup and the shell to bring in the relevant models
    Looks for `models.py` in directories registered.
    """
    model_modules = []
    for app in settings.BOUNDARIES:
        import_path = f'{settings.BASE_MODULE}.{app}.models'
        logger.debug(f'importing: {import_path}')
        module = import_module(import_path)
        model_modules.append(module)

    return model_modules
