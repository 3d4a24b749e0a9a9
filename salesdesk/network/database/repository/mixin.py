from typing import TYPE_CHECKING, Any, Generic, List, Optional, Type, TypeVar, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import UnaryExpression

from salesdesk.common.domain import BaseDomain
from salesdesk.network.database.session import db

if TYPE_CHECKING:
    from salesdesk.common.model import BaseModel


class BaseQueryManager:
    """
    Builds the base query a repository reads from. Keyword filters are
    equality checks on columns of the same name.
    """

    def __init__(self, model: Type['BaseModel']) -> None:
        self.model = model

    def get_query(self, *clauses: Any, **filters: Any) -> 'Query[BaseModel]':
        query = self.model._get_session().query(self.model)
        if clauses:
            query = query.where(*clauses)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)
        return query


class NotDeletedManager(BaseQueryManager):
    """
    Hides soft deleted rows from every repository read
    """

    def get_query(self, *clauses: Any, **filters: Any) -> 'Query[BaseModel]':
        is_not_deleted = self.model.is_deleted == False  # type: ignore[attr-defined]  # noqa: E712
        return super().get_query(*clauses, is_not_deleted, **filters)


ReadDomainType = TypeVar('ReadDomainType', bound=BaseDomain)
CreateDomainType = TypeVar('CreateDomainType', bound=BaseDomain)


class RepositoryMixin(Generic[ReadDomainType, CreateDomainType]):
    """
    Models are read and written through domains only: create domains in,
    read domains out (validated from the ORM instance).
    """

    __create_domain__: Type[CreateDomainType] = NotImplemented
    __read_domain__: Type[ReadDomainType] = NotImplemented
    query_manager: Type[BaseQueryManager] = BaseQueryManager

    @classmethod
    def _get_session(cls) -> Session:
        return db.session

    @classmethod
    def get_query(cls, *clauses: Any, **filters: Any) -> 'Query[BaseModel]':
        return cls.query_manager(cls).get_query(*clauses, **filters)  # type: ignore[arg-type]

    @classmethod
    def list(
        cls,
        *clauses: Any,
        ordering: Optional[List[Union[str, UnaryExpression]]] = None,
        **filters: Any,
    ) -> List[ReadDomainType]:
        query = cls.get_query(*clauses, **filters)
        if ordering:
            query = query.order_by(*cls._parse_ordering(ordering))
        return [cls._to_domain(obj) for obj in query]

    @classmethod
    def count(cls, *clauses: Any, **filters: Any) -> int:
        return int(cls.get_query(*clauses, **filters).count())

    @classmethod
    def create(cls, domain_obj: CreateDomainType) -> ReadDomainType:
        session = cls._get_session()
        instance = cls(**domain_obj.to_dict())
        session.add(instance)
        try:
            session.flush([instance])
        except IntegrityError:
            session.rollback()
            raise

        return cls._to_domain(instance)

    @classmethod
    def _parse_ordering(cls, ordering: List[Union[str, UnaryExpression]]) -> List[UnaryExpression]:
        """
        Accepts column names, '-' prefixed for descending, or ready made expressions:
        ['-created_at', 'display_name']
        """
        order_expressions = []
        for order in ordering:
            if not isinstance(order, str):
                order_expressions.append(order)
            elif order.startswith('-'):
                order_expressions.append(getattr(cls, order[1:]).desc())
            else:
                order_expressions.append(getattr(cls, order).asc())
        return order_expressions

    @classmethod
    def _to_domain(cls, instance: Any) -> ReadDomainType:
        return cls.__read_domain__.model_validate(instance)
