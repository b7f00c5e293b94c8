"""
Content object index.

ItemSet is the query handle the search service builds on: predicates are
chained with and_ / and_not, and the terminal calls (count, facet, page,
ids) hit the backend. Builders never mutate; each returns a new set.

SqlObjectIndex renders those predicates onto the content_objects and
content_links tables.
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy import case, false, not_, or_, and_, select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import SearchBackendUnavailable
from app.models.content import ContentLink, ContentObject
from app.schemas.search import ContentItem, FacetCount

logger = logging.getLogger(__name__)

Fields = Union[str, Sequence[str]]

ANY_FIELD = "*"
OBJ_CLASS_FIELD = "_obj_class"


class Operator(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    LINKS_TO = "links_to"
    IS_GREATER_THAN = "is_greater_than"


def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        return [value]
    return list(value)


class ItemSet(ABC):
    @abstractmethod
    def and_(
        self,
        fields: Fields,
        operator: Operator,
        values: Any,
        boosts: Optional[Mapping[str, int]] = None,
    ) -> "ItemSet":
        """Require any of ``fields`` to match any of ``values``."""

    @abstractmethod
    def and_not(self, fields: Fields, operator: Operator, values: Any) -> "ItemSet":
        """Drop items where any of ``fields`` matches any of ``values``."""

    @abstractmethod
    def order(self, field: str, descending: bool = True) -> "ItemSet":
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def facet(self, field: str, limit: int) -> List[FacetCount]:
        pass

    @abstractmethod
    async def page(self, size: int, offset: int = 0) -> List[ContentItem]:
        pass

    @abstractmethod
    async def ids(self) -> List[str]:
        pass


class ObjectIndex(ABC):
    @abstractmethod
    def where(self, fields: Fields, operator: Operator, values: Any) -> ItemSet:
        pass

    def find(self, content_types: Sequence[str]) -> ItemSet:
        """All objects whose class is one of ``content_types``."""
        return self.where(OBJ_CLASS_FIELD, Operator.EQUALS, list(content_types))


# ============================================
# SQLAlchemy backend
# ============================================

FIELD_COLUMNS = {
    "id": ContentObject.id,
    OBJ_CLASS_FIELD: ContentObject.obj_class,
    "_permalink": ContentObject.permalink,
    "type_facet": ContentObject.type_facet,
    "display": ContentObject.display,
    "search_date": ContentObject.search_date,
    "title": ContentObject.title,
    "name": ContentObject.name,
    "brand_name": ContentObject.brand_name,
    "internal_description": ContentObject.internal_description,
    "description": ContentObject.description,
    "keywords": ContentObject.keywords,
    "subject": ContentObject.subject,
    "body": ContentObject.body,
}

TEXT_FIELDS = (
    "title", "name", "brand_name", "internal_description", "description",
    "keywords", "subject", "body", "_permalink",
)


def _columns(fields: Fields) -> List[Any]:
    names = []
    for name in as_list(fields):
        names.extend(TEXT_FIELDS if name == ANY_FIELD else [name])
    try:
        return [FIELD_COLUMNS[name] for name in names]
    except KeyError as exc:
        raise ValueError(f"Unknown content field: {exc.args[0]}") from exc


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column_predicate(column: Any, operator: Operator, values: List[Any]):
    if operator is Operator.EQUALS:
        return column.in_(values)
    if operator is Operator.CONTAINS:
        return or_(*[column.ilike(f"%{_escape_like(str(v))}%", escape="\\") for v in values])
    if operator is Operator.STARTS_WITH:
        return or_(*[column.startswith(str(v), autoescape=True) for v in values])
    if operator is Operator.IS_GREATER_THAN:
        return or_(*[column > v for v in values])
    raise ValueError(f"Unsupported operator for column match: {operator}")


def _links_to(values: List[Any]):
    target_ids = [getattr(v, "id", v) for v in values]
    linked = select(ContentLink.source_id).where(ContentLink.target_id.in_(target_ids))
    return ContentObject.id.in_(linked)


def _predicate(fields: Fields, operator: Operator, values: Any):
    values = [v for v in as_list(values) if v is not None and v != ""]
    if not values:
        return false()
    if operator is Operator.LINKS_TO:
        return _links_to(values)
    return or_(*[_column_predicate(column, operator, values) for column in _columns(fields)])


def _exclusion(fields: Fields, operator: Operator, values: Any):
    values = [v for v in as_list(values) if v is not None and v != ""]
    if not values:
        return None
    if operator is Operator.LINKS_TO:
        return not_(_links_to(values))
    # NULL columns never match, so they must survive the exclusion
    return and_(*[
        or_(column.is_(None), not_(_column_predicate(column, operator, values)))
        for column in _columns(fields)
    ])


class SqlItemSet(ItemSet):
    def __init__(
        self,
        session: AsyncSession,
        criteria: Tuple[Any, ...] = (),
        scores: Tuple[Any, ...] = (),
        ordering: Tuple[Any, ...] = (),
    ):
        self.session = session
        self.criteria = criteria
        self.scores = scores
        self.ordering = ordering

    def _derive(self, **changes: Any) -> "SqlItemSet":
        state = {"criteria": self.criteria, "scores": self.scores, "ordering": self.ordering}
        state.update(changes)
        return SqlItemSet(self.session, **state)

    def and_(self, fields, operator, values, boosts=None) -> "SqlItemSet":
        operator = Operator(operator)
        scores = self.scores
        if boosts:
            scores = scores + tuple(
                case((_predicate(field, operator, values), weight), else_=0)
                for field, weight in boosts.items()
            )
        return self._derive(criteria=self.criteria + (_predicate(fields, operator, values),), scores=scores)

    def and_not(self, fields, operator, values) -> "SqlItemSet":
        clause = _exclusion(fields, Operator(operator), values)
        if clause is None:
            return self
        return self._derive(criteria=self.criteria + (clause,))

    def order(self, field, descending=True) -> "SqlItemSet":
        column = _columns(field)[0]
        direction = column.desc() if descending else column.asc()
        return self._derive(ordering=self.ordering + (direction.nulls_last(),))

    def count_statement(self):
        return select(func.count()).select_from(ContentObject).where(*self.criteria)

    def facet_statement(self, field: str, limit: int):
        column = _columns(field)[0]
        count_col = func.count().label("count")
        return (
            select(column, count_col)
            .where(*self.criteria)
            .where(column.is_not(None))
            .group_by(column)
            .order_by(count_col.desc(), column)
            .limit(limit)
        )

    def page_statement(self, size: int, offset: int = 0):
        query = select(ContentObject).where(*self.criteria)
        if self.ordering:
            query = query.order_by(*self.ordering)
        elif self.scores:
            relevance = sum(self.scores[1:], self.scores[0])
            query = query.order_by(relevance.desc())
        return query.order_by(ContentObject.id).offset(offset).limit(size)

    async def _execute(self, statement):
        try:
            return await self.session.execute(statement)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Object index query failed: %s", exc)
            raise SearchBackendUnavailable() from exc

    async def count(self) -> int:
        result = await self._execute(self.count_statement())
        return result.scalar() or 0

    async def facet(self, field: str, limit: int) -> List[FacetCount]:
        result = await self._execute(self.facet_statement(field, limit))
        return [FacetCount(value=str(value), count=count) for value, count in result.all()]

    async def page(self, size: int, offset: int = 0) -> List[ContentItem]:
        result = await self._execute(self.page_statement(size, offset))
        return [ContentItem.model_validate(obj) for obj in result.scalars().all()]

    async def ids(self) -> List[str]:
        result = await self._execute(select(ContentObject.id).where(*self.criteria))
        return list(result.scalars().all())


class SqlObjectIndex(ObjectIndex):
    def __init__(self, db: AsyncSession):
        self.db = db

    def where(self, fields, operator, values) -> SqlItemSet:
        return SqlItemSet(self.db).and_(fields, operator, values)
