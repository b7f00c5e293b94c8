import math
import re
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, computed_field, field_validator, model_validator

HITS_PER_PAGE = 10
ARTICLE_SCOPES = ("radar", "australian_prescriber")
RECENCY_SORT = "most-recent"

# Bounds keep the OFFSET inside int64 and the age cutoff inside datetime range.
MAX_OFFSET = 1_000_000_000
MAX_AGE_MONTHS = 12 * 1000

_LEADING_INT = re.compile(r"\s*([-+]?)0*(\d+)")
_MAX_DIGITS = 18


def coerce_non_negative_int(value: Any, maximum: Optional[int] = None) -> int:
    """Read leading digits the way a form field would; anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return 0
        number = int(value)
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return 0
        sign, digits = match.groups()
        number = int(digits[:_MAX_DIGITS])
        if len(digits) > _MAX_DIGITS:
            number = 10 ** _MAX_DIGITS
        if sign == "-":
            number = -number
    number = max(number, 0)
    if maximum is not None:
        number = min(number, maximum)
    return number


class SearchRequest(BaseModel):
    q: str = ""
    scope: Optional[str] = None
    offset: int = 0
    sort: bool = False  # True orders by recency instead of relevance
    age: int = 0  # months; 0 disables the filter
    category: str = "all"

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def scope_from_publication(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("scope") and data.get("publication"):
            data = dict(data)
            data["scope"] = data.pop("publication")
        return data

    @field_validator("q", mode="before")
    @classmethod
    def strip_query(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("offset", mode="before")
    @classmethod
    def coerce_offset(cls, v: Any) -> int:
        return coerce_non_negative_int(v, MAX_OFFSET)

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, v: Any) -> int:
        return coerce_non_negative_int(v, MAX_AGE_MONTHS)

    @field_validator("sort", mode="before")
    @classmethod
    def parse_sort(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        return v == RECENCY_SORT

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return "all"
        return str(v).strip()


class ContentItem(BaseModel):
    id: str
    obj_class: str
    type_facet: Optional[str] = None
    display: Optional[str] = None
    permalink: Optional[str] = None
    search_date: Optional[datetime] = None
    title: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class FacetCount(BaseModel):
    value: str
    count: int


class SearchResult(BaseModel):
    query: str
    scope: Optional[str] = None
    terms: List[str] = []
    offset: int = 0
    sort: bool = False
    age: int = 0
    category: str = "all"
    total: int = 0
    page_total: int = 0
    articles: List[ContentItem] = []
    facets: List[FacetCount] = []

    model_config = ConfigDict(frozen=True)

    @computed_field(alias="from")
    @property
    def from_(self) -> int:
        """Pagination "from" number (1-indexed, not clamped)."""
        return self.offset + 1

    @computed_field
    @property
    def to(self) -> int:
        """Pagination "to" number."""
        return min(self.offset + HITS_PER_PAGE, self.total)

    @computed_field
    @property
    def results(self) -> bool:
        return self.total > 0

    @computed_field
    @property
    def article_scope(self) -> bool:
        return self.scope in ARTICLE_SCOPES

