import logging
import time
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence

from dateutil.relativedelta import relativedelta

from app.schemas.search import HITS_PER_PAGE, ContentItem, FacetCount, SearchRequest, SearchResult
from app.services.object_index import ANY_FIELD, OBJ_CLASS_FIELD, ItemSet, ObjectIndex, Operator
from app.services.scopes import ScopeProfile, resolve_scope
from app.services.terms import build_terms

logger = logging.getLogger(__name__)

FACET_LIMIT = 50
FACET_FIELD = "type_facet"
PUBLISHED_AT_ATTRIBUTE = "search_date"
PERMALINK_FIELD = "_permalink"

AUTHOR_CLASS = "Cms::Author"
AUTHOR_ROLE_CLASS = "Cms::AuthorRole"
PRIVATE_DISPLAY = "private"
THANK_YOU_PERMALINK = "contact-us/give-feedback/thank-you"


class SynonymSource(Protocol):
    async def expand(self, terms: Sequence[str]) -> List[str]:
        ...


def merge_facets(*facet_lists: Sequence[FacetCount]) -> List[FacetCount]:
    """Sum counts per value, keeping the order values were first seen."""
    counts = {}
    for facets in facet_lists:
        for facet in facets:
            counts[facet.value] = counts.get(facet.value, 0) + facet.count
    return [FacetCount(value=value, count=count) for value, count in counts.items()]


class SearchPageService:
    def __init__(self, index: ObjectIndex, synonyms: Optional[SynonymSource] = None):
        self.index = index
        self.synonyms = synonyms

    async def terms_for(self, query: str) -> List[str]:
        terms = build_terms(query)
        if terms and self.synonyms is not None:
            terms = await self.synonyms.expand(terms)
        return terms

    def build_query(
        self, request: SearchRequest, profile: ScopeProfile, terms: Sequence[str]
    ) -> ItemSet:
        """Scope, term, visibility and permalink filters for the main result set."""
        items = self.index.find(profile.content_types)

        # boosting the search results by title, description, subject ..
        if terms:
            items = (
                items.and_(list(profile.fields), Operator.CONTAINS, list(terms), dict(profile.boosts))
                .and_not(PERMALINK_FIELD, Operator.EQUALS, [THANK_YOU_PERMALINK])
            )

        items = items.and_not("display", Operator.EQUALS, [PRIVATE_DISPLAY])

        if profile.excluded_permalinks:
            items = items.and_not(PERMALINK_FIELD, Operator.EQUALS, list(profile.excluded_permalinks))
        if terms and profile.term_excluded_prefixes:
            items = items.and_not(PERMALINK_FIELD, Operator.STARTS_WITH, list(profile.term_excluded_prefixes))

        # authors are only reachable through the articles linked to them
        items = items.and_not(OBJ_CLASS_FIELD, Operator.EQUALS, [AUTHOR_CLASS])

        if request.sort:
            items = items.order(PUBLISHED_AT_ATTRIBUTE, descending=True)
        if request.age > 0:
            items = items.and_(PUBLISHED_AT_ATTRIBUTE, Operator.IS_GREATER_THAN, [self.published_after(request.age)])
        return items

    async def author_items(self, query: str, profile: ScopeProfile) -> Optional[ItemSet]:
        """
        Items linked to the roles of every author matching ``query``.

        Returns None when the scope has no author lookup or nothing matched.
        """
        if not profile.supports_author_lookup or not query:
            return None

        authors = self.index.find([AUTHOR_CLASS]).and_(ANY_FIELD, Operator.CONTAINS, [query])
        author_ids = await authors.ids()
        if not author_ids:
            return None

        role_ids = await (
            self.index.find([AUTHOR_ROLE_CLASS])
            .and_(ANY_FIELD, Operator.LINKS_TO, author_ids)
            .ids()
        )
        logger.debug("Author lookup %r matched %d authors, %d roles", query, len(author_ids), len(role_ids))
        if not role_ids:
            return None

        items = (
            self.index.where(ANY_FIELD, Operator.LINKS_TO, role_ids)
            .and_not("display", Operator.EQUALS, [PRIVATE_DISPLAY])
            .and_not(PERMALINK_FIELD, Operator.EQUALS, [THANK_YOU_PERMALINK])
        )
        if profile.excluded_permalinks:
            items = items.and_not(PERMALINK_FIELD, Operator.EQUALS, list(profile.excluded_permalinks))
        return items

    @staticmethod
    def published_after(age: int, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        try:
            return now - relativedelta(months=age)
        except (ValueError, OverflowError):
            return datetime.min.replace(tzinfo=timezone.utc)

    async def search(self, request: SearchRequest) -> SearchResult:
        start_time = time.time()

        profile = resolve_scope(request.scope)
        terms = await self.terms_for(request.q)

        items = self.build_query(request, profile, terms)
        authored = await self.author_items(request.q, profile)

        # Filter: Type
        facets = await items.facet(FACET_FIELD, FACET_LIMIT)
        if authored is not None:
            facets = merge_facets(facets, await authored.facet(FACET_FIELD, FACET_LIMIT))
        if request.category != "all":
            items = items.and_(FACET_FIELD, Operator.EQUALS, [request.category])

        author_total = await authored.count() if authored is not None else 0
        total = await items.count() + author_total

        # Paginated results; author items are appended to every page
        articles: List[ContentItem] = await items.page(HITS_PER_PAGE, request.offset)
        if authored is not None:
            articles = articles + await authored.page(HITS_PER_PAGE, 0)

        logger.info(
            "Search q=%r scope=%s terms=%d total=%d offset=%d in %.1fms",
            request.q, profile.scope.value, len(terms), total, request.offset,
            (time.time() - start_time) * 1000,
        )

        return SearchResult(
            query=request.q,
            scope=profile.scope.value,
            terms=list(terms),
            offset=request.offset,
            sort=request.sort,
            age=request.age,
            category=request.category,
            total=total,
            page_total=total,
            articles=articles,
            facets=facets,
        )
