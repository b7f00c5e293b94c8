from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_search_service
from app.schemas.search import SearchRequest, SearchResult
from app.services.search import SearchPageService

router = APIRouter()

@router.get("/", response_model=SearchResult)
async def search_content(
    q: str = Query("", description="Search query"),
    scope: Optional[str] = Query(None, description="radar, australian_prescriber, nps or all"),
    publication: Optional[str] = Query(None, description="Alias of scope"),
    offset: str = Query("0"),
    sort: Optional[str] = Query(None, description="most-recent orders by publish date"),
    age: str = Query("0", description="Only items published in the last N months"),
    category: str = Query("all"),
    service: SearchPageService = Depends(get_search_service),
) -> Any:
    """
    Scoped, faceted and paginated content search.
    """
    request = SearchRequest.model_validate({
        "q": q,
        "scope": scope,
        "publication": publication,
        "offset": offset,
        "sort": sort,
        "age": age,
        "category": category,
    })
    return await service.search(request)
