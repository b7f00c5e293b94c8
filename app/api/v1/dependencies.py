from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.services.object_index import ObjectIndex, SqlObjectIndex
from app.services.search import SearchPageService
from app.services.synonym import SynonymService

async def get_object_index(db: AsyncSession = Depends(get_db)) -> ObjectIndex:
    return SqlObjectIndex(db)

async def get_synonym_service(db: AsyncSession = Depends(get_db)) -> Optional[SynonymService]:
    if not settings.SEARCH_EXPAND_SYNONYMS:
        return None
    return SynonymService(db)

async def get_search_service(
    index: ObjectIndex = Depends(get_object_index),
    synonyms: Optional[SynonymService] = Depends(get_synonym_service),
) -> SearchPageService:
    return SearchPageService(index, synonyms=synonyms)
