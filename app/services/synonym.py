import logging
from typing import Dict, List, Sequence

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import SearchBackendUnavailable
from app.models.synonym import Synonym
from app.services.terms import expand_with_synonyms, lookup_words

logger = logging.getLogger(__name__)

class SynonymService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_synonyms(self, words: Sequence[str]) -> Dict[str, List[str]]:
        if not words:
            return {}
        query = select(Synonym).where(func.lower(Synonym.word).in_(list(words)))
        try:
            result = await self.db.execute(query)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Synonym lookup failed: %s", exc)
            raise SearchBackendUnavailable() from exc

        mapping: Dict[str, List[str]] = {}
        for row in result.scalars().all():
            mapping.setdefault(row.word.lower(), []).extend(row.synonyms or [])
        return mapping

    async def expand(self, terms: Sequence[str]) -> List[str]:
        mapping = await self.get_synonyms(lookup_words(terms))
        if not mapping:
            return list(terms)
        expanded = expand_with_synonyms(terms, mapping)
        logger.debug("Expanded terms %s -> %s", list(terms), expanded)
        return expanded
