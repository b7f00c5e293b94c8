import asyncio
import argparse
import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

from app.core.exceptions import SearchBackendUnavailable
from app.core.logging import setup_logging
from app.database import AsyncSessionLocal
from app.schemas.search import SearchRequest
from app.services.object_index import SqlObjectIndex
from app.services.search import SearchPageService
from app.services.synonym import SynonymService

async def run_search(args: argparse.Namespace) -> int:
    request = SearchRequest.model_validate({
        "q": args.q,
        "scope": args.scope,
        "offset": args.offset,
        "sort": "most-recent" if args.recent else None,
        "age": args.age,
        "category": args.category,
    })

    try:
        async with AsyncSessionLocal() as session:
            service = SearchPageService(SqlObjectIndex(session), synonyms=SynonymService(session))
            result = await service.search(request)
    except SearchBackendUnavailable as e:
        print(f"Error: {e}")
        return 1

    print(f"Terms: {', '.join(result.terms) or '(none)'}")
    if not result.results:
        print("No results.")
        return 0

    print(f"Showing {result.from_}-{result.to} of {result.total}")
    for item in result.articles:
        print(f"  [{item.type_facet or item.obj_class}] {item.title or item.id}  /{item.permalink or ''}")
    print("Facets:")
    for facet in result.facets:
        print(f"  {facet.value}: {facet.count}")
    return 0

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run a content search against the configured database.")
    parser.add_argument("q", nargs="?", default="")
    parser.add_argument("--scope", default=None)
    parser.add_argument("--offset", default="0")
    parser.add_argument("--age", default="0")
    parser.add_argument("--category", default="all")
    parser.add_argument("--recent", action="store_true")
    setup_logging()
    sys.exit(asyncio.run(run_search(parser.parse_args())))
