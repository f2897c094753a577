import logging

from fastapi import APIRouter, HTTPException, Request

from webdigest.exceptions import SearchError
from webdigest.models.search import SearchOptions, SearchRequest, SearchResponse
from webdigest.routers.limiter import limiter
from webdigest.services.search import search

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search", response_model=SearchResponse, summary="Search the web via DuckDuckGo")
@limiter.limit("20/minute")
async def search_endpoint(request: Request, body: SearchRequest) -> SearchResponse:
    logger.info("Search request received")
    options = SearchOptions(max_results=body.max_results, timeout_ms=body.timeout_ms)
    try:
        results = await search(body.query, options)
    except SearchError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return SearchResponse(results=results)
