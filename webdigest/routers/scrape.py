import logging

from fastapi import APIRouter, HTTPException, Request
from playwright.async_api import Error as PlaywrightError

from webdigest.models.request import ScrapeRequest
from webdigest.models.response import ScrapeResponse
from webdigest.routers.limiter import limiter
from webdigest.services.scraper import scrape_urls

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/scrape",
    response_model=ScrapeResponse,
    response_model_exclude_none=True,
    summary="Render and reduce a batch of web pages",
)
@limiter.limit("10/minute")
async def scrape(request: Request, body: ScrapeRequest) -> ScrapeResponse:
    """Render every URL in a headless browser and return its reduced text.

    URLs are processed in waves of ``max_concurrent``.  Malformed URLs are
    skipped; a page that fails to load still gets a record with ``error``
    set.  Results keep the order of the request.
    """
    logger.info("Scrape request received for %d URL(s)", len(body.urls))

    try:
        results = await scrape_urls(body.urls, body.options())
    except ValueError as exc:
        logger.warning("Rejected scrape request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except PlaywrightError as exc:
        logger.error("Browser error during scrape: %s", exc)
        raise HTTPException(status_code=502, detail=f"Browser error: {exc}")

    return ScrapeResponse(results=results)
