import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from webdigest.logging_config import setup_logging
from webdigest.routers.ask import router as ask_router
from webdigest.routers.limiter import limiter
from webdigest.routers.scrape import router as scrape_router
from webdigest.routers.search import router as search_router

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="webdigest",
    description=(
        "Renders web pages in a headless browser and reduces them to deduplicated, "
        "link-annotated plain text. Also exposes web search and a single-prompt LLM query."
    ),
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(scrape_router)
app.include_router(search_router)
app.include_router(ask_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from webdigest"}
