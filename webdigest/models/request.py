from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/91.0.4472.124"
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_MAX_CONCURRENT = 5


class ScrapeOptions(BaseModel):
    selector: Optional[str] = Field(
        default=None,
        description="CSS selector that scopes text reduction; falls back to <body> when unmatched.",
        examples=["article", "#content"],
    )
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        ge=1,
        description="Per-URL deadline for navigation and content capture, in milliseconds.",
    )
    user_agent: str = DEFAULT_USER_AGENT
    max_concurrent: int = Field(
        default=DEFAULT_MAX_CONCURRENT,
        ge=1,
        description="Number of URLs rendered at the same time (wave width).",
    )


class ScrapeRequest(ScrapeOptions):
    urls: List[str] = Field(
        ...,
        description="URLs to render and reduce. Malformed entries are skipped.",
    )

    def options(self) -> ScrapeOptions:
        return ScrapeOptions(**self.model_dump(exclude={"urls"}))
