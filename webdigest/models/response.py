from typing import List, Optional

from pydantic import BaseModel


class ScrapedContent(BaseModel):
    url: str
    title: str
    """Currently the page URL; no title extraction is performed."""
    content: str
    error: Optional[str] = None


class ScrapeResponse(BaseModel):
    results: List[ScrapedContent]
