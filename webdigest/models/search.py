from typing import List

from pydantic import BaseModel, Field


class SearchOptions(BaseModel):
    max_results: int = Field(default=10, ge=1, description="Maximum number of results to return.")
    timeout_ms: int = Field(default=10_000, ge=1, description="Request timeout in milliseconds.")


class SearchRequest(SearchOptions):
    query: str = Field(..., min_length=1)


class SearchResult(BaseModel):
    title: str
    url: str
    snippet: str


class SearchResponse(BaseModel):
    results: List[SearchResult]
