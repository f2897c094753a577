from typing import Optional

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    model: str = "o1"


class LLMResponse(BaseModel):
    content: Optional[str] = None
    error: Optional[str] = None
