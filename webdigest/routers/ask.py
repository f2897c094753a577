import logging

from fastapi import APIRouter, HTTPException, Request

from webdigest.models.llm import AskRequest, LLMResponse
from webdigest.routers.limiter import limiter
from webdigest.services.llm import query_llm

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ask", response_model=LLMResponse, summary="Send a prompt to the LLM")
@limiter.limit("10/minute")
async def ask(request: Request, body: AskRequest) -> LLMResponse:
    logger.info("Ask request received for model %s", body.model)
    response = await query_llm(body.prompt, body.model)
    if response.error:
        raise HTTPException(status_code=502, detail=response.error)
    return response
