"""Single-prompt chat-completion query; failures are returned, never raised."""

import logging
import os

from openai import AsyncOpenAI

from webdigest.models.llm import LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "o1"
_TEMPERATURE = 0.7


def create_llm_client() -> AsyncOpenAI:
    return AsyncOpenAI(api_key=os.getenv("OPENAI_API_KEY"))


async def query_llm(prompt: str, model: str = DEFAULT_MODEL) -> LLMResponse:
    """Send *prompt* as a single user message and return the reply text."""
    try:
        client = create_llm_client()
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=_TEMPERATURE,
        )
        return LLMResponse(content=response.choices[0].message.content)
    except Exception as exc:
        logger.error("Error querying LLM: %s", exc)
        logger.info(
            "LLM functionality is optional; scraping and search work without a configured API."
        )
        return LLMResponse(content=None, error=str(exc) or exc.__class__.__name__)
