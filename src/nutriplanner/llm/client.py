"""
NutriPlanner - LLM Client.

Wraps the async OpenAI client with Instructor for validated structured
outputs. Every generator call goes through call_llm.
"""

import logging
from typing import Any, TypeVar

import instructor
from openai import AsyncOpenAI
from pydantic import BaseModel

from nutriplanner.config import settings
from nutriplanner.llm.model_router import get_generator_config
from nutriplanner.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)

# Type variable for generic structured output
T = TypeVar("T", bound=BaseModel)

# Singleton client instance
_client: instructor.AsyncInstructor | None = None


def get_client() -> instructor.AsyncInstructor:
    """
    Get the Instructor-wrapped async OpenAI client.

    Built once; the request timeout comes from settings so that a hung
    generation fails here rather than stalling the flow.
    """
    global _client

    if _client is None:
        if not settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is not configured")
        openai_client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.generation_timeout_seconds,
        )
        _client = instructor.from_openai(openai_client)

    return _client


def _build_user_content(user_prompt: str, image_urls: list[str] | None) -> str | list[dict[str, Any]]:
    if not image_urls:
        return user_prompt
    parts: list[dict[str, Any]] = [{"type": "text", "text": user_prompt}]
    parts.extend({"type": "image_url", "image_url": {"url": url}} for url in image_urls)
    return parts


async def call_llm(
    *,
    response_model: type[T],
    system_prompt: str,
    user_prompt: str,
    generator: str = "unknown",
    complexity: str = "medium",
    max_retries: int = 2,
    image_urls: list[str] | None = None,
) -> T:
    """
    Make a structured LLM call with guaranteed schema compliance.

    Args:
        response_model: Pydantic model class for the response
        system_prompt: System message setting context
        user_prompt: User message with the actual request
        generator: Calling generator, for config and prompt logs
        complexity: Task complexity for model selection ("low", "medium", "high")
        max_retries: Instructor retries when the response fails validation
        image_urls: Images to attach to the user message

    Returns:
        Instance of response_model with validated data

    Example:
        recipe = await call_llm(
            response_model=Recipe,
            system_prompt="You are a family cook...",
            user_prompt="A 20-minute dinner for Awa",
            generator="quick_recipe",
        )
    """
    client = get_client()
    config = get_generator_config(generator, complexity)
    model = config.pop("model", "gpt-4.1-mini")

    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": _build_user_content(user_prompt, image_urls)},
    ]

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=messages,
            response_model=response_model,
            max_retries=max_retries,
            store=False,  # Explicitly disable conversation storage
            **config,
        )

        log_prompt(
            generator=generator,
            model=model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_model=response_model.__name__,
            response=response,
            image_urls=image_urls,
        )
        return response

    except Exception as e:
        logger.warning(f"LLM call failed for {generator} ({model}): {e}")
        log_prompt(
            generator=generator,
            model=model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_model=response_model.__name__,
            error=str(e),
            image_urls=image_urls,
        )
        raise
