"""
Fitlead - LLM Client.

Provides diet plan generation via OpenAI.
"""

from functools import lru_cache

from fitlead.llm.client import PlanGenerator
from fitlead.llm.prompts import build_diet_prompt


@lru_cache
def get_plan_generator() -> PlanGenerator:
    """Get the process-wide PlanGenerator built from settings."""
    from fitlead.config import get_settings

    settings = get_settings()
    return PlanGenerator(
        settings.openai_api_key,
        model=settings.openai_model,
        max_tokens=settings.openai_max_tokens,
        temperature=settings.openai_temperature,
    )


__all__ = [
    "PlanGenerator",
    "build_diet_prompt",
    "get_plan_generator",
]
