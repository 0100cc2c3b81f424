"""
Fitlead - Diet Plan Generator.

Wraps the OpenAI chat completions API. The plan comes back as one opaque
block of text that is stored and forwarded verbatim.

Two failure shapes are kept apart:
- ConfigurationError: the API key is missing, a placeholder, or rejected
- GenerationError: anything else the provider call raises
"""

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from fitlead.config import is_real_api_key
from fitlead.errors import ConfigurationError, GenerationError
from fitlead.llm.prompt_logger import log_prompt
from fitlead.llm.prompts import SYSTEM_PROMPT, build_diet_prompt

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "OpenAI API key is not configured. Please add your API key to the .env file."
INVALID_KEY_MESSAGE = (
    "OpenAI API key is invalid or not configured properly. "
    "Please check your API key in the .env file."
)
GENERATION_FAILED_MESSAGE = "Failed to generate diet plan. Please try again."
CONFIGURATION_HINT = "Please ensure your OpenAI API key is properly configured in the .env file"
EMPTY_PLAN_FALLBACK = "Unable to generate diet plan."


class PlanGenerator:
    """
    Generates a free-text diet plan for a lead profile.

    One attempt per call: the SDK's own retries are disabled.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gpt-4",
        max_tokens: int = 2000,
        temperature: float = 0.7,
        client: AsyncOpenAI | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client

    @property
    def configured(self) -> bool:
        return is_real_api_key(self.api_key)

    def get_client(self) -> AsyncOpenAI:
        """Lazily build the OpenAI client (only once the key is known to be usable)."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    async def generate(self, profile: dict[str, Any]) -> str:
        """
        Generate a diet plan for the given profile.

        Args:
            profile: Lead fields (name, age, weight, height, fitness_level,
                fitness_goal, workout_days, dietary_restrictions, injuries)

        Returns:
            The plan text

        Raises:
            ConfigurationError: missing, placeholder, or rejected API key
            GenerationError: any other provider failure
        """
        if not self.configured:
            logger.error("OPENAI_API_KEY is not set - add it to .env to enable diet plan generation")
            raise ConfigurationError(MISSING_KEY_MESSAGE, details=CONFIGURATION_HINT)

        user_prompt = build_diet_prompt(profile)
        client = self.get_client()

        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.AuthenticationError as e:
            logger.error(f"OpenAI rejected the API key: {e}")
            log_prompt(model=self.model, system_prompt=SYSTEM_PROMPT, user_prompt=user_prompt, error=str(e))
            raise ConfigurationError(INVALID_KEY_MESSAGE, details=CONFIGURATION_HINT) from e
        except Exception as e:
            logger.error(f"Error generating diet plan: {e}")
            log_prompt(model=self.model, system_prompt=SYSTEM_PROMPT, user_prompt=user_prompt, error=str(e))
            raise GenerationError(GENERATION_FAILED_MESSAGE, details=CONFIGURATION_HINT) from e

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        plan = content or EMPTY_PLAN_FALLBACK

        log_prompt(model=self.model, system_prompt=SYSTEM_PROMPT, user_prompt=user_prompt, response=plan)
        return plan
