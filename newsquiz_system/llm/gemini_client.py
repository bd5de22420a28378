"""Gemini API client with exponential backoff."""

import asyncio
import functools
import random
from typing import Any, Callable, Dict, Optional

import google.generativeai as genai
from google.generativeai.types.generation_types import BlockedPromptException
from loguru import logger

from newsquiz_system.config.settings import Settings, settings as default_settings
from newsquiz_system.errors import ConfigurationError


def _exponential_backoff(func: Callable) -> Callable:
    """
    Decorator implementing exponential backoff with jitter for async API calls.

    Retries failed requests up to ``self.max_retries`` times with
    exponentially increasing delays. Base delay: ``self.base_delay``,
    exponential factor: 2, jitter: 0-10% of delay. Blocked prompts are
    not retried.
    """
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs) -> Any:
        max_retries = max(1, self.max_retries)

        for retry in range(max_retries):
            try:
                return await func(self, *args, **kwargs)
            except BlockedPromptException:
                raise
            except Exception as e:
                if retry == max_retries - 1:
                    logger.error(f"Max retries exceeded for {func.__name__}: {e}")
                    raise

                delay = self.base_delay * (2 ** retry)
                total_delay = delay + random.uniform(0, delay * 0.1)

                logger.warning(
                    f"Retry {retry + 1}/{max_retries} for {func.__name__} "
                    f"after {total_delay:.2f}s: {e}"
                )
                await asyncio.sleep(total_delay)

        raise RuntimeError(f"Unexpected retry loop exit in {func.__name__}")

    return wrapper


class GeminiClient:
    """
    Google Gemini API client implementing the TextGenerator interface.

    One GenerativeModel is cached per system instruction so stage-level
    instructions are configured once and shared across calls.

    Attributes:
        model_name: Gemini model identifier
        max_output_tokens: Default output cap per call
        max_retries: Attempts per call
        base_delay: First backoff delay in seconds
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        temperature: float = 0.7,
        base_delay: float = 1.0,
    ):
        """
        Initialize Gemini client with API key from settings.

        Raises:
            ConfigurationError: If API key is not configured
        """
        config = config or default_settings
        if not config.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured in environment")

        genai.configure(api_key=config.gemini_api_key)

        self.model_name = config.gemini_model
        self.max_output_tokens = config.max_output_tokens
        self.max_retries = config.llm_max_retries
        self.temperature = temperature
        self.base_delay = base_delay
        self._models: Dict[Optional[str], Any] = {}

        logger.info(f"Gemini client initialized with model {self.model_name}")

    def _model_for(self, system_instruction: Optional[str]):
        if system_instruction not in self._models:
            self._models[system_instruction] = genai.GenerativeModel(
                self.model_name,
                system_instruction=system_instruction,
            )
        return self._models[system_instruction]

    @_exponential_backoff
    async def generate(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate content from Gemini API with exponential backoff.

        Args:
            prompt: Input prompt for content generation
            system_instruction: Optional shared instruction for this stage
            max_output_tokens: Output cap, defaults to the configured value

        Returns:
            Generated text content

        Raises:
            BlockedPromptException: If prompt violates safety policies
            Exception: For other API errors after retries exhausted
        """
        model = self._model_for(system_instruction)
        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=self.temperature,
                    max_output_tokens=max_output_tokens or self.max_output_tokens,
                ),
            )
            return response.text
        except BlockedPromptException as e:
            logger.error(f"Prompt blocked by safety filters: {e}")
            raise
