"""Tests for GeminiClient with the google-generativeai SDK mocked out."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from newsquiz_system.config.settings import Settings
from newsquiz_system.errors import ConfigurationError
from newsquiz_system.llm.gemini_client import GeminiClient


@pytest.fixture
def config():
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test", llm_max_retries=3)


@pytest.fixture
def mock_genai():
    with patch("newsquiz_system.llm.gemini_client.genai") as genai:
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=MagicMock(text="generated text"))
        genai.GenerativeModel.return_value = model
        yield genai


class TestGeminiClient:
    """Tests for configuration, generation and retry behavior."""

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError):
            GeminiClient(config=Settings(gemini_api_key=""))

    def test_configures_sdk(self, config, mock_genai):
        GeminiClient(config=config)

        mock_genai.configure.assert_called_once_with(api_key="test-key")

    @pytest.mark.asyncio
    async def test_generate_returns_text(self, config, mock_genai):
        client = GeminiClient(config=config)

        text = await client.generate("prompt", system_instruction="be brief")

        assert text == "generated text"
        mock_genai.GenerativeModel.assert_called_once_with("gemini-test", system_instruction="be brief")

    @pytest.mark.asyncio
    async def test_model_cached_per_instruction(self, config, mock_genai):
        client = GeminiClient(config=config)

        await client.generate("a", system_instruction="one")
        await client.generate("b", system_instruction="one")
        await client.generate("c", system_instruction="two")

        assert mock_genai.GenerativeModel.call_count == 2

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, config, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content_async.side_effect = [
            RuntimeError("503"),
            MagicMock(text="recovered"),
        ]
        client = GeminiClient(config=config, base_delay=0)

        assert await client.generate("prompt") == "recovered"
        assert model.generate_content_async.await_count == 2

    @pytest.mark.asyncio
    async def test_raises_after_max_retries(self, config, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content_async.side_effect = RuntimeError("quota exceeded")
        client = GeminiClient(config=config, base_delay=0)

        with pytest.raises(RuntimeError, match="quota exceeded"):
            await client.generate("prompt")

        assert model.generate_content_async.await_count == 3
