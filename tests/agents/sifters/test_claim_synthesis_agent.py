"""Tests for ClaimSynthesisAgent.

Tests cover:
1. Candidate construction with source/date copied from the article
2. Prompt rendering: fact, magnitude bounds, guidance injection
3. Degradation to None on missing fields, bad JSON, backend errors
"""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from newsquiz_system.agents.sifters.claim_synthesis_agent import ClaimSynthesisAgent
from newsquiz_system.data_management.schemas import ExtractedFact, RawArticle


@pytest.fixture
def article():
    return RawArticle(
        title="Regional airport adds 12 new international routes",
        body="The airport announced 12 new routes starting in March.",
        source="Travel Wire",
        published_date=date(2025, 2, 3),
    )


@pytest.fixture
def fact():
    return ExtractedFact(statement="The regional airport added 12 new international routes")


def claim_json(**overrides) -> str:
    payload = {
        "true_claim": "The regional airport added 12 new international routes this spring",
        "false_claim": "The regional airport added 20 new international routes this spring",
        "explanation": "The airport announced 12 new routes starting in March.",
    }
    payload.update(overrides)
    return json.dumps(payload)


@pytest.fixture
def generator():
    mock = MagicMock()
    mock.generate = AsyncMock(return_value=claim_json())
    return mock


class TestSynthesize:
    """Tests for ClaimSynthesisAgent.synthesize."""

    @pytest.mark.asyncio
    async def test_builds_candidate(self, generator, fact, article):
        agent = ClaimSynthesisAgent(generator)

        candidate = await agent.synthesize(fact, article)

        assert candidate is not None
        assert candidate.true_claim.endswith("12 new international routes this spring")
        assert "20 new" in candidate.false_claim
        assert candidate.source == "Travel Wire"
        assert candidate.date == date(2025, 2, 3)

    @pytest.mark.asyncio
    async def test_fields_stripped(self, generator, fact, article):
        generator.generate.return_value = claim_json(explanation="  padded explanation text  ")
        agent = ClaimSynthesisAgent(generator)

        candidate = await agent.synthesize(fact, article)

        assert candidate.explanation == "padded explanation text"

    @pytest.mark.asyncio
    async def test_object_inside_prose(self, generator, fact, article):
        generator.generate.return_value = f"Here is the pair:\n{claim_json()}\nLet me know!"
        agent = ClaimSynthesisAgent(generator)

        assert await agent.synthesize(fact, article) is not None


class TestPrompt:
    """Tests for synthesis prompt rendering."""

    def test_prompt_includes_fact_and_bounds(self, generator, fact, article):
        agent = ClaimSynthesisAgent(generator, magnitude_min=30, magnitude_max=60)

        prompt = agent.build_prompt(fact, article)

        assert fact.statement in prompt
        assert "30" in prompt
        assert "60" in prompt
        assert "Travel Wire" in prompt

    def test_guidance_injected(self, generator, fact, article):
        agent = ClaimSynthesisAgent(generator)
        guidance = "LEARNED FROM PLAYER FEEDBACK:\n1. TRUE: old true claim"

        prompt = agent.build_prompt(fact, article, guidance)

        assert "LEARNED FROM PLAYER FEEDBACK" in prompt
        assert "old true claim" in prompt

    def test_no_guidance_block_when_empty(self, generator, fact, article):
        agent = ClaimSynthesisAgent(generator)

        assert "LEARNED FROM PLAYER FEEDBACK" not in agent.build_prompt(fact, article, "")

    def test_invalid_bounds_rejected(self, generator):
        with pytest.raises(ValueError):
            ClaimSynthesisAgent(generator, magnitude_min=60, magnitude_max=30)


class TestSynthesizeFailures:
    """Synthesis never raises; failures yield None."""

    @pytest.mark.asyncio
    async def test_no_json_object(self, generator, fact, article):
        generator.generate.return_value = "I am unable to create a claim for this fact."
        agent = ClaimSynthesisAgent(generator)

        assert await agent.synthesize(fact, article) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["true_claim", "false_claim", "explanation"])
    async def test_missing_field(self, generator, fact, article, missing):
        payload = json.loads(claim_json())
        del payload[missing]
        generator.generate.return_value = json.dumps(payload)
        agent = ClaimSynthesisAgent(generator)

        assert await agent.synthesize(fact, article) is None
        assert agent.error_count == 1

    @pytest.mark.asyncio
    async def test_blank_field(self, generator, fact, article):
        generator.generate.return_value = claim_json(false_claim="   ")
        agent = ClaimSynthesisAgent(generator)

        assert await agent.synthesize(fact, article) is None

    @pytest.mark.asyncio
    async def test_backend_exception(self, generator, fact, article):
        generator.generate.side_effect = TimeoutError("backend timed out")
        agent = ClaimSynthesisAgent(generator)

        assert await agent.synthesize(fact, article) is None


class TestSift:
    """Tests for the BaseSifter contract."""

    @pytest.mark.asyncio
    async def test_sift_returns_candidate_dict(self, generator, fact, article):
        agent = ClaimSynthesisAgent(generator)

        results = await agent.sift({"fact": fact, "article": article.model_dump()})

        assert len(results) == 1
        assert results[0]["source"] == "Travel Wire"

    @pytest.mark.asyncio
    async def test_sift_requires_fact_and_article(self, generator, article):
        agent = ClaimSynthesisAgent(generator)

        assert await agent.sift({"article": article}) == []
