"""Tests for FeedbackAggregator guidance construction."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from newsquiz_system.agents.sifters.feedback_aggregator import FeedbackAggregator
from newsquiz_system.data_management.schemas import PublishedClaim


def reported_claim(index: int, times_reported: int) -> PublishedClaim:
    return PublishedClaim(
        true_claim=f"True claim number {index} about a local election",
        false_claim=f"False claim number {index} about a local election",
        explanation="Neutral context.",
        source="Example News",
        date=date(2025, 1, 10),
        times_reported=times_reported,
    )


class TestBuildGuidance:
    """Tests for FeedbackAggregator.build_guidance."""

    def test_empty_when_nothing_reported(self):
        aggregator = FeedbackAggregator()

        assert aggregator.build_guidance([]) == ""
        assert aggregator.build_guidance([reported_claim(1, 0)]) == ""

    def test_includes_every_reported_claim(self):
        claims = [reported_claim(i, times_reported=i) for i in range(1, 6)]
        aggregator = FeedbackAggregator(limit=5)

        guidance = aggregator.build_guidance(claims)

        assert "LEARNED FROM PLAYER FEEDBACK" in guidance
        for claim in claims:
            assert claim.true_claim in guidance
            assert claim.false_claim in guidance

    def test_ordered_by_report_count(self):
        claims = [reported_claim(1, 2), reported_claim(2, 9), reported_claim(3, 4)]
        guidance = FeedbackAggregator().build_guidance(claims)

        assert guidance.index("number 2") < guidance.index("number 3") < guidance.index("number 1")
        assert "(Reported 9x)" in guidance

    def test_respects_limit(self):
        claims = [reported_claim(i, times_reported=i) for i in range(1, 8)]
        guidance = FeedbackAggregator(limit=3).build_guidance(claims)

        assert "number 7" in guidance
        assert "number 5" in guidance
        assert "number 4" not in guidance


class TestLoadGuidance:
    """Tests for reading guidance from a store."""

    @pytest.mark.asyncio
    async def test_queries_store(self):
        store = MagicMock()
        store.select_reported = AsyncMock(return_value=[reported_claim(1, 3)])

        guidance = await FeedbackAggregator(limit=5).load_guidance(store)

        store.select_reported.assert_awaited_once_with(min_report_count=1, limit=5)
        assert "number 1" in guidance

    @pytest.mark.asyncio
    async def test_store_error_propagates(self):
        from newsquiz_system.errors import StoreError

        store = MagicMock()
        store.select_reported = AsyncMock(side_effect=StoreError("unreachable"))

        with pytest.raises(StoreError):
            await FeedbackAggregator().load_guidance(store)
