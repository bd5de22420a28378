"""Feedback aggregation: reported claims rendered as synthesis guidance.

Guidance is a soft steering signal. It is prose injected into the next
synthesis prompt; nothing guarantees the model follows it.
"""

from typing import Iterable

from loguru import logger

from newsquiz_system.config.prompts import FEEDBACK_GUIDANCE_HEADER, FEEDBACK_GUIDANCE_ITEM
from newsquiz_system.data_management.claim_store import ClaimRepository
from newsquiz_system.data_management.schemas import PublishedClaim


class FeedbackAggregator:
    """
    Builds an "avoid patterns like these" block from reported claims.

    Attributes:
        limit: Maximum reported claims rendered into guidance
    """

    DEFAULT_LIMIT = 5

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = limit
        self.logger = logger.bind(component="FeedbackAggregator")

    def build_guidance(self, top_reported: Iterable[PublishedClaim]) -> str:
        """
        Render reported claims into guidance text.

        Claims with zero reports are ignored. The rest are ordered by
        descending report count and capped at ``limit``.

        Args:
            top_reported: Candidate claims, typically from select_reported()

        Returns:
            Guidance block, or "" when nothing has been reported
        """
        reported = sorted(
            (c for c in top_reported if c.times_reported > 0),
            key=lambda c: c.times_reported,
            reverse=True,
        )[: self.limit]

        if not reported:
            return ""

        items = [
            FEEDBACK_GUIDANCE_ITEM.format(
                index=i,
                times_reported=claim.times_reported,
                true_claim=claim.true_claim,
                false_claim=claim.false_claim,
            )
            for i, claim in enumerate(reported, 1)
        ]
        return FEEDBACK_GUIDANCE_HEADER + "\n".join(items) + "\n"

    async def load_guidance(self, store: ClaimRepository) -> str:
        """
        Read the most-reported claims from the store and build guidance.

        Store failures propagate to the caller.
        """
        reported = await store.select_reported(min_report_count=1, limit=self.limit)
        guidance = self.build_guidance(reported)
        self.logger.info(
            "Feedback guidance prepared",
            reported_claims=len(reported),
            guidance_chars=len(guidance),
        )
        return guidance
