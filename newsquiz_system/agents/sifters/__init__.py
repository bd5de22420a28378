"""Sifter agents and deterministic stages of the claim-generation pipeline.

- FactExtractionAgent: RawArticle -> ExtractedFact objects
- ClaimSynthesisAgent: ExtractedFact -> CandidateClaimPair
- ClaimValidator: rule-based acceptance and run-local dedup
- FeedbackAggregator: reported claims -> synthesis guidance
"""

from newsquiz_system.agents.sifters.base_sifter import BaseSifter
from newsquiz_system.agents.sifters.fact_extraction_agent import FactExtractionAgent
from newsquiz_system.agents.sifters.claim_synthesis_agent import ClaimSynthesisAgent
from newsquiz_system.agents.sifters.claim_validator import (
    ClaimValidator,
    RejectionReason,
    ValidationPolicy,
)
from newsquiz_system.agents.sifters.feedback_aggregator import FeedbackAggregator

__all__ = [
    "BaseSifter",
    "FactExtractionAgent",
    "ClaimSynthesisAgent",
    "ClaimValidator",
    "RejectionReason",
    "ValidationPolicy",
    "FeedbackAggregator",
]
