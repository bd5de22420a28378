"""Claim pair schemas.

CandidateClaimPair is the synthesizer's output and the validator's input.
PublishedClaim is what the store persists and serves. Counters on a
PublishedClaim only grow through normal play; source and date are fixed
at creation.
"""

import uuid
import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ClaimStatus(str, Enum):
    """Review state of a persisted claim."""

    APPROVED = "approved"
    DRAFT = "draft"


class ClaimOrigin(str, Enum):
    """How a claim entered the store."""

    PIPELINE = "pipeline"
    MANUAL = "manual"


class CandidateClaimPair(BaseModel):
    """A generated true/false pair awaiting validation."""

    true_claim: str
    false_claim: str
    explanation: str
    source: str
    date: dt.date

    model_config = {"frozen": True}


class PublishedClaim(BaseModel):
    """A persisted, playable claim pair.

    Attributes:
        id: Store-assigned identifier.
        times_shown: Times a player has been shown this pair.
        times_reported: Times a player flagged this pair as bad.
        status: approved (playable) or draft (awaiting review).
        origin: pipeline-generated or manually entered.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    true_claim: str
    false_claim: str
    explanation: str
    source: str
    date: dt.date
    times_shown: int = Field(default=0, ge=0)
    times_reported: int = Field(default=0, ge=0)
    status: ClaimStatus = ClaimStatus.APPROVED
    origin: ClaimOrigin = ClaimOrigin.PIPELINE
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

    @model_validator(mode="after")
    def _claims_differ(self) -> "PublishedClaim":
        if self.true_claim.strip() == self.false_claim.strip():
            raise ValueError("true_claim and false_claim must differ")
        return self

    @classmethod
    def from_candidate(
        cls,
        candidate: CandidateClaimPair,
        status: ClaimStatus = ClaimStatus.APPROVED,
        origin: ClaimOrigin = ClaimOrigin.PIPELINE,
    ) -> "PublishedClaim":
        """Build a new record from a validated candidate."""
        return cls(
            true_claim=candidate.true_claim,
            false_claim=candidate.false_claim,
            explanation=candidate.explanation,
            source=candidate.source,
            date=candidate.date,
            status=status,
            origin=origin,
        )
