"""Pydantic schemas for articles, facts and claim pairs.

Usage:
    from newsquiz_system.data_management.schemas import RawArticle, CandidateClaimPair
"""

from newsquiz_system.data_management.schemas.article_schema import RawArticle
from newsquiz_system.data_management.schemas.fact_schema import ExtractedFact
from newsquiz_system.data_management.schemas.claim_schema import (
    CandidateClaimPair,
    ClaimOrigin,
    ClaimStatus,
    PublishedClaim,
)

__all__ = [
    "RawArticle",
    "ExtractedFact",
    "CandidateClaimPair",
    "ClaimOrigin",
    "ClaimStatus",
    "PublishedClaim",
]
