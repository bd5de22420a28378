"""Data management package for the newsquiz system.

Provides the claim store and the schemas flowing through the pipeline:
- RawArticle: normalized feed entries
- ExtractedFact: headline facts from one article
- CandidateClaimPair / PublishedClaim: generated and persisted claim pairs

Storage adapters:
- ClaimStore: in-memory claim persistence with optional JSON file backing
- ClaimRepository: the protocol the pipeline depends on
"""

from newsquiz_system.data_management.claim_store import ClaimRepository, ClaimStore

__all__ = [
    "ClaimRepository",
    "ClaimStore",
]
