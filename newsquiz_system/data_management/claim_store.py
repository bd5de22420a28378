"""Claim storage adapter for published and draft claim pairs.

Features:
- In-memory storage with optional JSON persistence
- Atomic counter increments under an asyncio lock
- Low-exposure selection for the quiz (ascending times_shown)
- Reported-claim selection for moderation and feedback guidance
- Draft staging and approval for review-before-publish configurations

The store satisfies ClaimRepository, the persistence boundary the
generation pipeline and admin commands depend on.
"""

import asyncio
import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from loguru import logger

from newsquiz_system.data_management.schemas import (
    CandidateClaimPair,
    ClaimOrigin,
    ClaimStatus,
    PublishedClaim,
)
from newsquiz_system.errors import ClaimNotFoundError, StoreError


class ClaimRepository(Protocol):
    """Operations the pipeline and admin surface need from a claim store."""

    async def insert_claims(
        self,
        records: Iterable[CandidateClaimPair | PublishedClaim],
        status: ClaimStatus = ClaimStatus.APPROVED,
        origin: ClaimOrigin = ClaimOrigin.PIPELINE,
    ) -> List[PublishedClaim]:
        ...

    async def select_low_exposure_approved(self, limit: int) -> List[PublishedClaim]:
        ...

    async def select_reported(
        self, min_report_count: int = 1, limit: int = 20
    ) -> List[PublishedClaim]:
        ...

    async def increment_shown(self, claim_id: str) -> None:
        ...

    async def increment_reported(self, claim_id: str) -> None:
        ...

    async def delete_by_id(self, claim_id: str) -> None:
        ...

    async def clear_report_count(self, claim_id: str) -> None:
        ...


class ClaimStore:
    """
    Storage adapter for claim pair persistence.

    Uses in-memory storage with optional JSON file persistence. Every
    mutation happens under one asyncio.Lock, which makes counter increments
    atomic with respect to other coroutines using the same store.

    Data structure:
    {
        "claim_id": {
            "id": "...",
            "true_claim": "...",
            "false_claim": "...",
            "times_shown": 0,
            "times_reported": 0,
            "status": "approved",
            ...
        }
    }
    """

    def __init__(self, persistence_path: Optional[str] = None):
        """
        Initialize claim store.

        Args:
            persistence_path: Optional path to JSON file for persistence.
                            If None, storage is memory-only.

        Raises:
            StoreError: If the persistence file exists but cannot be read.
        """
        self._claims: Dict[str, PublishedClaim] = {}
        self._lock = asyncio.Lock()
        self.persistence_path = Path(persistence_path) if persistence_path else None
        self.logger = logger.bind(component="ClaimStore")

        if self.persistence_path and self.persistence_path.exists():
            self._load_from_file()

        self.logger.info(
            "ClaimStore initialized",
            persistence_enabled=self.persistence_path is not None,
            claims=len(self._claims),
        )

    async def insert_claims(
        self,
        records: Iterable[CandidateClaimPair | PublishedClaim],
        status: ClaimStatus = ClaimStatus.APPROVED,
        origin: ClaimOrigin = ClaimOrigin.PIPELINE,
    ) -> List[PublishedClaim]:
        """
        Insert claim records.

        Candidates are converted to new PublishedClaim records with fresh ids
        and zeroed counters. PublishedClaim records are stored as given
        (used for imports and manual entry).

        Args:
            records: Candidates or already-built claims
            status: Status assigned to converted candidates
            origin: Origin assigned to converted candidates

        Returns:
            The stored PublishedClaim records, in input order
        """
        stored = [
            record
            if isinstance(record, PublishedClaim)
            else PublishedClaim.from_candidate(record, status=status, origin=origin)
            for record in records
        ]

        async with self._lock:
            claims = dict(self._claims)
            for claim in stored:
                if claim.id in claims:
                    raise StoreError(f"Claim {claim.id} already exists")
                claims[claim.id] = claim
            self._commit(claims)

        self.logger.info(
            f"Inserted {len(stored)} claims",
            status=status.value,
            origin=origin.value,
        )
        return stored

    async def get_claim(self, claim_id: str) -> PublishedClaim:
        """Return one claim by id or raise ClaimNotFoundError."""
        async with self._lock:
            return self._require(claim_id)

    async def select_low_exposure_approved(self, limit: int) -> List[PublishedClaim]:
        """
        Select approved claims players have seen least.

        Args:
            limit: Maximum claims to return

        Returns:
            Approved claims ordered by ascending times_shown, oldest first on ties
        """
        async with self._lock:
            approved = [c for c in self._claims.values() if c.status == ClaimStatus.APPROVED]
        approved.sort(key=lambda c: (c.times_shown, c.created_at))
        return approved[:limit]

    async def select_reported(
        self, min_report_count: int = 1, limit: int = 20
    ) -> List[PublishedClaim]:
        """
        Select claims reported at least min_report_count times.

        Args:
            min_report_count: Minimum times_reported to include
            limit: Maximum claims to return

        Returns:
            Claims ordered by descending times_reported
        """
        async with self._lock:
            reported = [
                c for c in self._claims.values() if c.times_reported >= max(1, min_report_count)
            ]
        reported.sort(key=lambda c: (-c.times_reported, c.created_at))
        return reported[:limit]

    async def increment_shown(self, claim_id: str) -> None:
        """Atomically add one to times_shown."""
        await self._update(claim_id, lambda c: {"times_shown": c.times_shown + 1})

    async def increment_reported(self, claim_id: str) -> None:
        """Atomically add one to times_reported."""
        await self._update(claim_id, lambda c: {"times_reported": c.times_reported + 1})

    async def clear_report_count(self, claim_id: str) -> None:
        """Reset times_reported after an admin keeps a reported claim."""
        await self._update(claim_id, lambda c: {"times_reported": 0})

    async def delete_by_id(self, claim_id: str) -> None:
        """Permanently remove a claim."""
        async with self._lock:
            self._require(claim_id)
            claims = {k: v for k, v in self._claims.items() if k != claim_id}
            self._commit(claims)
        self.logger.info("Deleted claim", claim_id=claim_id)

    async def count_approved(self) -> int:
        """Number of playable claims."""
        async with self._lock:
            return sum(1 for c in self._claims.values() if c.status == ClaimStatus.APPROVED)

    async def list_drafts(self) -> List[PublishedClaim]:
        """Draft claims awaiting review, newest first."""
        async with self._lock:
            drafts = [c for c in self._claims.values() if c.status == ClaimStatus.DRAFT]
        drafts.sort(key=lambda c: c.created_at, reverse=True)
        return drafts

    async def approve_draft(self, claim_id: str) -> PublishedClaim:
        """Promote a draft claim to approved."""
        claim = await self._update(claim_id, lambda c: {"status": ClaimStatus.APPROVED})
        self.logger.info("Approved draft claim", claim_id=claim_id)
        return claim

    async def delete_manual_claims(self) -> int:
        """
        Purge every manually entered claim, keeping pipeline-generated ones.

        Returns:
            Number of claims deleted
        """
        async with self._lock:
            manual_ids = [
                claim_id
                for claim_id, claim in self._claims.items()
                if claim.origin == ClaimOrigin.MANUAL
            ]
            if manual_ids:
                claims = {k: v for k, v in self._claims.items() if k not in manual_ids}
                self._commit(claims)

        self.logger.info(f"Deleted {len(manual_ids)} manual claims")
        return len(manual_ids)

    async def _update(self, claim_id: str, changes) -> PublishedClaim:
        async with self._lock:
            claim = self._require(claim_id)
            updated = claim.model_copy(update=changes(claim))
            self._commit({**self._claims, claim_id: updated})
        return updated

    def _require(self, claim_id: str) -> PublishedClaim:
        claim = self._claims.get(claim_id)
        if claim is None:
            raise ClaimNotFoundError(claim_id)
        return claim

    def _commit(self, claims: Dict[str, PublishedClaim]) -> None:
        """
        Persist ``claims`` and make them the live map. Caller holds the lock.

        The in-memory map is replaced only after the file write succeeds, so a
        failed write leaves the store exactly as it was.
        """
        self._persist(claims)
        self._claims = claims

    def _persist(self, claims: Dict[str, PublishedClaim]) -> None:
        if not self.persistence_path:
            return

        payload = {
            "claims": [c.model_dump(mode="json") for c in claims.values()],
        }
        try:
            self.persistence_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.persistence_path.with_suffix(".tmp")
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp_path.replace(self.persistence_path)
        except OSError as e:
            self.logger.error(f"Failed to persist claims: {e}")
            raise StoreError(f"Failed to persist claims to {self.persistence_path}: {e}") from e

    def _load_from_file(self) -> None:
        try:
            payload = json.loads(self.persistence_path.read_text(encoding="utf-8"))
            for raw in payload.get("claims", []):
                claim = PublishedClaim.model_validate(raw)
                self._claims[claim.id] = claim
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to load claims from {self.persistence_path}: {e}") from e

        self.logger.info(
            f"Loaded {len(self._claims)} claims from disk",
            path=str(self.persistence_path),
        )
