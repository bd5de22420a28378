"""Deterministic acceptance rules for generated claim pairs.

Rules are applied in a fixed order and the first match rejects:

1. TOO_SHORT: either claim shorter than the minimum length
2. BANNED_PHRASE: meta-commentary about how the pair was written
3. STRUCTURAL_PATTERN: category labels or feed furniture instead of news
4. IDENTICAL: true and false claim are the same text
5. DUPLICATE: either claim already used by a pair promoted this run

No rule calls a model. check() and accept() depend only on their inputs,
so calling them twice with the same arguments gives the same answer.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Pattern, Tuple

from loguru import logger

from newsquiz_system.config.settings import Settings
from newsquiz_system.data_management.schemas import CandidateClaimPair

DEFAULT_BANNED_PHRASES: Tuple[str, ...] = (
    "the key part",
    "key detail",
    "the false claim",
    "the true claim",
    "i changed",
    "we changed",
    "was changed to",
    "meaningful change",
    "meaningfully different",
    "plausible but wrong",
    "opposite outcome",
    "the altered",
)

DEFAULT_STRUCTURAL_PHRASES: Tuple[str, ...] = (
    "topics:",
    "breaking news",
    "reports on",
    "category:",
)

# Leading all-caps label followed by a colon, e.g. "WORLD NEWS: ..."
DEFAULT_LABEL_PATTERN = r"^\s*[A-Z][A-Z0-9&'/\- ]{1,40}:"

_WS_RE = re.compile(r"\s+")


class RejectionReason(str, Enum):
    """Which acceptance rule rejected a candidate."""

    TOO_SHORT = "too_short"
    BANNED_PHRASE = "banned_phrase"
    STRUCTURAL_PATTERN = "structural_pattern"
    IDENTICAL = "identical"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class ValidationPolicy:
    """
    Tunable thresholds and phrase lists for claim validation.

    Attributes:
        min_length: Minimum characters in each claim
        banned_phrases: Lowercase meta-commentary phrases (substring match)
        structural_phrases: Lowercase feed-furniture phrases (substring match)
        label_pattern: Regex matching category-label-shaped text
    """

    min_length: int = 20
    banned_phrases: Tuple[str, ...] = DEFAULT_BANNED_PHRASES
    structural_phrases: Tuple[str, ...] = DEFAULT_STRUCTURAL_PHRASES
    label_pattern: str = DEFAULT_LABEL_PATTERN

    @classmethod
    def from_settings(cls, config: Settings) -> "ValidationPolicy":
        return cls(min_length=config.min_claim_length)


def normalize_claim(text: str) -> str:
    """Casefold and collapse whitespace for equality comparisons."""
    return _WS_RE.sub(" ", text).strip().casefold()


class ClaimValidator:
    """
    Applies ValidationPolicy to CandidateClaimPair records.

    Attributes:
        policy: Thresholds and phrase lists in force
    """

    def __init__(self, policy: Optional[ValidationPolicy] = None):
        self.policy = policy or ValidationPolicy()
        self._label_re: Pattern = re.compile(self.policy.label_pattern)
        self.logger = logger.bind(component="ClaimValidator")

    def check(
        self,
        candidate: CandidateClaimPair,
        already_promoted: Iterable[CandidateClaimPair] = (),
    ) -> Optional[RejectionReason]:
        """
        Return the first rule that rejects the candidate, or None if it passes.

        Identity and duplicate checks compare normalized text (whitespace
        collapsed, casefolded), so claims differing only in case or spacing
        count as the same claim.

        Args:
            candidate: Pair to validate
            already_promoted: Pairs promoted earlier in the same run

        Returns:
            RejectionReason or None
        """
        claims = (candidate.true_claim, candidate.false_claim)

        if any(len(claim.strip()) < self.policy.min_length for claim in claims):
            return RejectionReason.TOO_SHORT

        texts = claims + (candidate.explanation,)
        if any(self._has_banned_phrase(text) for text in texts):
            return RejectionReason.BANNED_PHRASE

        if any(self._is_structural(claim) for claim in claims):
            return RejectionReason.STRUCTURAL_PATTERN

        true_key = normalize_claim(candidate.true_claim)
        false_key = normalize_claim(candidate.false_claim)
        if true_key == false_key:
            return RejectionReason.IDENTICAL

        seen = set()
        for promoted in already_promoted:
            seen.add(normalize_claim(promoted.true_claim))
            seen.add(normalize_claim(promoted.false_claim))
        if true_key in seen or false_key in seen:
            return RejectionReason.DUPLICATE

        return None

    def accept(
        self,
        candidate: CandidateClaimPair,
        already_promoted: Iterable[CandidateClaimPair] = (),
    ) -> bool:
        """True if the candidate clears every rule."""
        reason = self.check(candidate, already_promoted)
        if reason is not None:
            self.logger.debug(
                "Candidate rejected",
                reason=reason.value,
                true_claim=candidate.true_claim,
            )
            return False
        return True

    def _has_banned_phrase(self, text: str) -> bool:
        lowered = text.casefold()
        return any(phrase in lowered for phrase in self.policy.banned_phrases)

    def _is_structural(self, text: str) -> bool:
        if self._label_re.match(text):
            return True
        lowered = text.casefold()
        return any(phrase in lowered for phrase in self.policy.structural_phrases)
