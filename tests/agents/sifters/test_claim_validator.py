"""Tests for ClaimValidator acceptance rules.

Tests cover:
1. Each rejection rule in isolation
2. Rule order (first match wins)
3. Determinism: same inputs, same answer
4. Run-local duplicate detection
5. Policy configuration
"""

from datetime import date

import pytest

from newsquiz_system.agents.sifters.claim_validator import (
    ClaimValidator,
    RejectionReason,
    ValidationPolicy,
    normalize_claim,
)
from newsquiz_system.config.settings import Settings
from newsquiz_system.data_management.schemas import CandidateClaimPair


def make_candidate(
    true_claim: str = "The city council approved a $2 million budget for park renovations",
    false_claim: str = "The city council approved a $3 million budget for park renovations",
    explanation: str = "The council voted 7-2 to fund renovations at three parks.",
) -> CandidateClaimPair:
    return CandidateClaimPair(
        true_claim=true_claim,
        false_claim=false_claim,
        explanation=explanation,
        source="Example News",
        date=date(2025, 1, 10),
    )


@pytest.fixture
def validator():
    return ClaimValidator()


# ============================================================================
# Individual rules
# ============================================================================


class TestRules:
    """Tests for each acceptance rule."""

    def test_good_candidate_accepted(self, validator):
        candidate = make_candidate()

        assert validator.check(candidate) is None
        assert validator.accept(candidate) is True

    def test_too_short(self, validator):
        candidate = make_candidate(false_claim="Budget was $3M")

        assert validator.check(candidate) == RejectionReason.TOO_SHORT

    def test_whitespace_does_not_count_toward_length(self, validator):
        candidate = make_candidate(true_claim="   Short claim    " + " " * 20)

        assert validator.check(candidate) == RejectionReason.TOO_SHORT

    @pytest.mark.parametrize(
        "explanation",
        [
            "The key part is the budget amount.",
            "We changed the amount from $2 million to $3 million.",
            "The false claim inflates the budget.",
        ],
    )
    def test_banned_phrase_in_explanation(self, validator, explanation):
        candidate = make_candidate(explanation=explanation)

        assert validator.check(candidate) == RejectionReason.BANNED_PHRASE

    def test_banned_phrase_case_insensitive(self, validator):
        candidate = make_candidate(false_claim="THE ALTERED budget for park renovations is $3 million")

        assert validator.check(candidate) == RejectionReason.BANNED_PHRASE

    def test_npr_topics_label_rejected(self, validator):
        candidate = make_candidate(
            true_claim="NPR Topics: Entertainment coverage this week",
            false_claim="NPR Topics: Sports coverage this week and more",
        )

        assert validator.check(candidate) == RejectionReason.STRUCTURAL_PATTERN

    def test_exact_npr_topics_false_claim_rejected(self, validator):
        candidate = make_candidate(false_claim="NPR Topics: Entertainment")

        assert validator.check(candidate) == RejectionReason.STRUCTURAL_PATTERN
        assert validator.accept(candidate) is False

    def test_all_caps_label_rejected(self, validator):
        candidate = make_candidate(true_claim="WORLD NEWS: Leaders met in Geneva on Monday")

        assert validator.check(candidate) == RejectionReason.STRUCTURAL_PATTERN

    def test_breaking_news_rejected(self, validator):
        candidate = make_candidate(false_claim="Breaking news from the city council budget meeting")

        assert validator.check(candidate) == RejectionReason.STRUCTURAL_PATTERN

    def test_identical_claims(self, validator):
        text = "The city council approved a $2 million budget for park renovations"
        candidate = make_candidate(true_claim=text, false_claim=text)

        assert validator.check(candidate) == RejectionReason.IDENTICAL

    def test_identical_after_normalization(self, validator):
        candidate = make_candidate(
            true_claim="The city council approved a $2 million budget",
            false_claim="  the CITY council approved a  $2 million budget ",
        )

        assert validator.check(candidate) == RejectionReason.IDENTICAL


# ============================================================================
# Duplicates and ordering
# ============================================================================


class TestDuplicates:
    """Tests for run-local duplicate suppression."""

    def test_duplicate_true_claim(self, validator):
        first = make_candidate()
        second = make_candidate(false_claim="The city council approved a $5 million budget for park renovations")

        assert validator.check(second, [first]) == RejectionReason.DUPLICATE

    def test_cross_match_counts_as_duplicate(self, validator):
        first = make_candidate()
        swapped = make_candidate(
            true_claim="The city council approved a $3 million budget for park renovations",
            false_claim="The city council approved a $4 million budget for park renovations",
        )

        assert validator.check(swapped, [first]) == RejectionReason.DUPLICATE

    def test_distinct_candidate_accepted(self, validator):
        first = make_candidate()
        other = make_candidate(
            true_claim="The regional airport added 12 new international routes",
            false_claim="The regional airport added 20 new international routes",
        )

        assert validator.check(other, [first]) is None

    def test_first_rule_wins(self, validator):
        first = make_candidate()
        short_duplicate = make_candidate(false_claim="Too short")

        assert validator.check(short_duplicate, [first]) == RejectionReason.TOO_SHORT


class TestDeterminism:
    """Validation depends only on its inputs."""

    def test_repeat_calls_agree(self, validator):
        candidates = [
            make_candidate(),
            make_candidate(explanation="I changed the number."),
            make_candidate(false_claim="short"),
        ]

        first = [validator.check(c) for c in candidates]
        second = [validator.check(c) for c in candidates]

        assert first == second
        assert first == [None, RejectionReason.BANNED_PHRASE, RejectionReason.TOO_SHORT]


class TestPolicy:
    """Tests for ValidationPolicy configuration."""

    def test_min_length_from_settings(self):
        policy = ValidationPolicy.from_settings(Settings(min_claim_length=80))
        validator = ClaimValidator(policy)

        assert validator.check(make_candidate()) == RejectionReason.TOO_SHORT

    def test_custom_banned_phrases(self):
        validator = ClaimValidator(ValidationPolicy(banned_phrases=("three parks",)))

        assert validator.check(make_candidate()) == RejectionReason.BANNED_PHRASE

    def test_normalize_claim(self):
        assert normalize_claim("  Hello\n  World ") == "hello world"
