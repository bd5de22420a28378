"""Prompt template for true/false claim pair synthesis.

Encodes the difficulty calibration policy. A pair must be solvable only by
someone who consumed the source content: the false variant differs by a
meaningful but not obvious margin, never by logical direction alone
("increased" vs "decreased") and never by an implausible amount.
"""

from newsquiz_system.config.prompts.template import PromptTemplate

CLAIM_SYNTHESIS_SYSTEM_PROMPT = """You write true/false claim pairs for a news-literacy quiz. Players see both claims and must pick the true one, so the pair must only be answerable by someone who actually read or heard the story. You always answer with JSON only."""

CLAIM_SYNTHESIS_PROMPT = PromptTemplate(
    name="claim_synthesis",
    version="7",
    system=CLAIM_SYNTHESIS_SYSTEM_PROMPT,
    user="""Create a true/false claim pair that tests knowledge of this news story.

ORIGINAL FACT: {statement}
CONTEXT: {context}
SOURCE: {source}
{guidance}
The false claim must be MEANINGFULLY different but still plausible.

SWEET SPOT EXAMPLES:

GOOD - significant but believable difference:
- TRUE: "OpenAI raised $6.6 billion in Series C funding"
  FALSE: "OpenAI raised $4.2 billion in Series C funding"
- TRUE: "Meta announced 18,000 job cuts in early 2025"
  FALSE: "Meta announced 11,000 job cuts in early 2025"

TOO OBVIOUS - easy to spot from general knowledge:
- TRUE: "Raised $100 million"  FALSE: "Raised $10 million" (10x is too large)

TOO SUBTLE - the difference does not matter:
- TRUE: "Stock price hit $127.40"  FALSE: "Stock price hit $127.20"

SOLVABLE BY LOGIC ALONE - never do this:
- TRUE: "Sales increased 12%"  FALSE: "Sales decreased 12%"

RULES FOR CHANGES:
- Numbers: change by {magnitude_min}-{magnitude_max}% of the original value
- Percentages: change by {points_min}-{points_max} percentage points
- Companies: swap with a realistic competitor in the same industry
- People: swap with someone in a comparable role
- Dates: shift by months or quarters, not by days or years

Generate:
1. true_claim: the main fact stated clearly (1-2 sentences)
2. false_claim: the same statement with one meaningful change that still sounds real
3. explanation: what actually happened, who was involved, when, and why it matters (2-3 sentences)

The explanation is shown to the player after they answer. Write it as neutral news context.
Never mention which detail differs, that anything was changed, or how the claims were written.

Respond ONLY with valid JSON:
{{
  "true_claim": "...",
  "false_claim": "...",
  "explanation": "..."
}}""",
)

# Percentage-point band for claims that are themselves percentages
PERCENT_POINTS_MIN = 10
PERCENT_POINTS_MAX = 25
