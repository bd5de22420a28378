"""Prompt templates for the LLM-backed generation stages.

Modules:
    template: PromptTemplate value type
    fact_extraction_prompts: Headline fact extraction
    claim_synthesis_prompts: True/false claim pair synthesis
    feedback_prompts: Rendering of reported claims into guidance
"""

from newsquiz_system.config.prompts.template import PromptTemplate
from newsquiz_system.config.prompts.fact_extraction_prompts import (
    FACT_EXTRACTION_PROMPT,
)
from newsquiz_system.config.prompts.claim_synthesis_prompts import (
    CLAIM_SYNTHESIS_PROMPT,
    PERCENT_POINTS_MIN,
    PERCENT_POINTS_MAX,
)
from newsquiz_system.config.prompts.feedback_prompts import (
    FEEDBACK_GUIDANCE_HEADER,
    FEEDBACK_GUIDANCE_ITEM,
)

__all__ = [
    "PromptTemplate",
    "FACT_EXTRACTION_PROMPT",
    "CLAIM_SYNTHESIS_PROMPT",
    "PERCENT_POINTS_MIN",
    "PERCENT_POINTS_MAX",
    "FEEDBACK_GUIDANCE_HEADER",
    "FEEDBACK_GUIDANCE_ITEM",
]
