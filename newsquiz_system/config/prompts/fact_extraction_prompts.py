"""Prompt template for headline fact extraction.

The extractor wants the main story of an article, the thing a listener or
reader would remember, not incidental background detail.
"""

from newsquiz_system.config.prompts.template import PromptTemplate

FACT_EXTRACTION_SYSTEM_PROMPT = """You are analyzing news content for a news-literacy quiz. You identify the HEADLINE FACTS: the main story someone would remember from consuming the content. You always answer with JSON only."""

FACT_EXTRACTION_PROMPT = PromptTemplate(
    name="fact_extraction",
    version="3",
    system=FACT_EXTRACTION_SYSTEM_PROMPT,
    user="""Find the HEADLINE FACTS in this content.

CONTENT:
Title: {title}
Source: {source}
Content: {body}

Extract 1-2 facts that represent THE MAIN STORY:
- What is the PRIMARY headline or announcement?
- What is the MOST IMPORTANT number, event, or development?
- What would someone mention if asked "what was that episode/article about?"

Focus on:
- Major announcements (funding rounds, product launches, partnerships)
- Significant statistics (market share, growth rates, user numbers)
- Key events (acquisitions, executive changes, policy decisions)
- Important trends (industry shifts, consumer behavior changes)

AVOID:
- Minor background details
- Tangential facts mentioned in passing
- Generic context or setup information
- Small numbers that don't matter

Respond ONLY with a valid JSON array:
[
  {{
    "fact": "the main headline fact with specific details",
    "context": "who is involved, when it happened and why it matters"
  }}
]""",
)
