"""Fact extraction agent: pulls 1-2 headline facts from a raw article.

The agent never raises past its boundary. Backend failures, responses
without a JSON array, and arrays of the wrong shape all degrade to an
empty fact list so the orchestrator can move on to the next article.
"""

from typing import Any, List, Optional

from newsquiz_system.agents.sifters.base_sifter import BaseSifter
from newsquiz_system.config.prompts import FACT_EXTRACTION_PROMPT, PromptTemplate
from newsquiz_system.data_management.schemas import ExtractedFact, RawArticle
from newsquiz_system.llm.rate_limiter import CallPacer
from newsquiz_system.llm.response_parser import ParseFailure, parse_json_array
from newsquiz_system.llm.text_generator import TextGenerator


class FactExtractionAgent(BaseSifter):
    """
    Extracts headline facts from RawArticle records using a text generator.

    Attributes:
        generator: Text-generation backend
        pacer: Optional CallPacer awaited before every backend call
        prompt: Versioned extraction prompt template
        max_facts: Facts kept per article
        max_output_tokens: Output cap passed to the backend
    """

    DEFAULT_MAX_FACTS = 2

    def __init__(
        self,
        generator: TextGenerator,
        pacer: Optional[CallPacer] = None,
        prompt: PromptTemplate = FACT_EXTRACTION_PROMPT,
        max_facts: int = DEFAULT_MAX_FACTS,
        max_output_tokens: Optional[int] = None,
    ):
        super().__init__(
            name="FactExtractionAgent",
            description="Extracts headline facts from articles using an LLM",
        )
        self.generator = generator
        self.pacer = pacer
        self.prompt = prompt
        self.max_facts = max_facts
        self.max_output_tokens = max_output_tokens

    async def extract(self, article: RawArticle) -> List[ExtractedFact]:
        """
        Extract headline facts from one article.

        Args:
            article: Normalized article

        Returns:
            Up to max_facts facts; empty on any backend or parse failure
        """
        prompt = self.prompt.render(
            title=article.title,
            source=article.source,
            body=article.body,
        )

        if self.pacer is not None:
            await self.pacer.wait()

        try:
            response = await self.generator.generate(
                prompt,
                system_instruction=self.prompt.system,
                max_output_tokens=self.max_output_tokens,
            )
        except Exception as e:
            self.error_count += 1
            self.logger.warning(
                "Fact extraction call failed",
                article=article.title,
                error=str(e),
            )
            return []

        result = parse_json_array(response)
        if isinstance(result, ParseFailure):
            self.error_count += 1
            self.logger.warning(
                "No fact array in response",
                article=article.title,
                reason=result.reason,
            )
            return []

        facts = [fact for fact in map(self._to_fact, result.value) if fact is not None]
        facts = facts[: self.max_facts]
        self.processed_count += 1

        self.logger.debug(
            f"Extracted {len(facts)} facts",
            article=article.title,
            source=article.source,
            prompt=self.prompt.label,
        )
        return facts

    def _to_fact(self, raw: Any) -> Optional[ExtractedFact]:
        """Convert one decoded array item, or None if it has the wrong shape."""
        if not isinstance(raw, dict):
            return None

        statement = raw.get("fact", raw.get("statement"))
        if not isinstance(statement, str) or not statement.strip():
            return None

        context = raw.get("context", "")
        if not isinstance(context, str):
            context = ""

        return ExtractedFact(statement=statement.strip(), context=context.strip())

    async def sift(self, content: dict) -> list[dict]:
        """
        Extract facts from content.

        Args:
            content: Dict with 'article' (RawArticle or its dict form)

        Returns:
            List of ExtractedFact dicts
        """
        article = content.get("article")
        if article is None:
            return []
        if not isinstance(article, RawArticle):
            article = RawArticle.model_validate(article)
        return [f.model_dump() for f in await self.extract(article)]

    def get_capabilities(self) -> list[str]:
        return ["fact_extraction", "headline_identification"]
