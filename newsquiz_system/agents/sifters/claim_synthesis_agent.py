"""Claim synthesis agent: turns one headline fact into a true/false claim pair.

The difficulty calibration policy lives in the prompt template; this agent
fills in the policy bounds, the fact, and optional feedback guidance, then
decodes the first JSON object in the response. Missing or blank fields
mean no candidate.
"""

from typing import Optional

from newsquiz_system.agents.sifters.base_sifter import BaseSifter
from newsquiz_system.config.prompts import (
    CLAIM_SYNTHESIS_PROMPT,
    PERCENT_POINTS_MAX,
    PERCENT_POINTS_MIN,
    PromptTemplate,
)
from newsquiz_system.data_management.schemas import (
    CandidateClaimPair,
    ExtractedFact,
    RawArticle,
)
from newsquiz_system.llm.rate_limiter import CallPacer
from newsquiz_system.llm.response_parser import ParseFailure, parse_json_object
from newsquiz_system.llm.text_generator import TextGenerator

REQUIRED_FIELDS = ("true_claim", "false_claim", "explanation")


class ClaimSynthesisAgent(BaseSifter):
    """
    Synthesizes CandidateClaimPair records from extracted facts.

    Attributes:
        generator: Text-generation backend
        pacer: Optional CallPacer awaited before every backend call
        prompt: Versioned synthesis prompt template
        magnitude_min: Lower bound (percent) for numeric changes
        magnitude_max: Upper bound (percent) for numeric changes
        max_output_tokens: Output cap passed to the backend
    """

    def __init__(
        self,
        generator: TextGenerator,
        pacer: Optional[CallPacer] = None,
        prompt: PromptTemplate = CLAIM_SYNTHESIS_PROMPT,
        magnitude_min: int = 30,
        magnitude_max: int = 60,
        max_output_tokens: Optional[int] = None,
    ):
        super().__init__(
            name="ClaimSynthesisAgent",
            description="Builds calibrated true/false claim pairs from facts",
        )
        if not 0 < magnitude_min <= magnitude_max:
            raise ValueError("magnitude bounds must satisfy 0 < min <= max")
        self.generator = generator
        self.pacer = pacer
        self.prompt = prompt
        self.magnitude_min = magnitude_min
        self.magnitude_max = magnitude_max
        self.max_output_tokens = max_output_tokens

    def build_prompt(self, fact: ExtractedFact, article: RawArticle, guidance: str = "") -> str:
        """Render the synthesis prompt for one fact."""
        guidance_block = f"\n{guidance.strip()}\n" if guidance and guidance.strip() else ""
        return self.prompt.render(
            statement=fact.statement,
            context=fact.context or "none given",
            source=article.source,
            guidance=guidance_block,
            magnitude_min=self.magnitude_min,
            magnitude_max=self.magnitude_max,
            points_min=PERCENT_POINTS_MIN,
            points_max=PERCENT_POINTS_MAX,
        )

    async def synthesize(
        self,
        fact: ExtractedFact,
        article: RawArticle,
        guidance: str = "",
    ) -> Optional[CandidateClaimPair]:
        """
        Generate a claim pair for one fact.

        Args:
            fact: Headline fact to build the pair around
            article: Article the fact came from (source and date are copied)
            guidance: Optional feedback guidance injected into the prompt

        Returns:
            CandidateClaimPair, or None on backend failure or unusable output
        """
        prompt = self.build_prompt(fact, article, guidance)

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
                "Claim synthesis call failed",
                fact=fact.statement,
                error=str(e),
            )
            return None

        result = parse_json_object(response)
        if isinstance(result, ParseFailure):
            self.error_count += 1
            self.logger.warning(
                "No claim object in response",
                fact=fact.statement,
                reason=result.reason,
            )
            return None

        fields = {}
        for name in REQUIRED_FIELDS:
            value = result.value.get(name)
            if not isinstance(value, str) or not value.strip():
                self.error_count += 1
                self.logger.warning(
                    "Claim object missing required field",
                    fact=fact.statement,
                    missing=name,
                )
                return None
            fields[name] = value.strip()

        self.processed_count += 1
        return CandidateClaimPair(
            **fields,
            source=article.source,
            date=article.published_date,
        )

    async def sift(self, content: dict) -> list[dict]:
        """
        Synthesize a claim pair from content.

        Args:
            content: Dict with 'fact', 'article' and optional 'guidance'

        Returns:
            One-element list with the candidate dict, or empty list
        """
        fact = content.get("fact")
        article = content.get("article")
        if fact is None or article is None:
            return []
        if not isinstance(fact, ExtractedFact):
            fact = ExtractedFact.model_validate(fact)
        if not isinstance(article, RawArticle):
            article = RawArticle.model_validate(article)

        candidate = await self.synthesize(fact, article, content.get("guidance", ""))
        return [candidate.model_dump()] if candidate else []

    def get_capabilities(self) -> list[str]:
        return ["claim_synthesis", "difficulty_calibration"]
