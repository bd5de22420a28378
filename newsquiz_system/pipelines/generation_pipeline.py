"""Claim generation pipeline: feeds in, validated claim pairs out.

One run sequences the pipeline stages:
1. Load feedback guidance from reported claims
2. Fetch raw articles from configured feeds
3. Extract headline facts and synthesize claim pairs, one backend call at a time
4. Validate and deduplicate candidates within the run
5. Persist promoted claims as approved or draft

Transient failures (feeds, model output) are absorbed by the stages that
meet them. Store failures abort the run with a FAILED result.
"""

import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from loguru import logger

from newsquiz_system.agents.crawlers.newsfeed_agent import NewsFeedAgent
from newsquiz_system.agents.sifters.claim_synthesis_agent import ClaimSynthesisAgent
from newsquiz_system.agents.sifters.claim_validator import ClaimValidator, ValidationPolicy
from newsquiz_system.agents.sifters.fact_extraction_agent import FactExtractionAgent
from newsquiz_system.agents.sifters.feedback_aggregator import FeedbackAggregator
from newsquiz_system.config.settings import Settings, settings as default_settings
from newsquiz_system.data_management.claim_store import ClaimRepository
from newsquiz_system.data_management.schemas import (
    CandidateClaimPair,
    ClaimStatus,
    RawArticle,
)
from newsquiz_system.errors import PipelineError, StoreError
from newsquiz_system.llm.rate_limiter import CallPacer
from newsquiz_system.llm.text_generator import TextGenerator


class RunStage(str, Enum):
    """Linear run states; FAILED is reachable from any stage."""

    START = "start"
    FETCH = "fetch"
    EXTRACT_AND_SYNTHESIZE = "extract_and_synthesize"
    VALIDATE = "validate"
    PERSIST = "persist"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Outcome and statistics of one run."""

    articles_fetched: int = 0
    articles_processed: int = 0
    facts_extracted: int = 0
    candidates_generated: int = 0
    candidates_rejected: int = 0
    claims_published: int = 0
    rejections: Dict[str, int] = field(default_factory=dict)
    stage: RunStage = RunStage.START
    status: ClaimStatus = ClaimStatus.APPROVED
    guided: bool = False
    error: Optional[str] = None
    failed_stage: Optional[RunStage] = None
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.stage == RunStage.DONE

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "success": self.success,
            "stage": self.stage.value,
            "articles_fetched": self.articles_fetched,
            "articles_processed": self.articles_processed,
            "facts_extracted": self.facts_extracted,
            "candidates_generated": self.candidates_generated,
            "candidates_rejected": self.candidates_rejected,
            "claims_published": self.claims_published,
            "rejections": dict(self.rejections),
            "status": self.status.value,
            "guided": self.guided,
            "error": self.error,
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "duration_seconds": self.duration_seconds,
        }


class ClaimGenerationPipeline:
    """
    Orchestrates fetch -> extract -> synthesize -> validate -> persist.

    Every collaborator is injected; defaults are built from settings so a
    caller only has to supply the text generator and the store.

    Usage:
        pipeline = ClaimGenerationPipeline(generator=GeminiClient(), store=ClaimStore())
        result = await pipeline.run()
        print(f"Published {result.claims_published} claims")

    Attributes:
        store: Claim repository receiving promoted claims
        fetcher: NewsFeedAgent producing raw articles
        extractor: FactExtractionAgent
        synthesizer: ClaimSynthesisAgent
        validator: ClaimValidator
        feedback: FeedbackAggregator
        pacer: CallPacer shared by every backend call in a run
        max_articles: Articles processed per run
        max_claims: Candidates synthesized per run
        claims_per_article: Facts per article turned into claims
        auto_publish: Persist as approved (True) or draft (False)
    """

    def __init__(
        self,
        generator: TextGenerator,
        store: ClaimRepository,
        config: Optional[Settings] = None,
        fetcher: Optional[NewsFeedAgent] = None,
        extractor: Optional[FactExtractionAgent] = None,
        synthesizer: Optional[ClaimSynthesisAgent] = None,
        validator: Optional[ClaimValidator] = None,
        feedback: Optional[FeedbackAggregator] = None,
        pacer: Optional[CallPacer] = None,
        auto_publish: Optional[bool] = None,
    ):
        config = config or default_settings
        self.store = store
        self.pacer = pacer or CallPacer(min_interval=config.llm_min_interval, max_rpm=config.max_rpm)
        self.fetcher = fetcher or NewsFeedAgent(config=config)
        self.extractor = extractor or FactExtractionAgent(
            generator,
            max_facts=config.max_facts_per_article,
            max_output_tokens=config.max_output_tokens,
        )
        self.synthesizer = synthesizer or ClaimSynthesisAgent(
            generator,
            magnitude_min=config.magnitude_change_min,
            magnitude_max=config.magnitude_change_max,
            max_output_tokens=config.max_output_tokens,
        )
        # Pacing is a pipeline concern: one pacer spans both LLM stages
        self.extractor.pacer = self.pacer
        self.synthesizer.pacer = self.pacer
        self.validator = validator or ClaimValidator(ValidationPolicy.from_settings(config))
        self.feedback = feedback or FeedbackAggregator(limit=config.guidance_limit)
        self.max_articles = config.max_articles
        self.max_claims = config.max_claims
        self.claims_per_article = config.claims_per_article
        self.auto_publish = config.auto_publish if auto_publish is None else auto_publish

        self.logger = logger.bind(component="ClaimGenerationPipeline")

    async def run(self) -> GenerationResult:
        """
        Execute one generation run.

        Returns:
            GenerationResult. success is False only for fatal-class errors
            (store unreachable); zero claims is a successful outcome.
        """
        started = time.monotonic()
        result = GenerationResult(
            status=ClaimStatus.APPROVED if self.auto_publish else ClaimStatus.DRAFT,
        )
        self.logger.info("Starting claim generation run", auto_publish=self.auto_publish)

        try:
            guidance = await self.feedback.load_guidance(self.store)
            result.guided = bool(guidance)

            result.stage = RunStage.FETCH
            articles = await self.fetcher.fetch_all()
            result.articles_fetched = len(articles)

            if not articles:
                self.logger.warning("No articles fetched, ending run early")
                result.stage = RunStage.DONE
                return self._finish(result, started)

            result.stage = RunStage.EXTRACT_AND_SYNTHESIZE
            candidates = await self._generate_candidates(articles[: self.max_articles], guidance, result)

            result.stage = RunStage.VALIDATE
            promoted = self._validate(candidates, result)

            result.stage = RunStage.PERSIST
            if promoted:
                stored = await self.store.insert_claims(promoted, status=result.status)
                result.claims_published = len(stored)

            result.stage = RunStage.DONE

        except StoreError as e:
            result.failed_stage = result.stage
            result.stage = RunStage.FAILED
            result.error = str(e)
            self.logger.error(
                "Claim generation run failed",
                failed_stage=result.failed_stage.value,
                error=str(e),
            )

        return self._finish(result, started)

    async def run_or_raise(self) -> GenerationResult:
        """Execute a run, raising PipelineError instead of returning a FAILED result."""
        result = await self.run()
        if not result.success:
            stage = result.failed_stage or result.stage
            raise PipelineError(result.error or "generation run failed", stage=stage.value)
        return result

    async def _generate_candidates(
        self,
        articles: List[RawArticle],
        guidance: str,
        result: GenerationResult,
    ) -> List[CandidateClaimPair]:
        candidates: List[CandidateClaimPair] = []

        for article in articles:
            if len(candidates) >= self.max_claims:
                self.logger.info("Claim cap reached", max_claims=self.max_claims)
                break

            facts = await self.extractor.extract(article)
            result.articles_processed += 1
            result.facts_extracted += len(facts)

            for fact in facts[: self.claims_per_article]:
                if len(candidates) >= self.max_claims:
                    break
                candidate = await self.synthesizer.synthesize(fact, article, guidance)
                if candidate is not None:
                    candidates.append(candidate)

        result.candidates_generated = len(candidates)
        return candidates

    def _validate(
        self,
        candidates: List[CandidateClaimPair],
        result: GenerationResult,
    ) -> List[CandidateClaimPair]:
        promoted: List[CandidateClaimPair] = []
        rejections: Counter = Counter()

        for candidate in candidates:
            reason = self.validator.check(candidate, promoted)
            if reason is None:
                promoted.append(candidate)
            else:
                rejections[reason.value] += 1
                self.logger.debug(
                    "Candidate discarded",
                    reason=reason.value,
                    true_claim=candidate.true_claim,
                    source=candidate.source,
                )

        result.candidates_rejected = sum(rejections.values())
        result.rejections = dict(rejections)
        return promoted

    def _finish(self, result: GenerationResult, started: float) -> GenerationResult:
        result.duration_seconds = round(time.monotonic() - started, 2)
        self.logger.info("Claim generation run finished", **result.to_dict())
        return result
