"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        gemini_api_key: Google Gemini API key (required to run the pipeline)
        gemini_model: Default Gemini model to use
        max_output_tokens: Upper bound on generated tokens per backend call
        llm_max_retries: Attempts per backend call before giving up
        llm_min_interval: Minimum seconds between consecutive backend calls
        max_rpm: Maximum requests per minute (free tier default)
        fetch_timeout: Per-feed HTTP timeout in seconds
        entries_per_feed: Most-recent entries taken from each feed
        min_title_length: Shortest cleaned headline accepted as an article
        max_body_length: Body excerpt truncation length (characters)
        inter_source_delay: Pause between consecutive feed fetches (seconds)
        max_articles: Articles processed per run
        max_claims: Claims generated per run
        claims_per_article: Facts turned into claims for each article
        max_facts_per_article: Facts kept from each extraction response
        min_claim_length: Shortest claim text the validator accepts
        magnitude_change_min: Lower bound (percent) for numeric changes in false claims
        magnitude_change_max: Upper bound (percent) for numeric changes in false claims
        guidance_limit: Reported claims rendered into feedback guidance
        auto_publish: Publish generated claims directly instead of staging drafts
        store_path: Optional JSON file backing the claim store
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
    """

    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key"
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Default Gemini model identifier"
    )
    max_output_tokens: int = Field(
        default=800,
        description="Maximum output tokens per generation call"
    )
    llm_max_retries: int = Field(
        default=3,
        description="Attempts per generation call (exponential backoff between)"
    )
    llm_min_interval: float = Field(
        default=1.0,
        description="Minimum seconds between consecutive generation calls"
    )
    max_rpm: int = Field(
        default=15,
        description="Maximum requests per minute (free tier limit)"
    )
    fetch_timeout: float = Field(
        default=5.0,
        description="Per-feed retrieval timeout in seconds"
    )
    entries_per_feed: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Most-recent entries extracted per feed"
    )
    min_title_length: int = Field(
        default=15,
        description="Minimum cleaned title length for a feed entry"
    )
    max_body_length: int = Field(
        default=1000,
        description="Body excerpt truncation length"
    )
    inter_source_delay: float = Field(
        default=0.5,
        description="Seconds to wait between feed fetches"
    )
    max_articles: int = Field(
        default=15,
        description="Maximum articles processed per run"
    )
    max_claims: int = Field(
        default=20,
        description="Maximum claims generated per run"
    )
    claims_per_article: int = Field(
        default=1,
        description="Facts synthesized into claims per article"
    )
    max_facts_per_article: int = Field(
        default=2,
        description="Facts kept from one extraction response"
    )
    min_claim_length: int = Field(
        default=20,
        description="Minimum characters in a true or false claim"
    )
    magnitude_change_min: int = Field(
        default=30,
        description="Smallest numeric change (percent) asked of false claims"
    )
    magnitude_change_max: int = Field(
        default=60,
        description="Largest numeric change (percent) asked of false claims"
    )
    guidance_limit: int = Field(
        default=5,
        description="Reported claims included in feedback guidance"
    )
    auto_publish: bool = Field(
        default=True,
        description="Write generated claims as approved (True) or draft (False)"
    )
    store_path: str | None = Field(
        default=None,
        description="JSON file for claim store persistence"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance - import this throughout the application
settings = Settings()
