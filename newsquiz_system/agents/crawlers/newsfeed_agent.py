"""NewsFeedAgent: sequential RSS fetcher producing RawArticle records.

Features:
- One bounded-timeout HTTP attempt per source via httpx
- Feed parsing and entry normalization via RSSCrawler (feedparser)
- Headline noise filtering and body truncation
- Fixed pacing delay between sources
- Partial failure tolerance: a failed source yields zero articles
"""

import asyncio
from datetime import datetime, timezone
from typing import Iterable, List, Optional

import httpx

from newsquiz_system.agents.crawlers.base_crawler import BaseCrawler
from newsquiz_system.agents.crawlers.sources.rss_crawler import RSSCrawler
from newsquiz_system.config.news_sources import NEWS_SOURCES, NewsSource
from newsquiz_system.config.settings import Settings, settings as default_settings
from newsquiz_system.data_management.schemas import RawArticle

USER_AGENT = "newsquiz-system/0.1 (+feed reader)"


class NewsFeedAgent(BaseCrawler):
    """
    Fetches configured feeds one at a time and normalizes their entries.

    Typical usage:
        agent = NewsFeedAgent()
        articles = await agent.fetch_all()

    Attributes:
        sources: Default source list used when fetch_all() gets none
        http_timeout: Per-feed retrieval timeout in seconds
        entries_per_feed: Most-recent entries taken from each feed
        min_title_length: Shortest cleaned title accepted
        max_body_length: Body excerpt truncation length
        inter_source_delay: Seconds between consecutive feed fetches
    """

    def __init__(
        self,
        sources: Optional[Iterable[NewsSource]] = None,
        config: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        rss_crawler: Optional[RSSCrawler] = None,
    ):
        """
        Initialize NewsFeedAgent.

        Args:
            sources: Sources to fetch by default (config NEWS_SOURCES if None)
            config: Settings providing fetch limits (global settings if None)
            http_client: Optional pre-built client; one is created per
                fetch_all() call when omitted
            rss_crawler: Optional feed parser
        """
        super().__init__(
            name="NewsFeedAgent",
            description="Fetches RSS feeds and normalizes entries into raw articles",
        )
        config = config or default_settings
        self.sources: List[NewsSource] = list(sources) if sources is not None else list(NEWS_SOURCES)
        self.http_timeout = config.fetch_timeout
        self.entries_per_feed = config.entries_per_feed
        self.min_title_length = config.min_title_length
        self.max_body_length = config.max_body_length
        self.inter_source_delay = config.inter_source_delay
        self.rss_crawler = rss_crawler or RSSCrawler()
        self._http_client = http_client

    async def fetch_all(self, sources: Optional[Iterable[NewsSource]] = None) -> List[RawArticle]:
        """
        Fetch every source in order and return all normalized articles.

        Never raises for source-level failures; a source that times out,
        returns a non-2xx status, or serves malformed content contributes
        zero articles.

        Args:
            sources: Sources to fetch (defaults to self.sources)

        Returns:
            Articles in source order, newest first within each source
        """
        sources = list(sources) if sources is not None else self.sources
        articles: List[RawArticle] = []

        if self._http_client is not None:
            articles = await self._fetch_sequential(self._http_client, sources)
        else:
            async with httpx.AsyncClient(
                timeout=self.http_timeout,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                articles = await self._fetch_sequential(client, sources)

        self.logger.info(
            f"Fetched {len(articles)} articles from {len(sources)} sources"
        )
        return articles

    async def _fetch_sequential(
        self, client: httpx.AsyncClient, sources: List[NewsSource]
    ) -> List[RawArticle]:
        articles: List[RawArticle] = []
        for index, source in enumerate(sources):
            if index > 0 and self.inter_source_delay > 0:
                await asyncio.sleep(self.inter_source_delay)
            articles.extend(await self._fetch_source(client, source))
        return articles

    async def fetch_data(self, source: NewsSource) -> List[RawArticle]:
        """Fetch a single source (BaseCrawler contract)."""
        if self._http_client is not None:
            return await self._fetch_source(self._http_client, source)
        async with httpx.AsyncClient(
            timeout=self.http_timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            return await self._fetch_source(client, source)

    async def _fetch_source(self, client: httpx.AsyncClient, source: NewsSource) -> List[RawArticle]:
        try:
            response = await client.get(source.url, timeout=self.http_timeout)
            response.raise_for_status()
        except httpx.TimeoutException:
            self.logger.warning(
                "Feed fetch timed out",
                source=source.name,
                timeout=self.http_timeout,
            )
            return []
        except httpx.HTTPStatusError as e:
            self.logger.warning(
                "Feed returned error status",
                source=source.name,
                status_code=e.response.status_code,
            )
            return []
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning(
                "Feed fetch failed",
                source=source.name,
                error=str(e),
            )
            return []

        parsed = self.rss_crawler.parse_feed(response.content)
        if not parsed["success"]:
            self.logger.warning(
                "Feed could not be parsed",
                source=source.name,
                error=parsed.get("error", "no entries"),
            )
            return []

        articles = self._to_articles(parsed, source)
        self.logger.debug(
            "Source fetched",
            source=source.name,
            entries=len(parsed["articles"]),
            articles=len(articles),
        )
        return articles

    def _to_articles(self, parsed: dict, source: NewsSource) -> List[RawArticle]:
        """Convert normalized feed entries to RawArticle, applying noise filters."""
        channel_title = parsed.get("feed_title", "").casefold()
        today = datetime.now(timezone.utc).date()
        articles: List[RawArticle] = []

        for entry in parsed["articles"]:
            if len(articles) >= self.entries_per_feed:
                break

            title = entry["title"]
            if not title or title.casefold() == channel_title:
                continue
            if len(title) < self.min_title_length:
                self.logger.debug("Skipping short title", source=source.name, title=title)
                continue

            body = self._truncate(entry["summary"] or title)
            published_at = entry["published_at"]

            articles.append(
                RawArticle(
                    title=title,
                    body=body,
                    source=source.name,
                    published_date=published_at.date() if published_at else today,
                    link=entry["link"],
                )
            )

        return articles

    def _truncate(self, text: str) -> str:
        if len(text) <= self.max_body_length:
            return text
        cut = text[: self.max_body_length]
        # Prefer ending on a word boundary when one is reasonably close
        space = cut.rfind(" ")
        if space > self.max_body_length * 0.8:
            cut = cut[:space]
        return cut.rstrip()

    async def process(self, input_data: dict) -> dict:
        """
        BaseAgent.process implementation routing to fetch_all().

        Args:
            input_data: Dict with optional 'sources' (list of NewsSource)

        Returns:
            Dict with success flag, articles (as dicts) and count
        """
        articles = await self.fetch_all(input_data.get("sources"))
        return {
            "success": True,
            "articles": [a.model_dump() for a in articles],
            "count": len(articles),
        }

    def get_capabilities(self) -> list[str]:
        return super().get_capabilities() + ["rss_parsing", "article_normalization"]
