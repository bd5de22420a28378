"""Base class for all crawler agents."""

from abc import abstractmethod
from typing import Any

from newsquiz_system.agents.base_agent import BaseAgent


class BaseCrawler(BaseAgent):
    """
    Abstract base class for data acquisition agents (crawlers).

    Crawlers fetch raw data from external sources and normalize it. They
    absorb transient source failures: a source that cannot be read
    contributes nothing rather than aborting the caller.
    """

    @abstractmethod
    async def fetch_data(self, source: Any) -> list:
        """
        Fetch and normalize data from a single source.

        Args:
            source: Source descriptor

        Returns:
            Normalized items; empty when the source failed
        """
        pass

    def get_capabilities(self) -> list[str]:
        return [
            "data_acquisition",
            "source_crawling",
        ]
