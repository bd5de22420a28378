"""Crawler agents that acquire raw articles from configured sources."""

from newsquiz_system.agents.crawlers.base_crawler import BaseCrawler
from newsquiz_system.agents.crawlers.newsfeed_agent import NewsFeedAgent
from newsquiz_system.agents.crawlers.sources.rss_crawler import RSSCrawler, clean_text

__all__ = [
    "BaseCrawler",
    "NewsFeedAgent",
    "RSSCrawler",
    "clean_text",
]
