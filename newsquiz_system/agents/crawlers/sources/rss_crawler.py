"""RSS/Atom feed parser and normalizer using feedparser."""

import html
import re
from datetime import datetime, timezone
from typing import Optional, Union

import feedparser
from dateutil import parser as dateutil_parser
from loguru import logger

_CDATA_RE = re.compile(r"<!\[CDATA\[([\s\S]*?)\]\]>")
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def clean_text(value: Optional[str]) -> str:
    """
    Strip CDATA wrappers, markup and HTML entities, then collapse whitespace.

    Entities are unescaped after tag removal and the tag pass is repeated,
    so escaped markup such as ``&lt;p&gt;`` does not survive as ``<p>``.
    """
    if not value:
        return ""
    text = _CDATA_RE.sub(r"\1", value)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    text = _TAG_RE.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


class RSSCrawler:
    """
    Parse and normalize RSS/Atom feeds using feedparser.

    Handles all RSS variants (0.91, 1.0, 2.0) and Atom feeds through
    feedparser's normalization. Malformed feeds degrade to whatever entries
    could be recovered; a feed with no entries at all is reported as a
    failed parse.
    """

    def __init__(self):
        self.logger = logger.bind(component="RSSCrawler")

    def parse_feed(self, content: Union[bytes, str]) -> dict:
        """
        Parse RSS/Atom feed content already retrieved over HTTP.

        Args:
            content: Raw feed document

        Returns:
            Dictionary containing:
            - success: Boolean indicating if any entries were parsed
            - feed_title: Cleaned channel title ("" if absent)
            - articles: Normalized entries, newest first
            - bozo: Whether feedparser flagged the document as malformed
            - error: Error message if parsing failed (optional)
        """
        try:
            parsed = feedparser.parse(content)
        except Exception as e:
            error_msg = f"Failed to parse feed: {e}"
            self.logger.error(error_msg)
            return {
                "success": False,
                "feed_title": "",
                "articles": [],
                "bozo": True,
                "error": error_msg,
            }

        if parsed.bozo and not parsed.entries:
            self.logger.warning(
                "Feed is malformed and yielded no entries",
                exception=str(parsed.get("bozo_exception", "")),
            )
            return {
                "success": False,
                "feed_title": "",
                "articles": [],
                "bozo": True,
                "error": str(parsed.get("bozo_exception", "malformed feed")),
            }

        feed_title = clean_text(parsed.feed.get("title", ""))
        articles = [self._normalize_entry(entry) for entry in parsed.entries]

        # Stable sort keeps feed order for entries sharing a date or lacking one
        articles.sort(
            key=lambda a: a["published_at"] or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )

        self.logger.debug(
            "Feed parsed",
            title=feed_title,
            entry_count=len(articles),
            bozo=bool(parsed.bozo),
        )

        return {
            "success": len(articles) > 0,
            "feed_title": feed_title,
            "articles": articles,
            "bozo": bool(parsed.bozo),
        }

    def _normalize_entry(self, entry: dict) -> dict:
        """
        Normalize a feedparser entry to a consistent schema.

        Returns:
            Dictionary with cleaned title, link, summary, and published_at
            (timezone-aware datetime or None)
        """
        summary = entry.get("summary", "") or entry.get("description", "")
        if not summary and entry.get("content"):
            content_list = entry.get("content", [])
            if isinstance(content_list, list) and content_list:
                summary = content_list[0].get("value", "")

        link = entry.get("link", "")
        if not link:
            for link_obj in entry.get("links", []):
                if link_obj.get("rel") in ("alternate", None) and link_obj.get("href"):
                    link = link_obj["href"]
                    break

        return {
            "title": clean_text(entry.get("title", "")),
            "link": (link or "").strip(),
            "summary": clean_text(summary),
            "published_at": self._parse_date(entry),
        }

    def _parse_date(self, entry: dict) -> Optional[datetime]:
        """
        Parse publication date from feed entry.

        Tries feedparser's parsed time tuples first, then free-form date
        strings via dateutil.

        Returns:
            Timezone-aware datetime, or None if unparseable
        """
        for field in ("published_parsed", "updated_parsed", "created_parsed"):
            value = entry.get(field)
            if value:
                try:
                    return datetime(*value[:6], tzinfo=timezone.utc)
                except (TypeError, ValueError):
                    pass

        for field in ("published", "pubDate", "updated", "dc_date", "created", "date"):
            date_str = entry.get(field)
            if not date_str:
                continue
            try:
                dt = dateutil_parser.parse(date_str)
            except (ValueError, TypeError, OverflowError):
                continue
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt

        return None
