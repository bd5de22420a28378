"""News source configuration for daily claim generation.

Sources are an ordered, statically configured list of named feeds. The
``kind`` field is informational (newsletter, podcast, news) and lets the
CLI group sources in status output; the fetcher treats all kinds the same.
"""

from typing import List, Literal

from pydantic import BaseModel, Field

SourceKind = Literal["news", "podcast", "newsletter"]


class NewsSource(BaseModel):
    """A named RSS/Atom feed supplying raw articles."""

    name: str = Field(..., description="Display name attached to every claim from this feed")
    url: str = Field(..., description="Feed location")
    kind: SourceKind = "news"

    model_config = {"frozen": True}


NEWS_SOURCES: List[NewsSource] = [
    NewsSource(name="Lenny's Newsletter", url="https://www.lennysnewsletter.com/feed", kind="newsletter"),
    NewsSource(name="Pivot Podcast", url="https://feeds.megaphone.fm/pivot", kind="podcast"),
    NewsSource(name="Morning Brew Daily", url="https://feeds.simplecast.com/76rUd4I6", kind="podcast"),
    NewsSource(name="BBC World News", url="https://feeds.bbci.co.uk/news/world/rss.xml", kind="news"),
    NewsSource(name="Up First by NPR", url="https://feeds.npr.org/510318/podcast.xml", kind="podcast"),
    NewsSource(name="Reuters", url="https://feeds.reuters.com/reuters/topNews", kind="news"),
    NewsSource(name="New York Times", url="https://rss.nytimes.com/services/xml/rss/nyt/HomePage.xml", kind="news"),
    NewsSource(name="TechCrunch", url="https://techcrunch.com/feed/", kind="news"),
]
