"""Raw article schema - normalized output of the source fetcher."""

from datetime import date

from pydantic import BaseModel, Field


class RawArticle(BaseModel):
    """A single normalized feed entry.

    Attributes:
        title: Cleaned headline (markup, CDATA and entities stripped).
        body: Cleaned excerpt bounded in length; equals title when the feed
            entry had no description.
        source: Name of the configured source the entry came from.
        published_date: Entry publication date, today when unparseable.
        link: Entry URL if the feed provided one.
    """

    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    source: str
    published_date: date
    link: str = ""

    model_config = {"frozen": True}
