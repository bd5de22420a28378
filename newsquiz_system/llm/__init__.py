"""Text-generation backend access: client, pacing and response parsing."""

from newsquiz_system.llm.text_generator import TextGenerator
from newsquiz_system.llm.rate_limiter import CallPacer, TokenBucket
from newsquiz_system.llm.response_parser import (
    ParseFailure,
    ParsedValue,
    ParseResult,
    parse_json_array,
    parse_json_object,
)

__all__ = [
    "TextGenerator",
    "CallPacer",
    "TokenBucket",
    "ParseFailure",
    "ParsedValue",
    "ParseResult",
    "parse_json_array",
    "parse_json_object",
]
