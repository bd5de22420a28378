"""Parse-with-fallback decoding of JSON embedded in free-form model output.

Model responses often wrap JSON in prose or markdown fences, and the prose
itself may contain brackets ("[1] press release", "the [1-2] facts"). The
helpers here try a decode at every opening bracket in turn and return the
first value of the requested shape, as ParsedValue or ParseFailure. They
never raise; callers match on the result type.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Union

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

_decoder = json.JSONDecoder()


@dataclass(frozen=True)
class ParsedValue:
    """Successfully decoded JSON value."""

    value: Any


@dataclass(frozen=True)
class ParseFailure:
    """Why no usable JSON was found."""

    reason: str
    excerpt: str = ""


ParseResult = Union[ParsedValue, ParseFailure]


def _unfence(text: str) -> str:
    match = _FENCE_RE.search(text)
    return match.group(1).strip() if match else text


def _decode(text: str, opener: str, expected: type, shape: str) -> ParseResult:
    if not text or not text.strip():
        return ParseFailure(reason="empty response")

    body = _unfence(text.strip())
    start = body.find(opener)
    if start < 0:
        return ParseFailure(reason=f"no {shape} found", excerpt=body[:200])

    first_error = None
    while start >= 0:
        try:
            value, _ = _decoder.raw_decode(body, start)
        except json.JSONDecodeError as e:
            first_error = first_error or e
        else:
            if isinstance(value, expected):
                return ParsedValue(value=value)
        start = body.find(opener, start + 1)

    if first_error is not None:
        return ParseFailure(reason=f"malformed JSON: {first_error.msg}", excerpt=body[:200])
    return ParseFailure(reason=f"decoded value is not a JSON {shape}", excerpt=body[:200])


def parse_json_array(text: str) -> ParseResult:
    """Decode the first well-formed array in ``text``."""
    return _decode(text, "[", list, "array")


def parse_json_object(text: str) -> ParseResult:
    """Decode the first well-formed object in ``text``."""
    return _decode(text, "{", dict, "object")
