"""Query string parsing.

Decodes a query string into a flat ``dict[str, str]``. Unlike
``urllib.parse.parse_qs`` this keeps only the last value per key and
skips a malformed pair instead of failing the whole string.
"""

import logging
import re
from urllib.parse import unquote

from perch.errors import MalformedQueryError

logger = logging.getLogger("perch.routing")

# "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_query(query_string: str | None) -> dict[str, str]:
    """Parse *query_string* into a mapping.

    ``"a=1&b=2"`` -> ``{"a": "1", "b": "2"}``; ``"a"`` -> ``{"a": ""}``.
    ``None`` and ``""`` yield ``{}``. Duplicate keys: last one wins.
    """
    query: dict[str, str] = {}
    if not query_string:
        return query

    for pair in query_string.removeprefix("?").split("&"):
        if not pair:
            continue
        raw_key, _, raw_value = pair.partition("=")
        if not raw_key:
            continue
        try:
            key = _decode(raw_key, pair)
            value = _decode(raw_value, pair)
        except MalformedQueryError as exc:
            logger.warning("Skipping query pair: %s", exc)
            continue
        query[key] = value

    return query


def _decode(text: str, pair: str) -> str:
    """Percent-decode *text*, rejecting broken escapes and invalid UTF-8."""
    if _BAD_ESCAPE.search(text):
        raise MalformedQueryError(pair, "invalid percent-escape")
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError as exc:
        raise MalformedQueryError(pair, "invalid UTF-8") from exc
