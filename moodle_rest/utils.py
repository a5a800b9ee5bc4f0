"""
Utility functions shared by the client and its transport
"""

from __future__ import annotations

import json
import os
import re
from pprint import pformat
from typing import Any
from urllib.parse import urlsplit

DURATION_REGEX = re.compile(r"^(\d+)(ms|s|m|h)$")


def get_duration_from_env(key: str, default_value_ms: int) -> int:
    """
    Retrieves a duration from environment variable or returns default.
    Accepts duration strings like "100ms", "2s", "1m", etc.
    Returns value in milliseconds.
    """
    value = os.environ.get(key, "")
    if value:
        match = DURATION_REGEX.match(value.strip())
        if match:
            num = int(match.group(1))
            unit = match.group(2)
            multipliers = {
                "ms": 1,
                "s": 1000,
                "m": 60 * 1000,
                "h": 60 * 60 * 1000,
            }
            return num * multipliers[unit]
    return default_value_ms


def is_http_url(value: str) -> bool:
    """True when value is an http or https URL with a host"""
    try:
        parsed_url = urlsplit(value.strip())
    except ValueError:
        return False
    return parsed_url.scheme in ("http", "https") and bool(parsed_url.netloc)


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return not value


def dump_structure(value: Any) -> str:
    """Human readable rendering of a decoded structure"""
    if value is None:
        return ""
    return pformat(value, sort_dicts=False)


def looks_like_json_container(text: str) -> bool:
    """True when the first non-whitespace character opens a JSON array or object"""
    stripped = text.lstrip()
    return bool(stripped) and stripped[0] in "[{"


def loads_or_none(text: str) -> Any:
    """Parses JSON text, returning None when the text is not valid JSON"""
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None
