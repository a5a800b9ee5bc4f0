"""
Query string and URL construction for Moodle REST webservice calls
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote_plus, unquote_plus

Parameters = Mapping[str, Any] | Sequence[Any]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _items(value: Mapping[str, Any] | Sequence[Any]) -> list[tuple[str, Any]]:
    if isinstance(value, Mapping):
        return [(str(k), v) for k, v in value.items()]
    return [(str(i), v) for i, v in enumerate(value)]


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping) or _is_sequence(value):
        for key, item in _items(value):
            _flatten(f"{prefix}[{key}]", item, pairs)
        return
    pairs.append((prefix, _scalar_to_str(value)))


def flatten_parameters(parameters: Parameters | None) -> list[tuple[str, str]]:
    """
    Flattens nested parameters into ordered key/value pairs.
    e.g., {"groupids": [1, 2]} -> [("groupids[0]", "1"), ("groupids[1]", "2")]
    """
    pairs: list[tuple[str, str]] = []
    if parameters is None:
        return pairs
    for key, value in _items(parameters):
        _flatten(key, value, pairs)
    return pairs


def build_query(parameters: Parameters | None) -> str:
    """Form-encodes parameters; array entries use bracketed indexed keys"""
    return "&".join(
        f"{quote_plus(key)}={quote_plus(value)}" for key, value in flatten_parameters(parameters)
    )


def build_endpoint_url(server_address: str, token: str, wire_format: str, function: str) -> str:
    """Builds the webservice URL without caller parameters (used as the POST target)"""
    return (
        f"{server_address}"
        f"?wstoken={quote_plus(token)}"
        f"&moodlewsrestformat={wire_format}"
        f"&wsfunction={quote_plus(function)}"
    )


def build_request_url(
    server_address: str,
    token: str,
    wire_format: str,
    function: str,
    query_string: str,
) -> str:
    """
    Builds the full GET URL.
    The parameter segment is always appended, so an empty query leaves a trailing "&".
    """
    return f"{build_endpoint_url(server_address, token, wire_format, function)}&{query_string}"


def decode_url(url: str) -> str:
    """Percent-decodes a URL, turning "+" back into spaces"""
    return unquote_plus(url)
