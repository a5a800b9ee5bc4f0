"""
Data models for Moodle REST requests and their results
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import ArgumentError


class OutputFormat(str, Enum):
    """Caller-facing decoding mode"""

    JSON = "json"
    XML = "xml"
    STRUCT = "struct"

    @classmethod
    def parse(cls, value: OutputFormat | str) -> OutputFormat:
        """Resolve an enum member or its string value, raising ArgumentError otherwise"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            # "array" is the historical name of the structured mode
            if normalized == "array":
                return cls.STRUCT
            for member in cls:
                if member.value == normalized:
                    return member
        raise ArgumentError(f"invalid output format: {value!r}")

    @property
    def wire_format(self) -> str:
        """Value sent as moodlewsrestformat"""
        if self is OutputFormat.XML:
            return "xml"
        if self is OutputFormat.JSON or self is OutputFormat.STRUCT:
            return "json"
        raise ArgumentError(f"unhandled output format: {self!r}")


class Method(str, Enum):
    """HTTP method used to reach the server"""

    GET = "get"
    POST = "post"

    @classmethod
    def parse(cls, value: Method | str) -> Method:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ArgumentError(f"invalid method: {value!r}")


@dataclass(frozen=True)
class RequestRecord:
    """
    Result of the most recent request.
    Replaced on every successful call; a client holds one at a time.
    """

    function: str
    method: Method
    output_format: OutputFormat
    encoded_url: str
    decoded_url: str
    raw_response_body: str
    decoded_result: Any
    response_header_hint: str | None = None
    # URL and form body actually sent; POST sends parameters in the body only
    target_url: str = ""
    body: str | None = None


@dataclass(frozen=True)
class DebugStyle:
    """Formatting used for debug output"""

    line_break: str
    open_block: str = ""
    close_block: str = ""


CLI_STYLE = DebugStyle(line_break="\n")
HTML_STYLE = DebugStyle(line_break="<br />", open_block="<pre>", close_block="</pre>")
