"""
Output and debug sinks the client writes to
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO


class OutputSink(ABC):
    """Destination for print-on-request output"""

    @abstractmethod
    def emit_header(self, name: str, value: str) -> None:
        """Emit a response header; may be a no-op outside an HTTP response"""
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        pass


class DebugSink(ABC):
    """Destination for debug introspection output"""

    @abstractmethod
    def write(self, text: str) -> None:
        pass


class StreamOutputSink(OutputSink):
    """
    Writes output to a text stream (stdout by default).
    Headers are only recorded, one value per name, since a plain stream has
    nowhere to send them.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.headers: dict[str, str] = {}

    def emit_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write(self, text: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(text)
        stream.flush()


class StreamDebugSink(DebugSink):
    """Writes debug output to a text stream (stdout by default)"""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(text)
        stream.flush()
