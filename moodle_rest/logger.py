"""
Logger provides leveled, printf-style logging for the client
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any


class Logger:
    """Logger with debug, warn, and error levels"""

    def __init__(self, debug_enabled: bool | None = None, prefix: str = "moodle-rest") -> None:
        if debug_enabled is None:
            debug_enabled = os.environ.get("DEBUG_LOGGING", "").lower() == "true"
        self._debug_enabled = debug_enabled
        self._prefix = prefix

    @property
    def debug_enabled(self) -> bool:
        return self._debug_enabled

    def debugf(self, format_str: str, *args: Any) -> None:
        """Log debug message if debug logging is enabled"""
        if self._debug_enabled:
            self._emit("DEBUG", sys.stdout, format_str, *args)

    def warnf(self, format_str: str, *args: Any) -> None:
        """Log warning message"""
        self._emit("WARN", sys.stderr, format_str, *args)

    def errorf(self, format_str: str, *args: Any) -> None:
        """Log error message"""
        self._emit("ERROR", sys.stderr, format_str, *args)

    def _emit(self, level: str, stream: Any, format_str: str, *args: Any) -> None:
        message = self._format_message(format_str, *args)
        print(f"[{level}] [{self._prefix}] {message}", file=stream)

    def _format_message(self, format_str: str, *args: Any) -> str:
        """Format message with Go-style format specifiers (%s, %v, %d, %+v)"""
        message = format_str
        start = 0
        for arg in args:
            if isinstance(arg, (dict, list)):
                try:
                    value = json.dumps(arg)
                except (TypeError, ValueError):
                    value = json.dumps(arg, default=str)
            else:
                value = str(arg)

            # Replace the next specifier; substituted text is never rescanned
            positions = [(message.find(spec, start), spec) for spec in ("%+v", "%s", "%v", "%d")]
            positions = [(pos, spec) for pos, spec in positions if pos != -1]
            if not positions:
                break
            pos, spec = min(positions)
            message = message[:pos] + value + message[pos + len(spec) :]
            start = pos + len(value)

        return message


def new_logger() -> Logger:
    """Create a new Logger instance"""
    return Logger()
