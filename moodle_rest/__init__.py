"""
Client for Moodle REST webservices
"""

from .client import MoodleRest
from .errors import ArgumentError, ConfigurationError, MoodleRestError, TransportError
from .httpclient import HTTPClient, UrllibHTTPClient
from .logger import Logger, new_logger
from .sinks import DebugSink, OutputSink, StreamDebugSink, StreamOutputSink
from .types import CLI_STYLE, HTML_STYLE, DebugStyle, Method, OutputFormat, RequestRecord
from .version import VERSION

__version__ = VERSION

__all__ = [
    "ArgumentError",
    "CLI_STYLE",
    "ConfigurationError",
    "DebugSink",
    "DebugStyle",
    "HTML_STYLE",
    "HTTPClient",
    "Logger",
    "Method",
    "MoodleRest",
    "MoodleRestError",
    "OutputFormat",
    "OutputSink",
    "RequestRecord",
    "StreamDebugSink",
    "StreamOutputSink",
    "TransportError",
    "UrllibHTTPClient",
    "new_logger",
]
