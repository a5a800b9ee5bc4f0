"""
HTTP transport used by the Moodle REST client
"""

from __future__ import annotations

import http.client
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .utils import get_duration_from_env
from .version import USER_AGENT

if TYPE_CHECKING:
    from .logger import Logger

# Configuration from environment
HTTP_CLIENT_TIMEOUT = get_duration_from_env("HTTP_CLIENT_TIMEOUT", 10000)


class HTTPClient(ABC):
    """
    Abstract HTTP transport.
    Implementations return the full response body, where an empty string is a valid
    response, and raise OSError when the server cannot be reached or the reply is cut
    short or malformed.
    """

    @abstractmethod
    def fetch_get(self, url: str) -> str:
        """Make a GET request and return the response body"""
        pass

    @abstractmethod
    def fetch_post(self, url: str, body: str, headers: dict[str, str]) -> str:
        """Make a POST request and return the response body"""
        pass


class UrllibHTTPClient(HTTPClient):
    """HTTP transport backed by urllib; performs no status code validation"""

    def __init__(self, logger: Logger | None = None, timeout_ms: int | None = None) -> None:
        self._logger = logger
        self._timeout_ms = timeout_ms if timeout_ms is not None else HTTP_CLIENT_TIMEOUT

    def fetch_get(self, url: str) -> str:
        return self._fetch("GET", url, {}, None)

    def fetch_post(self, url: str, body: str, headers: dict[str, str]) -> str:
        return self._fetch("POST", url, headers, body.encode("utf-8"))

    def _fetch(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
    ) -> str:
        request_headers = {"User-Agent": USER_AGENT}
        request_headers.update(headers)

        request = urllib.request.Request(
            url,
            data=body,
            headers=request_headers,
            method=method,
        )

        timeout_seconds = self._timeout_ms / 1000.0

        try:
            with urllib.request.urlopen(request, timeout=timeout_seconds) as response:
                response_body: bytes = response.read()
        except urllib.error.HTTPError as e:
            # The error page is still the server's answer
            response_body = e.read() if e.fp else b""
            if self._logger:
                self._logger.warnf("%s request to %s returned status %d", method, url, e.code)
        except http.client.HTTPException as e:
            # Truncated or malformed replies surface as connection failures
            raise ConnectionError(f"invalid response to {method} request: {e!r}") from e

        return response_body.decode("utf-8", errors="replace")
