"""
Moodle REST webservice client
"""

from __future__ import annotations

import http.client
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from .errors import ArgumentError, ConfigurationError, TransportError
from .httpclient import HTTPClient, UrllibHTTPClient
from .logger import new_logger
from .query import build_endpoint_url, build_query, build_request_url, decode_url
from .sinks import DebugSink, OutputSink, StreamDebugSink, StreamOutputSink
from .types import CLI_STYLE, DebugStyle, Method, OutputFormat, RequestRecord
from .utils import (
    dump_structure,
    is_blank,
    is_http_url,
    loads_or_none,
    looks_like_json_container,
)

if TYPE_CHECKING:
    from .logger import Logger
    from .query import Parameters

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

CONTENT_TYPES: dict[OutputFormat, str] = {
    OutputFormat.JSON: "application/json",
    OutputFormat.XML: "application/xml",
}


def _is_parameter_container(parameters: Any) -> bool:
    if isinstance(parameters, Mapping):
        return True
    return isinstance(parameters, Sequence) and not isinstance(parameters, (str, bytes, bytearray))


class MoodleRest:
    """
    Client for Moodle REST webservices.

    Each call to request() performs one blocking round trip and replaces the
    previous RequestRecord; the client keeps no history. An instance must not be
    shared by concurrent callers: use one client per in-flight request or
    serialize access externally.
    """

    def __init__(
        self,
        server_address: str | None = None,
        token: str | None = None,
        output_format: OutputFormat | str | None = OutputFormat.STRUCT,
        *,
        method: Method | str = Method.GET,
        http_client: HTTPClient | None = None,
        output_sink: OutputSink | None = None,
        debug_sink: DebugSink | None = None,
        debug_style: DebugStyle = CLI_STYLE,
        logger: Logger | None = None,
    ) -> None:
        self._logger = logger or new_logger()
        self._server_address = server_address
        self._token = token
        self._output_format = (
            OutputFormat.parse(output_format) if output_format is not None else OutputFormat.STRUCT
        )
        self._default_method = Method.parse(method)
        self._last_method: Method | None = None
        self._debug = False
        self._print_on_request = False
        self._header: str | None = None
        self._client = http_client or UrllibHTTPClient(logger=self._logger)
        self._output_sink = output_sink or StreamOutputSink()
        self._debug_sink = debug_sink or StreamDebugSink()
        self._debug_style = debug_style
        self._last_request: RequestRecord | None = None

    # Configuration

    @property
    def server_address(self) -> str | None:
        return self._server_address

    def set_server_address(self, server_address: str) -> MoodleRest:
        """Set the full URL of the server script, e.g. http://host/webservice/rest/server.php"""
        self._server_address = server_address
        return self

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str) -> MoodleRest:
        self._token = token
        return self

    @property
    def output_format(self) -> OutputFormat:
        return self._output_format

    def set_output_format(self, output_format: OutputFormat | str) -> MoodleRest:
        """Set the output format; an unknown value raises ArgumentError and keeps the old one"""
        self._output_format = OutputFormat.parse(output_format)
        return self

    @property
    def method(self) -> Method:
        """Method of the last request, or the default method before any request"""
        return self._last_method or self._default_method

    @property
    def default_method(self) -> Method:
        return self._default_method

    def set_method(self, method: Method | str) -> MoodleRest:
        """Set the method used when request() is called without one"""
        self._default_method = Method.parse(method)
        return self

    @property
    def debug(self) -> bool:
        return self._debug

    def set_debug(self, enabled: bool = True) -> MoodleRest:
        self._debug = enabled
        return self

    @property
    def debug_style(self) -> DebugStyle:
        return self._debug_style

    def set_debug_style(self, debug_style: DebugStyle) -> MoodleRest:
        self._debug_style = debug_style
        return self

    @property
    def print_on_request(self) -> bool:
        return self._print_on_request

    def set_print_on_request(self, enabled: bool = True) -> MoodleRest:
        self._print_on_request = enabled
        return self

    @property
    def header(self) -> str | None:
        """Header the caller already sent; suppresses the Content-Type hint when set"""
        return self._header

    def set_header(self, header: str | None) -> MoodleRest:
        self._header = header
        return self

    # Last request accessors

    @property
    def last_request(self) -> RequestRecord | None:
        return self._last_request

    @property
    def raw_data(self) -> str | None:
        return self._last_request.raw_response_body if self._last_request else None

    @property
    def data(self) -> Any:
        return self._last_request.decoded_result if self._last_request else None

    def get_url(self, decoded: bool = True) -> str | None:
        """Get the URL built for the last request"""
        if not self._last_request:
            return None
        return self._last_request.decoded_url if decoded else self._last_request.encoded_url

    # Request pipeline

    def request(
        self,
        function: str,
        parameters: Parameters | None = None,
        method: Method | str | None = None,
    ) -> Any:
        """
        Call a webservice function and return the decoded result.

        Parameters are form-encoded; nested sequences use indexed keys, so
        {"groupids": [1, 2]} becomes groupids[0]=1&groupids[1]=2.
        """
        self._validate_configuration()
        resolved_method = self._validate_arguments(function, parameters, method)

        output_format = self._output_format
        wire_format = output_format.wire_format
        server_address = str(self._server_address)
        token = str(self._token)

        query_string = build_query(parameters)
        url = build_request_url(server_address, token, wire_format, function, query_string)
        decoded_url = decode_url(url)

        target_url: str
        body: str | None
        if resolved_method is Method.GET:
            target_url, body = url, None
        elif resolved_method is Method.POST:
            target_url = build_endpoint_url(server_address, token, wire_format, function)
            body = query_string
        else:
            raise ArgumentError(f"unhandled method: {resolved_method!r}")

        self._logger.debugf("Sending %s request to %s", resolved_method.name, decoded_url)
        raw_response = self._fetch(resolved_method, target_url, body)
        self._last_method = resolved_method

        self._debug_request(decode_url(target_url), function, resolved_method, raw_response, body)

        self._last_request = RequestRecord(
            function=function,
            method=resolved_method,
            output_format=output_format,
            encoded_url=url,
            decoded_url=decoded_url,
            raw_response_body=raw_response,
            decoded_result=self._decode(raw_response, output_format),
            response_header_hint=CONTENT_TYPES.get(output_format),
            target_url=target_url,
            body=body,
        )

        if self._print_on_request:
            self.print_request()

        return self._last_request.decoded_result

    def print_request(self) -> None:
        """Write the last decoded result to the output sink"""
        record = self._last_request
        if record is None:
            return

        if record.output_format is OutputFormat.JSON or record.output_format is OutputFormat.XML:
            if is_blank(self._header) and record.response_header_hint:
                self._output_sink.emit_header("Content-Type", record.response_header_hint)
            self._output_sink.write(record.decoded_result)
        elif record.output_format is OutputFormat.STRUCT:
            self._output_sink.write(dump_structure(record.decoded_result) + "\n")
        else:
            raise ArgumentError(f"unhandled output format: {record.output_format!r}")

    def _validate_configuration(self) -> None:
        if is_blank(self._server_address):
            raise ConfigurationError(
                "empty server address: use set_server_address() or pass it to the constructor"
            )
        if not is_http_url(str(self._server_address)):
            raise ConfigurationError(
                f"invalid server address {self._server_address!r}: expected an http(s) URL with a host"
            )
        if is_blank(self._token):
            raise ConfigurationError("empty token: use set_token() or pass it to the constructor")
        if not self._output_format:
            raise ConfigurationError("empty output format: use set_output_format()")

    def _validate_arguments(
        self,
        function: Any,
        parameters: Any,
        method: Method | str | None,
    ) -> Method:
        if not isinstance(function, str) or is_blank(function):
            raise ArgumentError("empty function: fill the first argument of request()")
        if parameters is not None and not _is_parameter_container(parameters):
            raise ArgumentError(
                f"parameters must be a mapping or a sequence, got {type(parameters).__name__}"
            )
        if method is None:
            return self._default_method
        return Method.parse(method)

    def _fetch(self, method: Method, target_url: str, body: str | None) -> str:
        """Exactly one transport attempt; IO failures become TransportError"""
        try:
            if method is Method.GET:
                response = self._client.fetch_get(target_url)
            elif method is Method.POST:
                response = self._client.fetch_post(
                    target_url,
                    body or "",
                    {"Content-Type": FORM_CONTENT_TYPE},
                )
            else:
                raise ArgumentError(f"unhandled method: {method!r}")
        except (OSError, http.client.HTTPException) as e:
            self._logger.errorf("%s request to Moodle server failed: %v", method.name, str(e))
            raise TransportError(
                f"error trying to connect to Moodle server on {method.name} request: {e}",
                method=method.name,
            ) from e

        if response is None:
            raise TransportError(
                f"no response from Moodle server on {method.name} request",
                method=method.name,
            )
        return response

    @staticmethod
    def _decode(raw_response: str, output_format: OutputFormat) -> Any:
        # Invalid JSON in STRUCT mode decodes to None, never raises
        if output_format is OutputFormat.STRUCT:
            return loads_or_none(raw_response)
        if output_format is OutputFormat.JSON or output_format is OutputFormat.XML:
            return raw_response
        raise ArgumentError(f"unhandled output format: {output_format!r}")

    def _debug_request(
        self,
        url: str,
        function: str,
        method: Method,
        raw_response: str,
        body: str | None = None,
    ) -> None:
        if not self._debug:
            return

        line_break = self._debug_style.line_break
        parts = [
            self._debug_style.open_block,
            line_break,
            f"[debug][{method.name}] {type(self).__name__}::request( {function} ){line_break}",
            f"{url} {line_break}",
        ]
        if body:
            parts.append(f"Data: {body} {line_break}")
        if looks_like_json_container(raw_response):
            parts.append(dump_structure(loads_or_none(raw_response.strip())) + "\n")
        else:
            parts.append(f"{type(raw_response).__name__} '{raw_response}'{line_break}")
        parts.append(line_break)
        parts.append(self._debug_style.close_block)

        self._debug_sink.write("".join(parts))
