"""
Tests for output and debug sinks
"""

import io

from moodle_rest.sinks import StreamDebugSink, StreamOutputSink


class TestStreamOutputSink:
    """Tests for StreamOutputSink"""

    def test_writes_text_and_records_headers(self):
        """Should write text to the stream and keep headers aside"""
        stream = io.StringIO()
        sink = StreamOutputSink(stream)

        sink.emit_header("Content-Type", "application/json")
        sink.write('{"a":1}')

        assert stream.getvalue() == '{"a":1}'
        assert sink.headers == {"Content-Type": "application/json"}

    def test_repeated_headers_keep_last_value(self):
        """Should hold one entry per header name across many writes"""
        sink = StreamOutputSink(io.StringIO())
        for _ in range(50):
            sink.emit_header("Content-Type", "application/json")
        sink.emit_header("Content-Type", "application/xml")

        assert sink.headers == {"Content-Type": "application/xml"}

    def test_defaults_to_stdout(self, capsys):
        """Should write to stdout when no stream is given"""
        StreamOutputSink().write("hello")
        assert capsys.readouterr().out == "hello"


class TestStreamDebugSink:
    """Tests for StreamDebugSink"""

    def test_writes_to_stream(self):
        stream = io.StringIO()
        StreamDebugSink(stream).write("[debug]")
        assert stream.getvalue() == "[debug]"

    def test_defaults_to_stdout(self, capsys):
        StreamDebugSink().write("[debug]")
        assert capsys.readouterr().out == "[debug]"
