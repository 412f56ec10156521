"""Tests for stream draining and result assembly."""

import io
import os
import threading

import pytest

from hostkit.exec.drain import (
    ResultAssembler,
    StreamDrainer,
    decode_output,
    strip_trailing_terminator,
)


class TestTerminatorNormalization:
    """Exactly one trailing line terminator is removed."""

    @pytest.mark.parametrize("raw,expected", [
        ("hello\n", "hello"),
        ("hello\n\n", "hello\n"),
        ("hello", "hello"),
        ("hello\r\n", "hello"),
        ("hello\r", "hello"),
        ("\n", ""),
        ("", ""),
        ("a\nb\n", "a\nb"),
    ])
    def test_strip_trailing_terminator(self, raw, expected):
        assert strip_trailing_terminator(raw) == expected

    def test_decode_empty_bytes(self):
        assert decode_output(b"") == ""

    def test_decode_replaces_invalid_utf8(self):
        assert decode_output(b"ok\xfe\n") == "ok�"


class TestStreamDrainer:
    """StreamDrainer reads a pipe to EOF on its own thread."""

    def test_drains_pipe_until_writer_closes(self):
        read_fd, write_fd = os.pipe()
        reader = os.fdopen(read_fd, "rb")
        drainer = StreamDrainer(reader, "test").start()

        payload = b"x" * (256 * 1024)

        def writer():
            with os.fdopen(write_fd, "wb") as f:
                f.write(payload)

        thread = threading.Thread(target=writer)
        thread.start()

        assert drainer.join() == payload
        thread.join()
        assert reader.closed

    def test_empty_stream(self):
        drainer = StreamDrainer(io.BytesIO(b""), "empty").start()
        assert drainer.join() == b""

    def test_read_error_reraised_on_join(self):
        class FailingStream(io.BytesIO):
            def read(self, size=-1):
                raise OSError("read failed")

        stream = FailingStream()
        drainer = StreamDrainer(stream, "failing").start()

        with pytest.raises(OSError, match="read failed"):
            drainer.join()
        assert stream.closed


class TestResultAssembler:
    """ResultAssembler composes the immutable TaskResult."""

    def test_assemble_normalizes_both_streams(self):
        result = ResultAssembler().assemble(7, b"out\n", b"err\n\n")

        assert result.exit_code == 7
        assert result.out_text == "out"
        assert result.err_text == "err\n"

    def test_result_is_immutable(self):
        result = ResultAssembler().assemble(0, b"", b"")

        with pytest.raises(AttributeError):
            result.exit_code = 1
