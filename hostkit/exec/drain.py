"""
Stream draining and result assembly.

A StreamDrainer reads one pipe to end-of-stream on its own thread so the
child never blocks on a full pipe buffer while the parent waits for it to
exit. ResultAssembler turns the drained bytes into a TaskResult.
"""

import threading
from typing import BinaryIO, List, Optional

from .task import TaskResult


# Trailing terminators recognised by normalization, longest first
LINE_TERMINATORS = ("\r\n", "\n", "\r")

READ_CHUNK_BYTES = 64 * 1024


class StreamDrainer:
    """
    Reads a pipe to EOF on a background thread.

    The pipe is closed once drained. Any exception raised while reading is
    re-raised from join() on the calling thread.
    """

    def __init__(self, stream: BinaryIO, name: str = "stream"):
        """
        Initialize drainer.

        Args:
            stream: Readable binary pipe
            name: Label used for the thread name
        """
        self.stream = stream
        self.name = name
        self._chunks: List[bytes] = []
        self._error: Optional[Exception] = None
        self._thread = threading.Thread(
            target=self._drain,
            name=f"hostkit-drain-{name}",
            daemon=True,
        )

    def start(self) -> "StreamDrainer":
        self._thread.start()
        return self

    def _drain(self) -> None:
        try:
            while True:
                chunk = self.stream.read(READ_CHUNK_BYTES)
                if not chunk:
                    break
                self._chunks.append(chunk)
        except Exception as e:
            self._error = e
        finally:
            self.stream.close()

    def join(self) -> bytes:
        """
        Wait for end-of-stream and return everything read.

        Raises:
            Exception: Whatever the reader thread raised
        """
        self._thread.join()
        if self._error is not None:
            raise self._error
        return b"".join(self._chunks)


def strip_trailing_terminator(text: str) -> str:
    """Remove exactly one trailing line terminator, if present."""
    for terminator in LINE_TERMINATORS:
        if text.endswith(terminator):
            return text[:-len(terminator)]
    return text


def decode_output(data: bytes) -> str:
    """Decode captured bytes as UTF-8 and normalize the trailing terminator."""
    if not data:
        return ""
    return strip_trailing_terminator(data.decode("utf-8", errors="replace"))


class ResultAssembler:
    """Composes the final TaskResult from exit status and drained streams."""

    def assemble(self, exit_code: int, stdout: bytes, stderr: bytes) -> TaskResult:
        return TaskResult(
            exit_code=exit_code,
            out_text=decode_output(stdout),
            err_text=decode_output(stderr),
        )
