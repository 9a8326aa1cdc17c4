"""Incremental server-sent-event line parsing for streamed completions"""

import codecs
from typing import AsyncIterable, AsyncIterator, List, Tuple

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class SSELineBuffer:
    """Accumulates decoded text and releases only complete lines

    Bytes are decoded incrementally so multi-byte UTF-8 characters split
    across network reads are reassembled. Whatever follows the last newline
    stays buffered until the next ``feed``.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> List[str]:
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        return [line.rstrip("\r") for line in lines]

    @property
    def pending(self) -> str:
        """Text received after the last complete line"""
        return self._buffer


def extract_data(line: str) -> Tuple[bool, str]:
    """Split an event line into (is_data_line, payload)"""
    if not line.startswith(DATA_PREFIX):
        return False, ""
    return True, line[len(DATA_PREFIX):].strip()


async def iter_sse_data(byte_stream: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield the payload of every complete ``data: `` line

    Lines without the data marker (``event:`` lines, comments, blank
    separators) are dropped. A trailing partial line left when the byte
    stream ends is discarded.
    """
    buffer = SSELineBuffer()
    async for chunk in byte_stream:
        for line in buffer.feed(chunk):
            is_data, payload = extract_data(line)
            if is_data:
                yield payload
