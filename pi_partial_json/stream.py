"""
Streaming adapters for partial JSON completion.

Feeds a growing JSON text to the completer one chunk at a time. The
completer itself keeps no state: every chunk re-parses the accumulated text
from scratch, and these adapters only keep the buffer and the last good
result.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterable, AsyncIterator, Iterable, Iterator, Optional

from pi_partial_json.errors import PartialJSONError
from pi_partial_json.options import TypeOptions
from pi_partial_json.parser import parse_malformed_string
from pi_partial_json.types import StreamUpdate
from pi_partial_json.utils.json_parsing import try_parse_json

logger = logging.getLogger(__name__)


class PartialJSONStream:
    """
    Accumulates chunks of a JSON document and completes it after each one.

    Example:
        stream = PartialJSONStream()
        for chunk in chunks:
            update = stream.push(chunk)
            if update.ok:
                render(update.completed)
    """

    def __init__(
        self,
        allowed: TypeOptions = TypeOptions.ALL,
        format: bool = False,
        indent: int = 1,
    ):
        """
        Initialize the stream.

        Args:
            allowed: Kinds the completer may guess closed
            format: Pretty-print every completion
            indent: Indentation used when ``format`` is set
        """
        self.allowed = allowed
        self.format = format
        self.indent = indent
        self._chunks: list[str] = []
        self.last_completed: Optional[str] = None

    @property
    def text(self) -> str:
        """Everything received so far."""
        return "".join(self._chunks)

    def push(self, chunk: str) -> StreamUpdate:
        """
        Append a chunk and complete the accumulated text.

        Failures are reported on the returned update instead of raised, since
        a later chunk usually fixes them.

        Args:
            chunk: Next piece of the document

        Returns:
            The outcome for this chunk
        """
        self._chunks.append(chunk)
        text = self.text
        try:
            completed = parse_malformed_string(text, self.allowed, self.format, self.indent)
        except PartialJSONError as e:
            logger.debug("Chunk %d not completable yet: %s", len(self._chunks), e)
            return StreamUpdate(chunk=chunk, text=text, error=str(e))

        self.last_completed = completed
        return StreamUpdate(chunk=chunk, text=text, completed=completed)

    def value(self) -> Any:
        """
        Parse the last successful completion.

        Returns:
            The parsed value, or None when nothing has completed yet or
            the completion is not strict JSON (e.g. a \\x escape)
        """
        if self.last_completed is None:
            return None
        return try_parse_json(self.last_completed)

    def reset(self) -> None:
        """Forget all received chunks."""
        self._chunks = []
        self.last_completed = None


def split_chunks(text: str, chunk_size: Optional[int] = None) -> list[str]:
    """
    Split a document into chunks for replay.

    Args:
        text: Document to split
        chunk_size: Characters per chunk; lines (with their newlines) if None

    Returns:
        Chunks that concatenate back to ``text``
    """
    if chunk_size is None:
        return text.splitlines(keepends=True)
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


def iter_completions(
    chunks: Iterable[str],
    allowed: TypeOptions = TypeOptions.ALL,
    format: bool = False,
    indent: int = 1,
) -> Iterator[StreamUpdate]:
    """Yield one StreamUpdate per chunk."""
    stream = PartialJSONStream(allowed, format, indent)
    for chunk in chunks:
        yield stream.push(chunk)


async def stream_completions(
    chunks: AsyncIterable[str],
    allowed: TypeOptions = TypeOptions.ALL,
    format: bool = False,
    indent: int = 1,
) -> AsyncIterator[StreamUpdate]:
    """
    Async variant of iter_completions for chunks arriving from a network
    stream (e.g. tool call argument deltas from an LLM provider).
    """
    stream = PartialJSONStream(allowed, format, indent)
    async for chunk in chunks:
        yield stream.push(chunk)


__all__ = [
    "PartialJSONStream",
    "split_chunks",
    "iter_completions",
    "stream_completions",
]
