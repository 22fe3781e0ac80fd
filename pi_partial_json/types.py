"""
Core types for pi-partial-json.

Completions are positional: they describe how much of a fragment can be
trusted and what text must follow it, never a parsed tree.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Completion(BaseModel):
    """
    Result of completing one JSON value.

    ``consumed`` counts characters from the start of the value; ``suffix`` is
    appended after them. ``truncated`` marks a value that ran into the end of
    the fragment, so an enclosing collection must close right after it.
    """

    model_config = ConfigDict(frozen=True)

    consumed: int = Field(default=0, ge=0)
    suffix: str = ""
    truncated: bool = False

    def apply(self, fragment: str, start: int = 0) -> str:
        """
        Splice the completion onto the fragment it was computed for.

        Args:
            fragment: Text the completion was computed against
            start: Offset where the completed value begins

        Returns:
            The trusted slice of the fragment followed by the suffix
        """
        return fragment[start:start + self.consumed] + self.suffix


class StreamUpdate(BaseModel):
    """One step of a streamed completion: the chunk received and its outcome."""

    chunk: str
    text: str
    completed: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.completed is not None


__all__ = ["Completion", "StreamUpdate"]
