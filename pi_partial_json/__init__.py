"""
pi-partial-json: completion of truncated JSON.

Turns a prefix of a JSON document, such as tool call arguments that are
still streaming in, into the shortest valid JSON text consistent with it.
"""

__version__ = "0.1.0"

from pi_partial_json.errors import (
    DisallowedCompletionError,
    EmptyInputError,
    IncompleteLeadingTokenError,
    MalformedJSONError,
    NestingTooDeepError,
    PartialJSONError,
    StructuralMismatchError,
    UnexpectedCharacterError,
)
from pi_partial_json.options import TypeOptions
from pi_partial_json.parser import format_json, parse_malformed_string
from pi_partial_json.stream import PartialJSONStream, iter_completions, stream_completions
from pi_partial_json.types import Completion, StreamUpdate
from pi_partial_json.utils import parse_partial_json, try_complete_json, try_parse_json

__all__ = [
    # Entry points
    "parse_malformed_string",
    "format_json",
    "parse_partial_json",
    "try_complete_json",
    "try_parse_json",
    # Streaming
    "PartialJSONStream",
    "iter_completions",
    "stream_completions",
    # Types
    "TypeOptions",
    "Completion",
    "StreamUpdate",
    # Errors
    "PartialJSONError",
    "EmptyInputError",
    "UnexpectedCharacterError",
    "DisallowedCompletionError",
    "StructuralMismatchError",
    "IncompleteLeadingTokenError",
    "NestingTooDeepError",
    "MalformedJSONError",
]
