"""
Partial JSON completion engine.

Takes a truncated JSON fragment (typically a prefix of a value that is still
being streamed) and produces the shortest valid JSON text consistent with it,
closing strings, numbers, arrays and objects at the last safe point.

Completion is positional: every completer works on ``(text, start)`` and
returns a Completion whose ``consumed`` is relative to ``start``. No tree is
built and the fragment is never copied while descending.
"""

import json
import logging
from typing import Optional

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
from pi_partial_json.types import Completion

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
NUMBER_CHARS = "0123456789.+-eE"
# A number may not end on any of these
NUMBER_TAIL_CHARS = ".+-eE"

# Escape letter -> number of characters the escape expects after it
HEX_ESCAPE_WIDTHS = {"u": 4, "U": 8, "x": 2}

LITERALS = (
    ("null", TypeOptions.NULL),
    ("true", TypeOptions.BOOL),
    ("false", TypeOptions.BOOL),
    ("Infinity", TypeOptions.INFINITY),
    ("-Infinity", TypeOptions.NEG_INFINITY),
    ("NaN", TypeOptions.NAN),
)


def skip_blank(text: str, index: int) -> int:
    """Return the offset of the first non-whitespace character at or after index."""
    length = len(text)
    while index < length and text[index].isspace():
        index += 1
    return index


def _require(kind: TypeOptions, allowed: TypeOptions) -> None:
    if kind not in allowed:
        logger.debug("Completion of %s refused by options %r", kind.label, allowed)
        raise DisallowedCompletionError(kind)


def complete_any(
    text: str,
    start: int,
    allowed: TypeOptions,
    top_level: bool = False,
) -> Completion:
    """
    Complete whatever JSON value begins at ``start``.

    Args:
        text: The full fragment
        start: Offset of the value's first character (no leading whitespace)
        allowed: Kinds that may be completed
        top_level: Whether this value is the whole document

    Returns:
        Completion relative to ``start``

    Raises:
        PartialJSONError: If the value cannot be completed
    """
    char = text[start]
    if char == '"':
        return complete_string(text, start, allowed)
    if char in DIGITS:
        return complete_number(text, start, allowed, top_level)
    if char == "[":
        return complete_array(text, start, allowed)
    if char == "{":
        return complete_object(text, start, allowed)
    if char == "-":
        if start + 1 >= len(text):
            raise IncompleteLeadingTokenError(start)
        if text[start + 1] != "I":
            return complete_number(text, start, allowed, top_level)

    return complete_literal(text, start, allowed)


def _synthesize_literal(word: str) -> Completion:
    """Stand the whole literal in for a partial spelling of it."""
    # Not a suffix: nothing of the partial spelling is kept, the word replaces it
    return Completion(consumed=0, suffix=word, truncated=True)


def complete_literal(text: str, start: int, allowed: TypeOptions) -> Completion:
    """
    Match ``null``, ``true``, ``false``, ``NaN``, ``Infinity`` or ``-Infinity``.

    A full word is consumed as is. When the fragment ends partway through a
    word, the partial spelling is dropped and the whole word is synthesized
    in its place (JSON has no partial spelling of a literal).
    """
    remaining = len(text) - start
    for word, kind in LITERALS:
        if text.startswith(word, start):
            return Completion(consumed=len(word))
        if remaining < len(word) and word.startswith(text[start:]):
            _require(kind, allowed)
            return _synthesize_literal(word)

    raise UnexpectedCharacterError(text[start], start)


def complete_number(
    text: str,
    start: int,
    allowed: TypeOptions,
    top_level: bool = False,
) -> Completion:
    """
    Complete a number beginning with a digit or '-'.

    The digit run is scanned greedily and then trimmed back past any
    trailing '.', 'e', 'E', '+' or '-'. A trimmed number is incomplete, and
    so is a nested number that reaches the end of the fragment, since more
    digits may still arrive. Incomplete numbers need NUM permission; numbers
    never need a suffix.
    """
    length = len(text)
    end = start + 1
    while end < length and text[end] in NUMBER_CHARS:
        end += 1

    at_end = end == length
    dangling = False
    while end > start and text[end - 1] in NUMBER_TAIL_CHARS:
        end -= 1
        dangling = True

    if end == start:
        raise IncompleteLeadingTokenError(start, text[start])

    if dangling or (at_end and not top_level):
        _require(TypeOptions.NUM, allowed)
        return Completion(consumed=end - start, truncated=True)

    return Completion(consumed=end - start)


def complete_string(text: str, start: int, allowed: TypeOptions) -> Completion:
    """
    Complete a string beginning with '"'.

    An unterminated string is closed with '"'. The cut point drops an
    unfinished trailing escape: a ``\\u``, ``\\U`` or ``\\x`` escape with too
    few characters after it is removed whole, otherwise a dangling backslash
    is removed.
    """
    length = len(text)
    index = start + 1
    escaped = False
    hex_escape_at = -1
    while index < length and (text[index] != '"' or escaped):
        if text[index] == "\\":
            escaped = not escaped
            if escaped and index + 1 < length and text[index + 1] in HEX_ESCAPE_WIDTHS:
                hex_escape_at = index
        else:
            escaped = False
        index += 1

    if index < length:
        return Completion(consumed=index + 1 - start)

    _require(TypeOptions.STR, allowed)

    cut = index
    if hex_escape_at != -1:
        width = HEX_ESCAPE_WIDTHS[text[hex_escape_at + 1]]
        if length - (hex_escape_at + 2) < width:
            cut = hex_escape_at
        elif escaped:
            cut = index - 1
    elif escaped:
        cut = index - 1

    return Completion(consumed=cut - start, suffix='"', truncated=True)


def _roll_back(
    start: int,
    last_complete: int,
    closer: str,
    kind: TypeOptions,
    allowed: TypeOptions,
    cause: Optional[Exception] = None,
) -> Completion:
    """Close a collection right after its last complete member."""
    if kind not in allowed:
        logger.debug("Rollback of %s refused by options %r", kind.label, allowed)
        raise DisallowedCompletionError(kind) from cause
    if cause is not None:
        logger.debug("Dropping incomplete %s member: %s", kind.label, cause)
    return Completion(consumed=last_complete - start, suffix=closer, truncated=True)


def complete_array(text: str, start: int, allowed: TypeOptions) -> Completion:
    """
    Complete an array beginning with '['.

    A truncated last element is completed and the array closed after it; an
    element that cannot be completed is dropped and the array closed after
    the last complete one.
    """
    length = len(text)
    index = start + 1
    last_complete = index

    while index < length:
        index = skip_blank(text, index)
        if index >= length:
            break

        if text[index] == "]":
            return Completion(consumed=index + 1 - start)

        try:
            element = complete_any(text, index, allowed)
        except PartialJSONError as e:
            return _roll_back(start, last_complete, "]", TypeOptions.ARR, allowed, e)

        if element.truncated:
            _require(TypeOptions.ARR, allowed)
            return Completion(
                consumed=index + element.consumed - start,
                suffix=element.suffix + "]",
                truncated=True,
            )

        index += element.consumed
        last_complete = index

        index = skip_blank(text, index)
        if index >= length:
            break

        if text[index] == ",":
            index += 1
        elif text[index] == "]":
            return Completion(consumed=index + 1 - start)
        else:
            raise StructuralMismatchError('"," or "]"', text[index], index)

    return _roll_back(start, last_complete, "]", TypeOptions.ARR, allowed)


def complete_object(text: str, start: int, allowed: TypeOptions) -> Completion:
    """
    Complete an object beginning with '{'.

    Works like complete_array, one ``"key": value`` pair at a time. A missing
    or truncated key, or a value that cannot be completed, drops the whole
    pair. A complete key followed by anything but ':' is a structural error.
    """
    length = len(text)
    index = start + 1
    last_complete = index

    while index < length:
        index = skip_blank(text, index)
        if index >= length:
            break

        if text[index] == "}":
            return Completion(consumed=index + 1 - start)

        try:
            if text[index] != '"':
                raise UnexpectedCharacterError(text[index], index)
            key = complete_string(text, index, allowed)
        except PartialJSONError as e:
            return _roll_back(start, last_complete, "}", TypeOptions.OBJ, allowed, e)

        if key.truncated:
            return _roll_back(start, last_complete, "}", TypeOptions.OBJ, allowed)

        index = skip_blank(text, index + key.consumed)
        if index >= length:
            break

        if text[index] != ":":
            raise StructuralMismatchError('":"', text[index], index)

        index = skip_blank(text, index + 1)
        if index >= length:
            break

        try:
            value = complete_any(text, index, allowed)
        except PartialJSONError as e:
            return _roll_back(start, last_complete, "}", TypeOptions.OBJ, allowed, e)

        if value.truncated:
            _require(TypeOptions.OBJ, allowed)
            return Completion(
                consumed=index + value.consumed - start,
                suffix=value.suffix + "}",
                truncated=True,
            )

        index += value.consumed
        last_complete = index

        index = skip_blank(text, index)
        if index >= length:
            break

        if text[index] == ",":
            index += 1
        elif text[index] == "}":
            return Completion(consumed=index + 1 - start)
        else:
            raise StructuralMismatchError('"," or "}"', text[index], index)

    return _roll_back(start, last_complete, "}", TypeOptions.OBJ, allowed)


def format_json(json_string: str, indent: int = 1) -> str:
    """
    Pretty-print completed JSON text.

    Raises:
        MalformedJSONError: If the text is not accepted by the JSON reader
    """
    try:
        value = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(e) from e
    except RecursionError as e:
        raise MalformedJSONError(NestingTooDeepError()) from e
    return json.dumps(value, indent=indent, ensure_ascii=False)


def parse_malformed_string(
    malformed: str,
    allowed: TypeOptions = TypeOptions.ALL,
    format: bool = False,
    indent: int = 1,
) -> str:
    """
    Complete a malformed or truncated JSON string.

    Surrounding whitespace is ignored, as is any text after a complete
    top-level value.

    Args:
        malformed: The JSON fragment
        allowed: Kinds the completer may guess closed
        format: Re-serialize the result through the JSON pretty-printer
        indent: Indentation used when ``format`` is set

    Returns:
        The completed JSON text

    Raises:
        EmptyInputError: If the input is blank
        MalformedJSONError: If the fragment cannot be completed

    Examples:
        >>> parse_malformed_string('{"a":1,"b":[1,2,')
        '{"a":1,"b":[1,2]}'

        >>> parse_malformed_string('[1, tr')
        '[1, true]'
    """
    text = malformed.strip()
    if not text:
        raise EmptyInputError()

    try:
        completion = complete_any(text, 0, allowed, top_level=True)
    except PartialJSONError as e:
        raise MalformedJSONError(e) from e
    except RecursionError as e:
        raise MalformedJSONError(NestingTooDeepError()) from e

    completed = completion.apply(text)
    if format:
        return format_json(completed, indent)
    return completed


__all__ = [
    "skip_blank",
    "complete_any",
    "complete_literal",
    "complete_number",
    "complete_string",
    "complete_array",
    "complete_object",
    "format_json",
    "parse_malformed_string",
]
