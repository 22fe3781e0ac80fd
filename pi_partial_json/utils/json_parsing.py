"""
Partial JSON parsing utilities.

Provides best-effort parsing of incomplete JSON strings during streaming.
"""

import json
import logging
from typing import Any, Optional

from pi_partial_json.errors import PartialJSONError
from pi_partial_json.options import TypeOptions
from pi_partial_json.parser import parse_malformed_string

logger = logging.getLogger(__name__)


def parse_partial_json(text: str, allowed: TypeOptions = TypeOptions.ALL) -> Any:
    """
    Parse incomplete JSON strings with best-effort completion.

    During streaming, tool call arguments may arrive as incomplete JSON.
    The fragment is completed at its last safe point and then parsed.

    Args:
        text: Potentially incomplete JSON string
        allowed: Kinds the completer may guess closed

    Returns:
        Parsed JSON value, or empty dict if unparseable

    Examples:
        >>> parse_partial_json('{"name": "test"')
        {'name': 'test'}

        >>> parse_partial_json('{"items": [1, 2')
        {'items': [1, 2]}

        >>> parse_partial_json('{"status":')
        {}
    """
    completed = try_complete_json(text, allowed)
    if completed is None:
        return {}

    try:
        return json.loads(completed)
    except json.JSONDecodeError as e:
        logger.debug("Completed JSON is still invalid: %s", e)
        return {}


def try_complete_json(text: str, allowed: TypeOptions = TypeOptions.ALL) -> Optional[str]:
    """
    Complete a JSON fragment, returning None if it cannot be repaired.

    Args:
        text: JSON fragment
        allowed: Kinds the completer may guess closed

    Returns:
        Completed JSON text or None
    """
    try:
        return parse_malformed_string(text, allowed)
    except PartialJSONError as e:
        logger.debug("Could not complete JSON fragment: %s", e)
        return None


def try_parse_json(text: str) -> Optional[Any]:
    """
    Try to parse JSON, returning None if invalid.

    Args:
        text: JSON string to parse

    Returns:
        Parsed JSON value or None if invalid
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


__all__ = [
    "parse_partial_json",
    "try_complete_json",
    "try_parse_json",
]
