"""
Utility functions for pi-partial-json.
"""

from pi_partial_json.utils.json_parsing import parse_partial_json, try_complete_json, try_parse_json

__all__ = [
    "parse_partial_json",
    "try_complete_json",
    "try_parse_json",
]
