"""
Permission flags for JSON completion.

Each flag names one kind of JSON value the completer is allowed to "guess
closed". Flags combine with ``|`` and are checked with ``in``.
"""

from enum import Flag
from typing import Iterable


class TypeOptions(Flag):
    """Value kinds the completer may repair."""

    STR = 1
    NUM = 1 << 1
    ARR = 1 << 2
    OBJ = 1 << 3
    NULL = 1 << 4
    BOOL = 1 << 5
    NAN = 1 << 6
    INFINITY = 1 << 7
    NEG_INFINITY = 1 << 8

    INF = INFINITY | NEG_INFINITY
    SPECIAL = NULL | BOOL | INF | NAN
    ATOM = STR | NUM | SPECIAL
    COLLECTION = ARR | OBJ
    ALL = ATOM | COLLECTION

    @property
    def label(self) -> str:
        """Human readable name used in error messages."""
        return _LABELS.get(self, self.name or repr(self))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "TypeOptions":
        """
        Build a permission set from member names.

        Names are case-insensitive and may use the long spellings
        (``string``, ``number``, ``array``, ``object``, ``boolean``).

        Args:
            names: Iterable of names, e.g. ``["str", "num"]``

        Returns:
            Union of the named flags (empty when no names are given)

        Raises:
            ValueError: If a name is not recognized
        """
        result = cls(0)
        for raw in names:
            name = raw.strip().lower()
            if not name:
                continue
            key = _ALIASES.get(name, name).upper()
            try:
                result |= cls[key]
            except KeyError:
                raise ValueError(f"unknown value kind: {raw!r}") from None
        return result


_LABELS = {
    TypeOptions.STR: "string",
    TypeOptions.NUM: "number",
    TypeOptions.ARR: "array",
    TypeOptions.OBJ: "object",
    TypeOptions.NULL: "null",
    TypeOptions.BOOL: "bool",
    TypeOptions.NAN: "NaN",
    TypeOptions.INFINITY: "Infinity",
    TypeOptions.NEG_INFINITY: "-Infinity",
}

_ALIASES = {
    "string": "str",
    "number": "num",
    "array": "arr",
    "object": "obj",
    "boolean": "bool",
    "-infinity": "neg_infinity",
}


__all__ = ["TypeOptions"]
