"""
Errors raised while completing partial JSON.

Every engine failure derives from PartialJSONError. The top-level entry
point wraps engine failures in MalformedJSONError.
"""

from pi_partial_json.options import TypeOptions


class PartialJSONError(Exception):
    """Base error for partial JSON completion."""

    pass


class EmptyInputError(PartialJSONError):
    """Input is blank after trimming whitespace."""

    def __init__(self) -> None:
        super().__init__("string is empty; cannot parse")


class UnexpectedCharacterError(PartialJSONError):
    """No JSON production starts with this character."""

    def __init__(self, char: str, offset: int) -> None:
        self.char = char
        self.offset = offset
        super().__init__(f"unexpected character {char!r} at offset {offset}")


class DisallowedCompletionError(PartialJSONError):
    """A value needed repair but its kind is not in the permission set."""

    def __init__(self, kind: TypeOptions) -> None:
        self.kind = kind
        super().__init__(f"cannot parse {kind.label} with given options")


class StructuralMismatchError(PartialJSONError):
    """A complete separator or terminator was the wrong character."""

    def __init__(self, expected: str, found: str, offset: int) -> None:
        self.expected = expected
        self.found = found
        self.offset = offset
        super().__init__(f"expected {expected} got {found!r} at offset {offset}")


class IncompleteLeadingTokenError(PartialJSONError):
    """A value start (such as a lone '-') that nothing can complete."""

    def __init__(self, offset: int, token: str = "-") -> None:
        self.offset = offset
        self.token = token
        super().__init__(f"cannot parse singular {token!r} at offset {offset}")


class NestingTooDeepError(PartialJSONError):
    """The fragment nests deeper than the interpreter stack allows."""

    def __init__(self) -> None:
        super().__init__("nesting too deep to complete")


class MalformedJSONError(PartialJSONError):
    """The fragment could not be repaired into valid JSON."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"not enough data to fix json string: {cause}")


__all__ = [
    "PartialJSONError",
    "EmptyInputError",
    "UnexpectedCharacterError",
    "DisallowedCompletionError",
    "StructuralMismatchError",
    "IncompleteLeadingTokenError",
    "NestingTooDeepError",
    "MalformedJSONError",
]
