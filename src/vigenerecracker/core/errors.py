from __future__ import annotations


class VigenereError(ValueError):
    """Base class for every error raised by the cipher engine."""


class ConfigurationError(VigenereError):
    """Alphabet range is unusable (start > end, or bad bound characters)."""


class EmptyKeyError(VigenereError):
    """A key (or key length) of zero was supplied."""


class InputDomainError(VigenereError):
    """
    A character of a key or text lies outside the engine's alphabet range.

    The engine refuses such input instead of producing wrapped garbage.
    """

    def __init__(self, char: str, position: int, field: str, start: int, end: int) -> None:
        self.char = char
        self.position = position
        self.field = field
        super().__init__(
            f"{field} character {char!r} at position {position} is outside "
            f"the alphabet {chr(start)!r}..{chr(end)!r}."
        )


class KeyLengthError(VigenereError):
    """A key does not have the length the keyspace operation expects."""
