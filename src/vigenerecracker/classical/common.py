from __future__ import annotations

import sys
from dataclasses import dataclass

from vigenerecracker.core.errors import ConfigurationError, EmptyKeyError, InputDomainError

A_ORD = ord("A")
Z_ORD = ord("Z")


@dataclass(frozen=True)
class AlphabetRange:
    """
    Inclusive code-point interval [start, end] the cipher works over.

    Characters are treated as base-`size` digits with `start` as zero.
    """

    start: int = A_ORD
    end: int = Z_ORD

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ConfigurationError(
                f"Alphabet start {self.start} is greater than end {self.end}."
            )
        if self.start < 0:
            raise ConfigurationError(f"Alphabet start {self.start} is not a code point.")
        if self.end > sys.maxunicode:
            raise ConfigurationError(f"Alphabet end {self.end} is past the last code point {sys.maxunicode}.")

    @classmethod
    def from_chars(cls, first: str, last: str) -> "AlphabetRange":
        if len(first) != 1 or len(last) != 1:
            raise ConfigurationError("Alphabet bounds must be single characters.")
        return cls(ord(first), ord(last))

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def first_char(self) -> str:
        return chr(self.start)

    @property
    def last_char(self) -> str:
        return chr(self.end)

    def contains(self, ch: str) -> bool:
        return self.start <= ord(ch) <= self.end

    def check(self, text: str, field: str) -> None:
        """Raise InputDomainError for the first character outside the range."""
        for i, ch in enumerate(text):
            if not self.contains(ch):
                raise InputDomainError(ch, i, field, self.start, self.end)

    def __str__(self) -> str:
        return f"{self.first_char}-{self.last_char}"


def shift_up(o: int, offset: int, alpha: AlphabetRange) -> int:
    """Add `offset` (0..size-1) to code point `o`, wrapping once past `end`."""
    o += offset
    if o > alpha.end:
        o -= alpha.size
    return o


def shift_down(o: int, offset: int, alpha: AlphabetRange) -> int:
    """Subtract `offset` (0..size-1) from code point `o`, wrapping once below `start`."""
    o -= offset
    if o < alpha.start:
        o += alpha.size
    return o


def require_key_length(length: int) -> None:
    if length < 1:
        raise EmptyKeyError(f"Key length must be at least 1 (got {length}).")


def key_to_index(key: str, alpha: AlphabetRange) -> int:
    """Position of `key` in enumeration order (base-`size` value, `start` = 0)."""
    if not key:
        raise EmptyKeyError("Key must not be empty.")
    alpha.check(key, "key")
    n = 0
    for ch in key:
        n = n * alpha.size + (ord(ch) - alpha.start)
    return n


def index_to_key(index: int, length: int, alpha: AlphabetRange) -> str:
    """
    Key at position `index` of the length-`length` keyspace.

    The index is reduced modulo the keyspace size, matching the wraparound of
    the successor function.
    """
    require_key_length(length)
    index %= alpha.size ** length
    digits = []
    for _ in range(length):
        index, d = divmod(index, alpha.size)
        digits.append(chr(alpha.start + d))
    return "".join(reversed(digits))
