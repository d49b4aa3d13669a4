from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional


@dataclass(frozen=True)
class Candidate:
    """One brute-force attempt: the key tried and what it decrypted to."""

    # Position of the key in enumeration order (zero key = 0)
    index: int
    key: str
    plaintext: str

    def __iter__(self) -> Iterator[str]:
        # Allows `key, plaintext = candidate`
        return iter((self.key, self.plaintext))

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "key": self.key,
            "plaintext": self.plaintext,
        }


@dataclass(frozen=True)
class ScanResult:
    key: Optional[str]
    keys_tried: int

    @property
    def found(self) -> bool:
        return self.key is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "found": self.found,
            "keys_tried": self.keys_tried,
        }


@dataclass(frozen=True)
class KeyRange:
    """A contiguous slice of the keyspace: `count` keys starting at `start_key`."""

    start_index: int
    count: int
    start_key: str

    @property
    def stop_index(self) -> int:
        return self.start_index + self.count
