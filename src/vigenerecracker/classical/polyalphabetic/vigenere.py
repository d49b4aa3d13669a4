from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, Optional

from vigenerecracker.classical.common import (
    A_ORD,
    Z_ORD,
    AlphabetRange,
    index_to_key,
    key_to_index,
    require_key_length,
    shift_down,
    shift_up,
)
from vigenerecracker.core.errors import EmptyKeyError, KeyLengthError
from vigenerecracker.core.results import Candidate, KeyRange, ScanResult
from vigenerecracker.core.utils import scan

logger = logging.getLogger(__name__)

# How many keys a range scan tries between polls of its stop signal
STOP_POLL_INTERVAL = 1024


def _vigenere_encrypt(text: str, key: str, alpha: AlphabetRange) -> str:
    offsets = [ord(ch) - alpha.start for ch in key]
    n = len(offsets)
    return "".join(chr(shift_up(ord(ch), offsets[i % n], alpha)) for i, ch in enumerate(text))


def _vigenere_decrypt(text: str, key: str, alpha: AlphabetRange) -> str:
    offsets = [ord(ch) - alpha.start for ch in key]
    n = len(offsets)
    return "".join(chr(shift_down(ord(ch), offsets[i % n], alpha)) for i, ch in enumerate(text))


def _successor(key: str, alpha: AlphabetRange) -> str:
    # Odometer: trailing `end` digits roll over to `start`, the next digit carries.
    chars = list(key)
    i = len(chars) - 1
    while i >= 0 and chars[i] == alpha.last_char:
        chars[i] = alpha.first_char
        i -= 1
    if i >= 0:
        chars[i] = chr(ord(chars[i]) + 1)
    return "".join(chars)


class VigenereEngine:
    """
    Vigenère encrypt/decrypt and exhaustive key search over a contiguous
    alphabet (default A-Z).

    Every key and text character must lie inside the alphabet; anything else
    raises InputDomainError before output is produced. The engine keeps no
    state other than its alphabet, which cannot change after construction.
    """

    name = "vigenere"

    def __init__(self, start: int = A_ORD, end: int = Z_ORD):
        self._alphabet = AlphabetRange(start, end)

    @classmethod
    def from_chars(cls, first: str, last: str) -> "VigenereEngine":
        alpha = AlphabetRange.from_chars(first, last)
        return cls(alpha.start, alpha.end)

    @property
    def alphabet(self) -> AlphabetRange:
        return self._alphabet

    def __repr__(self) -> str:
        return f"VigenereEngine(start={self._alphabet.start}, end={self._alphabet.end})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VigenereEngine):
            return NotImplemented
        return self._alphabet == other._alphabet

    def __hash__(self) -> int:
        return hash(self._alphabet)

    # --- transform ---

    def _check_key(self, key: str) -> None:
        if not key:
            raise EmptyKeyError("Vigenère key must not be empty.")
        self._alphabet.check(key, "key")

    def encrypt(self, key: str, plaintext: str) -> str:
        self._check_key(key)
        self._alphabet.check(plaintext, "plaintext")
        return _vigenere_encrypt(plaintext, key, self._alphabet)

    def decrypt(self, key: str, ciphertext: str) -> str:
        self._check_key(key)
        self._alphabet.check(ciphertext, "ciphertext")
        return _vigenere_decrypt(ciphertext, key, self._alphabet)

    def layer(self, text: str) -> str:
        """Encrypt `text` using itself as the key."""
        return self.encrypt(text, text)

    @staticmethod
    def scan(target: str, text: str) -> bool:
        return scan(target, text)

    # --- keyspace ---

    def keyspace_size(self, key_length: int) -> int:
        require_key_length(key_length)
        return self._alphabet.size ** key_length

    def zero_key(self, key_length: int) -> str:
        require_key_length(key_length)
        return self._alphabet.first_char * key_length

    def next_key(self, key: str) -> str:
        """
        Lexicographic successor of `key`: AA -> AB, AZ -> BA, ZZ -> AA.

        The all-`end` key wraps around to the all-`start` key.
        """
        self._check_key(key)
        return _successor(key, self._alphabet)

    def key_to_index(self, key: str) -> int:
        return key_to_index(key, self._alphabet)

    def index_to_key(self, index: int, key_length: int) -> str:
        return index_to_key(index, key_length, self._alphabet)

    def keys(self, key_length: int, start_key: Optional[str] = None) -> Iterator[str]:
        """
        Yield one full pass over the keyspace (size ** key_length keys).

        Starts at the zero key, or resumes from `start_key` and wraps around.
        """
        require_key_length(key_length)
        if start_key is None:
            start_key = self.zero_key(key_length)
        else:
            self._check_key(start_key)
            if len(start_key) != key_length:
                raise KeyLengthError(
                    f"start_key has length {len(start_key)}, expected {key_length}."
                )
        return self._iter_keys(start_key, self.keyspace_size(key_length))

    def _iter_keys(self, key: str, count: int) -> Iterator[str]:
        for _ in range(count):
            yield key
            key = _successor(key, self._alphabet)

    # --- brute force ---

    def brute_force(self, key_length: int, ciphertext: str) -> Iterator[Candidate]:
        """
        Decrypt `ciphertext` under every key of length `key_length`, in
        enumeration order. Arguments are checked before the first candidate.
        """
        require_key_length(key_length)
        self._alphabet.check(ciphertext, "ciphertext")
        total = self.keyspace_size(key_length)
        logger.debug("brute force: %d keys of length %d over %s", total, key_length, self._alphabet)
        return self._candidates(key_length, ciphertext, total)

    def _candidates(self, key_length: int, ciphertext: str, total: int) -> Iterator[Candidate]:
        keys = self._iter_keys(self.zero_key(key_length), total)
        for i, key in enumerate(keys):
            yield Candidate(index=i, key=key, plaintext=_vigenere_decrypt(ciphertext, key, self._alphabet))

    def scan_range(
        self,
        key_range: KeyRange,
        target: str,
        ciphertext: str,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> ScanResult:
        """
        Try the keys of one keyspace slice, stopping at the first decryption
        that contains `target`.

        `should_stop` is polled periodically; when it returns True the scan
        gives up and reports no match.
        """
        self._alphabet.check(ciphertext, "ciphertext")
        tried = 0
        for key in self._iter_keys(key_range.start_key, key_range.count):
            if should_stop is not None and tried % STOP_POLL_INTERVAL == 0 and should_stop():
                logger.debug("scan of range @%d stopped after %d keys", key_range.start_index, tried)
                return ScanResult(key=None, keys_tried=tried)
            tried += 1
            if scan(target, _vigenere_decrypt(ciphertext, key, self._alphabet)):
                return ScanResult(key=key, keys_tried=tried)
        return ScanResult(key=None, keys_tried=tried)

    def search(self, key_length: int, target: str, ciphertext: str) -> ScanResult:
        """Sequential scan of the whole keyspace; reports keys tried as well."""
        require_key_length(key_length)
        full = KeyRange(start_index=0, count=self.keyspace_size(key_length), start_key=self.zero_key(key_length))
        result = self.scan_range(full, target, ciphertext)
        if result.found:
            logger.info("found key %s after %d of %d keys", result.key, result.keys_tried, full.count)
        else:
            logger.info("no key of length %d reveals %r (%d keys tried)", key_length, target, result.keys_tried)
        return result

    def brute_force_scan(self, key_length: int, target: str, ciphertext: str) -> Optional[str]:
        """First key in enumeration order whose decryption contains `target`, or None."""
        return self.search(key_length, target, ciphertext).key

    def measure_rate(self, key_length: int, ciphertext: str, sample: int = 2000) -> float:
        """Keys per second achieved by brute_force on this machine."""
        if sample < 1:
            raise ValueError(f"sample must be at least 1 (got {sample}).")
        sample = min(sample, self.keyspace_size(key_length))
        t0 = time.perf_counter()
        n = 0
        for _ in self.brute_force(key_length, ciphertext):
            n += 1
            if n >= sample:
                break
        elapsed = time.perf_counter() - t0
        return n / elapsed if elapsed > 0 else float(n)
