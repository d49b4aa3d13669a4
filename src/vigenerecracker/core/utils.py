from __future__ import annotations

import re


_AZ_ONLY_RE = re.compile(r"[^A-Z]+")

_SECONDS_PER_YEAR = 365 * 24 * 3600


def scan(target: str, text: str) -> bool:
    """True if `target` occurs anywhere in `text` (exact, case-sensitive)."""
    return target in text


def normalize_az(s: str) -> str:
    """Keep only A-Z, uppercase."""
    if s is None:
        return ""
    return _AZ_ONLY_RE.sub("", s.upper())


def restrict_to_range(s: str, start: int, end: int) -> str:
    """
    Drop every character outside [start, end].

    If the range is exactly A-Z the text is uppercased first, so
    "attack at dawn" becomes "ATTACKATDAWN" rather than "".
    """
    if s is None:
        return ""
    if (start, end) == (ord("A"), ord("Z")):
        return normalize_az(s)
    return "".join(ch for ch in s if start <= ord(ch) <= end)


def estimate_seconds(keyspace: int, keys_per_second: float) -> float:
    """Projected wall time to try `keyspace` keys at the given rate."""
    if keys_per_second <= 0:
        raise ValueError("keys_per_second must be positive.")
    return keyspace / keys_per_second


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.2f} s"
    if seconds < 3600:
        return f"{seconds / 60:.1f} min"
    if seconds < 86400:
        return f"{seconds / 3600:.1f} h"
    if seconds < _SECONDS_PER_YEAR:
        return f"{seconds / 86400:.1f} days"
    return f"{seconds / _SECONDS_PER_YEAR:,.0f} years"
