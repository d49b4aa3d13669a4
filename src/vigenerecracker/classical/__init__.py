from __future__ import annotations

from .common import AlphabetRange
from .polyalphabetic.vigenere import VigenereEngine

__all__ = ["AlphabetRange", "VigenereEngine"]
