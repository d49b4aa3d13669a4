from .classical import AlphabetRange, VigenereEngine
from .core import (
    Candidate,
    ConfigurationError,
    EmptyKeyError,
    InputDomainError,
    KeyLengthError,
    KeyRange,
    ScanResult,
    VigenereError,
    scan,
)

__version__ = "0.1.0"

__all__ = [
    "AlphabetRange",
    "VigenereEngine",
    "Candidate",
    "KeyRange",
    "ScanResult",
    "VigenereError",
    "ConfigurationError",
    "EmptyKeyError",
    "InputDomainError",
    "KeyLengthError",
    "scan",
]
