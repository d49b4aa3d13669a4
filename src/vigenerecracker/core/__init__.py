from .errors import ConfigurationError, EmptyKeyError, InputDomainError, KeyLengthError, VigenereError
from .results import Candidate, KeyRange, ScanResult
from .utils import scan

__all__ = [
    "VigenereError",
    "ConfigurationError",
    "EmptyKeyError",
    "InputDomainError",
    "KeyLengthError",
    "Candidate",
    "KeyRange",
    "ScanResult",
    "scan",
]
