"""
Application services.
"""

from .read_service import EXACT_KEY_MIN_LENGTH, ReadService, coerce_criterion
from .uniqueness import UniquenessChecker
from .validation import Validator
from .version_guard import VersionGuard
from .write_service import WriteService

__all__ = [
    "EXACT_KEY_MIN_LENGTH",
    "ReadService",
    "coerce_criterion",
    "UniquenessChecker",
    "Validator",
    "VersionGuard",
    "WriteService",
]
