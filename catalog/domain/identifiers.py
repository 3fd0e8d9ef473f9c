"""
Resource identifiers.

Resources are identified by object ids: 12 bytes rendered as a
24-character lowercase hexadecimal string. The first 4 bytes hold the
creation time in seconds (big-endian), the remaining 8 bytes are random.
"""

import os
import re
import time
from typing import Any

OBJECT_ID_LENGTH = 24

_OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    """Generate a new object id."""
    timestamp = int(time.time()).to_bytes(4, "big")
    return (timestamp + os.urandom(8)).hex()


def is_valid_object_id(value: Any) -> bool:
    """Check whether ``value`` is a well-formed object id."""
    return isinstance(value, str) and _OBJECT_ID_PATTERN.match(value) is not None


def normalize_object_id(value: str) -> str:
    """Lowercase a well-formed object id for storage lookups."""
    return value.lower()
