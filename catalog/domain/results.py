"""
Write results.

Create and update return one of a closed set of variants instead of
raising. Successful outcomes are ``Created`` and ``Updated``; every
expected failure derives from ``WriteFailure`` and carries a stable
``code`` and a human readable ``message`` for the boundary layer.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Created:
    """A resource was created."""

    id: str


@dataclass(frozen=True)
class Updated:
    """A resource was replaced; ``version`` is the new version."""

    version: int


class WriteFailure:
    """Base class for expected write failures."""

    code: str = "WRITE_FAILED"

    @property
    def message(self) -> str:
        return "Write failed"


@dataclass(frozen=True)
class Invalid(WriteFailure):
    """One or more validation rules were violated."""

    messages: tuple[str, ...]

    code = "INVALID"

    @property
    def message(self) -> str:
        return " ".join(self.messages)


@dataclass(frozen=True)
class KeyExists(WriteFailure):
    """The natural key is already used by another resource."""

    key: Optional[str]
    id: Optional[str] = None

    code = "KEY_EXISTS"

    @property
    def message(self) -> str:
        return f'"{self.key}" already exists.'


@dataclass(frozen=True)
class ExternalIdExists(WriteFailure):
    """The external identifier is already used by another resource."""

    external_id: Optional[str]
    id: Optional[str] = None

    code = "EXTERNAL_ID_EXISTS"

    @property
    def message(self) -> str:
        return f'"{self.external_id}" already exists.'


@dataclass(frozen=True)
class NotExists(WriteFailure):
    """The resource to update does not exist."""

    id: Optional[str]

    code = "NOT_EXISTS"

    @property
    def message(self) -> str:
        return f'There is no resource with id "{self.id}".'


@dataclass(frozen=True)
class VersionInvalid(WriteFailure):
    """The version token is malformed."""

    version: Optional[str]

    code = "VERSION_INVALID"

    @property
    def message(self) -> str:
        return f'The version "{self.version}" is invalid.'


@dataclass(frozen=True)
class VersionOutdated(WriteFailure):
    """The version token is behind the stored version."""

    id: str
    version: int

    code = "VERSION_OUTDATED"

    @property
    def message(self) -> str:
        return f'The version "{self.version}" is outdated.'


@dataclass(frozen=True)
class MissingPrecondition(WriteFailure):
    """An update was requested without any version token."""

    id: Optional[str] = None

    code = "MISSING_PRECONDITION"

    @property
    def message(self) -> str:
        return "A version is required to update a resource."


CreateResult = Union[Created, Invalid, KeyExists, ExternalIdExists]

UpdateResult = Union[
    Updated,
    MissingPrecondition,
    NotExists,
    VersionInvalid,
    Invalid,
    KeyExists,
    VersionOutdated,
]
