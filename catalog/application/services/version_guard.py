"""
Version tokens.

A version token is the decimal version number in double quotes, e.g.
``"3"``. Clients receive it as ``ETag`` and send it back as ``If-Match``.
"""

import re
from typing import Optional, Union

from catalog.domain.results import VersionInvalid, VersionOutdated

_TOKEN_PATTERN = re.compile(r'^"(\d+)"$')


class VersionGuard:
    """Parses, checks and formats version tokens."""

    def parse(self, token: Optional[str]) -> Union[int, VersionInvalid]:
        if token is None:
            return VersionInvalid(version=None)

        match = _TOKEN_PATTERN.match(token)
        if match is None:
            return VersionInvalid(version=token)
        return int(match.group(1))

    def check(
        self,
        resource_id: str,
        candidate: int,
        stored: int,
    ) -> Optional[VersionOutdated]:
        """
        Reject a candidate version that is behind the stored one.

        A candidate ahead of the stored version is accepted; the
        conditional write keys on the stored version either way.
        """
        if candidate < stored:
            return VersionOutdated(id=resource_id, version=candidate)
        return None

    @staticmethod
    def format(version: int) -> str:
        return f'"{version}"'
