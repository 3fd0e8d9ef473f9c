"""
Domain-level exceptions.

Expected write failures are returned as result variants (see
``catalog.domain.results``). The exceptions below are for conditions the
storage layer reports and the application layer translates.
"""


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class DuplicateResourceError(DomainException):
    """Raised when a storage unique index rejects an insert or replace."""

    def __init__(self, resource: str, detail: str = ""):
        message = f"{resource} violates a unique index"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code="DUPLICATE_RESOURCE")
        self.resource = resource
