"""
Write failure responses.

Maps the stable ``code`` of each write failure to an HTTP status.
"""

from fastapi.responses import JSONResponse

from catalog.domain.results import (
    ExternalIdExists,
    Invalid,
    KeyExists,
    MissingPrecondition,
    NotExists,
    VersionInvalid,
    VersionOutdated,
    WriteFailure,
)

STATUS_BY_CODE: dict[str, int] = {
    Invalid.code: 400,
    KeyExists.code: 400,
    ExternalIdExists.code: 400,
    NotExists.code: 412,
    VersionInvalid.code: 412,
    VersionOutdated.code: 412,
    MissingPrecondition.code: 428,
}


def failure_response(failure: WriteFailure) -> JSONResponse:
    """Build the error response for a write failure."""
    content = {"detail": failure.message, "code": failure.code}
    if isinstance(failure, Invalid):
        content["messages"] = list(failure.messages)

    return JSONResponse(
        status_code=STATUS_BY_CODE.get(failure.code, 400),
        content=content,
    )
