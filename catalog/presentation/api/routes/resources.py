"""
Resource routes.

Every resource family exposes the same REST surface; this module builds
the router for one family from its services and response model.
"""

from typing import Any, Callable, Optional, Type

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Request, Response

from catalog.application.services import ReadService, VersionGuard, WriteService
from catalog.domain.results import Created, Updated
from catalog.presentation.api.schemas import BaseResponse, ErrorResponse

from .errors import failure_response

_FAILURE_RESPONSES = {
    400: {"model": ErrorResponse},
    412: {"model": ErrorResponse},
    428: {"model": ErrorResponse},
}


def _location(request: Request, resource_id: str) -> str:
    base = str(request.url.replace(query="")).rstrip("/")
    return f"{base}/{resource_id}"


def build_resource_router(
    name: str,
    response_model: Type[BaseResponse],
    get_read_service: Callable,
    get_write_service: Callable,
) -> APIRouter:
    """
    Build the router for one resource family.

    Args:
        name: Resource name used in messages ("Book")
        response_model: Pydantic model rendering one resource
        get_read_service: Dependency returning the ReadService
        get_write_service: Dependency returning the WriteService
    """
    router = APIRouter()

    @router.get("/{resource_id}", response_model=response_model)
    async def get_by_id(
        resource_id: str,
        response: Response,
        if_none_match: Optional[str] = Header(default=None),
        service: ReadService = Depends(get_read_service),
    ):
        """Get resource by ID; honours If-None-Match."""
        entity = await service.find_by_id(resource_id)
        if entity is None:
            raise HTTPException(404, f"{name} not found")

        etag = VersionGuard.format(entity.version)
        if if_none_match == etag:
            return Response(status_code=304, headers={"ETag": etag})

        response.headers["ETag"] = etag
        return response_model.model_validate(entity)

    @router.get("", response_model=list[response_model])
    async def find(
        request: Request,
        service: ReadService = Depends(get_read_service),
    ):
        """Find resources by query-string criteria."""
        criteria = dict(request.query_params)
        entities = await service.find(criteria or None)

        if not entities:
            raise HTTPException(404, f"No {name.lower()}s found")

        return [response_model.model_validate(e) for e in entities]

    @router.post("", status_code=201, responses=_FAILURE_RESPONSES)
    async def create(
        request: Request,
        candidate: dict[str, Any] = Body(...),
        service: WriteService = Depends(get_write_service),
    ):
        """Create a new resource."""
        result = await service.create(candidate)
        if not isinstance(result, Created):
            return failure_response(result)

        return Response(
            status_code=201,
            headers={"Location": _location(request, result.id)},
        )

    @router.put("/{resource_id}", status_code=204, responses=_FAILURE_RESPONSES)
    async def update(
        resource_id: str,
        candidate: dict[str, Any] = Body(...),
        if_match: Optional[str] = Header(default=None),
        service: WriteService = Depends(get_write_service),
    ):
        """Replace a resource; requires If-Match."""
        result = await service.update(resource_id, candidate, if_match)
        if not isinstance(result, Updated):
            return failure_response(result)

        return Response(
            status_code=204,
            headers={"ETag": VersionGuard.format(result.version)},
        )

    @router.delete("/{resource_id}", status_code=204)
    async def delete(
        resource_id: str,
        service: WriteService = Depends(get_write_service),
    ):
        """Delete a resource. Unknown ids are not an error."""
        await service.delete(resource_id)
        return Response(status_code=204)

    return router
