"""
Villa endpoints for API v1.

These routes expose the villa collection through list, get, create,
replace, patch and delete.  Handlers only decode the request, call
:class:`~villa_api.app.services.villa_service.VillaService` and encode
the result; every validation rule lives in the service.  Errors raised
by the service are rendered by the exception handlers registered in
``main.create_app``.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Body, Depends, Request, Response, status

from villa_api.app.schemas.villa import JsonPatchOperation, VillaCreate, VillaPatch, VillaRead
from villa_api.app.services.villa_service import VillaService

router = APIRouter()


def get_villa_service(request: Request) -> VillaService:
    """Return the service bound to the running application."""
    return request.app.state.villa_service


@router.get("/", response_model=List[VillaRead], status_code=status.HTTP_200_OK)
async def list_villas(service: VillaService = Depends(get_villa_service)) -> List[VillaRead]:
    """Return every villa."""
    return service.list_villas()


@router.get(
    "/{villa_id}",
    response_model=VillaRead,
    name="get_villa",
    responses={400: {"description": "Id is 0"}, 404: {"description": "Villa not found"}},
)
async def get_villa(villa_id: int, service: VillaService = Depends(get_villa_service)) -> VillaRead:
    """Retrieve a single villa by its ID."""
    return service.get_villa(villa_id)


@router.post(
    "/",
    response_model=VillaRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing payload or duplicate name"}, 500: {"description": "Id was pre-set"}},
)
async def create_villa(
    request: Request,
    response: Response,
    villa: Optional[VillaCreate] = Body(None),
    service: VillaService = Depends(get_villa_service),
) -> VillaRead:
    """Create a villa.

    The server assigns the id; sending a positive ``id`` is rejected
    with 500.  The ``Location`` header points at the new villa.
    """
    created = service.create_villa(villa)
    response.headers["Location"] = str(request.url_for("get_villa", villa_id=created.id))
    return created


@router.put(
    "/{villa_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"description": "Missing payload or id mismatch"}, 404: {"description": "Villa not found"}},
)
async def update_villa(
    villa_id: int,
    villa: Optional[VillaCreate] = Body(None),
    service: VillaService = Depends(get_villa_service),
) -> Response:
    """Replace every field of a villa except its id."""
    service.replace_villa(villa_id, villa)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{villa_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"description": "Invalid document, id is 0 or villa not found"}},
)
async def update_partial_villa(
    villa_id: int,
    document: Union[List[JsonPatchOperation], VillaPatch, None] = Body(None),
    service: VillaService = Depends(get_villa_service),
) -> Response:
    """Partially update a villa.

    Accepts either an object with the fields to change, e.g.
    ``{"occupancy": 6}``, or a JSON Patch operation list, e.g.
    ``[{"op": "replace", "path": "/name", "value": "Sea View"}]``.
    """
    service.patch_villa(villa_id, document)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{villa_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"description": "Id is 0"}, 404: {"description": "Villa not found"}},
)
async def delete_villa(villa_id: int, service: VillaService = Depends(get_villa_service)) -> Response:
    """Delete a villa."""
    service.delete_villa(villa_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
