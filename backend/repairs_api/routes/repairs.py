"""
Repairs API — Repair Route Handlers
====================================

What:  HTTP adapters for the repair operations.
How:   Each route pulls the raw request pieces (path id, query, body bytes),
       hands them to RepairService with the app's store, and shapes the response.
       Errors are raised as application exceptions and rendered by the global
       handlers in main.py.

Route Inventory:
    GET    /repairs              list, optional ?assignedTo= filter
    GET    /repairs/{id}         single repair
    POST   /repairs              create (201 + Location header)
    PATCH  /repairs/{id}         partial update
    DELETE /repairs/{id}         delete
    PATCH  /repairs              legacy update, id in body
    DELETE /repairs              legacy delete, id in body

Request bodies are read as raw bytes rather than declared as pydantic
parameters, so a bad body is reported as 400 `{"error": ...}` instead of
FastAPI's default 422. The body schemas are still published in the OpenAPI
document through `openapi_extra`.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from repairs_api.exceptions import UnsupportedMediaTypeError
from repairs_api.models.repair import Repair
from repairs_api.schemas.repair import (
    ErrorResponse,
    LegacyRepairUpdate,
    MessageResponse,
    RepairCreate,
    RepairIdBody,
    RepairUpdate,
)
from repairs_api.services.repair_service import repair_service
from repairs_api.store import RepairStore, get_store
from repairs_api.validation import is_json_content_type

router = APIRouter(tags=["Repairs"])

DELETED_MESSAGE = "Repair deleted successfully"

_ERROR_400 = {400: {"description": "Invalid request", "model": ErrorResponse}}
_ERROR_404 = {404: {"description": "Repair not found", "model": ErrorResponse}}
_ERROR_415 = {415: {"description": "Unsupported Media Type", "model": ErrorResponse}}


def _json_body(model) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


async def require_json(request: Request) -> bytes:
    """
    Dependency for routes that take a body: checks the content type, then reads the body.

    Raises:
        UnsupportedMediaTypeError: Content-Type is missing or not application/json
    """
    content_type = request.headers.get("content-type")
    if not is_json_content_type(content_type):
        raise UnsupportedMediaTypeError(content_type=content_type)
    return await request.body()


@router.get(
    "/repairs",
    response_model=List[Repair],
    summary="Get all repairs",
    description=(
        "Returns all repairs. With `assignedTo`, returns the repairs whose assignee "
        "contains the first or the last name given (case-insensitive)."
    ),
)
async def list_repairs(
    assigned_to: Optional[str] = Query(
        default=None,
        alias="assignedTo",
        description="First and/or last name of the assignee",
    ),
    store: RepairStore = Depends(get_store),
) -> List[Repair]:
    return repair_service.list_repairs(store, assigned_to)


@router.get(
    "/repairs/{repair_id}",
    response_model=Repair,
    responses={**_ERROR_400, **_ERROR_404},
    summary="Get a repair by ID",
)
async def get_repair(repair_id: str, store: RepairStore = Depends(get_store)) -> Repair:
    # repair_id stays a str so that "abc" reaches the service and becomes a 400
    return repair_service.get_repair(store, repair_id)


@router.post(
    "/repairs",
    response_model=Repair,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERROR_400, **_ERROR_415},
    summary="Create a new repair",
    openapi_extra=_json_body(RepairCreate),
)
async def create_repair(
    response: Response,
    body: bytes = Depends(require_json),
    store: RepairStore = Depends(get_store),
) -> Repair:
    repair = repair_service.create_repair(store, body)
    response.headers["Location"] = f"/repairs/{repair.id}"
    return repair


@router.patch(
    "/repairs/{repair_id}",
    response_model=Repair,
    responses={**_ERROR_400, **_ERROR_404, **_ERROR_415},
    summary="Update a repair by ID",
    description="Only the fields present in the body are changed.",
    openapi_extra=_json_body(RepairUpdate),
)
async def update_repair(
    repair_id: str,
    body: bytes = Depends(require_json),
    store: RepairStore = Depends(get_store),
) -> Repair:
    return repair_service.update_repair(store, repair_id, body)


@router.delete(
    "/repairs/{repair_id}",
    response_model=MessageResponse,
    responses={**_ERROR_400, **_ERROR_404},
    summary="Delete a repair by ID",
)
async def delete_repair(repair_id: str, store: RepairStore = Depends(get_store)) -> MessageResponse:
    repair_service.delete_repair(store, repair_id)
    return MessageResponse(message=DELETED_MESSAGE)


# ── Legacy body-id routes ─────────────────────────────────────────────────
# Earlier plugin clients sent the id in the body instead of the path.

@router.patch(
    "/repairs",
    response_model=Repair,
    responses={**_ERROR_400, **_ERROR_404, **_ERROR_415},
    summary="Update a repair (id in body)",
    deprecated=True,
    openapi_extra=_json_body(LegacyRepairUpdate),
)
async def update_repair_by_body(
    body: bytes = Depends(require_json),
    store: RepairStore = Depends(get_store),
) -> Repair:
    return repair_service.update_repair_from_body(store, body)


@router.delete(
    "/repairs",
    response_model=MessageResponse,
    responses={**_ERROR_400, **_ERROR_404, **_ERROR_415},
    summary="Delete a repair (id in body)",
    deprecated=True,
    openapi_extra=_json_body(RepairIdBody),
)
async def delete_repair_by_body(
    body: bytes = Depends(require_json),
    store: RepairStore = Depends(get_store),
) -> MessageResponse:
    repair_service.delete_repair_from_body(store, body)
    return MessageResponse(message=DELETED_MESSAGE)
