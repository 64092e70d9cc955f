"""
Endpoint Registry — Endpoint Route Handlers
=============================================

What:  The collection handler (GET/POST /endpoints) and the item handler
       (GET/PUT/DELETE /endpoints/{id}).
How:   Parse the request, delegate to EndpointService, return JSON.
       Errors raised by the service are turned into responses by the global
       exception handlers in main.py.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from endpoint_registry.database import get_db_session
from endpoint_registry.schemas.endpoint import (
    EndpointPayload,
    EndpointResponse,
    ErrorResponse,
    MessageResponse,
)
from endpoint_registry.services.endpoint_service import endpoint_service

router = APIRouter(tags=["Endpoints"])


# ══════════════════════════════════════════════════════════════════════════
# Collection Handler
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/endpoints",
    response_model=List[EndpointResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List API endpoints",
    description="Returns every registered API endpoint, newest first.",
)
async def list_endpoints(
    db: AsyncSession = Depends(get_db_session),
) -> List[EndpointResponse]:
    return await endpoint_service.list_endpoints(db)


@router.post(
    "/endpoints",
    response_model=EndpointResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        409: {"description": "Name already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an API endpoint",
    description=(
        "Registers a new API endpoint. `name`, `path` and `method` are required; "
        "`name` must be unique."
    ),
)
async def create_endpoint(
    payload: EndpointPayload,
    db: AsyncSession = Depends(get_db_session),
) -> EndpointResponse:
    return await endpoint_service.create_endpoint(db, payload)


# ══════════════════════════════════════════════════════════════════════════
# Item Handler
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/endpoints/{endpoint_id}",
    response_model=EndpointResponse,
    responses={
        404: {"description": "Endpoint not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get an API endpoint by ID",
)
async def get_endpoint(
    endpoint_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> EndpointResponse:
    return await endpoint_service.get_endpoint(db, endpoint_id)


@router.put(
    "/endpoints/{endpoint_id}",
    response_model=EndpointResponse,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        404: {"description": "Endpoint not found", "model": ErrorResponse},
        409: {"description": "Name already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace an API endpoint",
    description=(
        "Overwrites name, path, method and description of an existing endpoint. "
        "Omitting `description` clears it."
    ),
)
async def update_endpoint(
    endpoint_id: str,
    payload: EndpointPayload,
    db: AsyncSession = Depends(get_db_session),
) -> EndpointResponse:
    return await endpoint_service.update_endpoint(db, endpoint_id, payload)


@router.delete(
    "/endpoints/{endpoint_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Endpoint not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete an API endpoint",
)
async def delete_endpoint(
    endpoint_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await endpoint_service.delete_endpoint(db, endpoint_id)
