"""
Endpoint Registry — Endpoint Service (Business Logic)
=======================================================

What:  The five operations on API endpoint records: list, create, get,
       update, delete.
Why:   Keeps validation, existence checks, and error mapping out of the
       route handlers so they can be tested without HTTP.
How:   Each call builds an EndpointRepository on the request's session,
       performs one check-then-act sequence, and translates storage errors:

           UniqueConstraintViolation → ConflictError  (409)
           StorageError              → DatabaseError  (500)

Design Decision:
    EndpointService is stateless: it receives the session on each call.
    Consistency (uniqueness, atomic check-then-act) is left to the database
    transaction opened by get_db_session; no locking happens here.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from endpoint_registry.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    StorageError,
    UniqueConstraintViolation,
    ValidationError,
)
from endpoint_registry.models.api_endpoint import ApiEndpoint
from endpoint_registry.repositories.endpoint_repository import EndpointRepository
from endpoint_registry.schemas.endpoint import (
    EndpointPayload,
    EndpointResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

RESOURCE = "API endpoint"
MISSING_FIELDS_MESSAGE = "Missing required fields: name, path, method"
DUPLICATE_NAME_MESSAGE = "An API endpoint with this name already exists."


def parse_endpoint_id(endpoint_id: str) -> uuid.UUID:
    """
    Converts a path parameter to a UUID.

    A malformed id cannot name any record, so it is reported as not found.
    """
    try:
        return uuid.UUID(str(endpoint_id))
    except ValueError:
        raise NotFoundError(resource=RESOURCE, resource_id=str(endpoint_id)) from None


def require_fields(payload: EndpointPayload) -> None:
    missing = payload.missing_fields()
    if missing:
        raise ValidationError(
            message=MISSING_FIELDS_MESSAGE,
            context={"missing": missing},
        )


class EndpointService:
    """
    Business logic for API endpoint records.

    Error Handling Strategy:
        ValidationError and NotFoundError are raised directly. Storage
        failures are logged with their traceback and re-raised as
        ConflictError or DatabaseError with an operation-specific message.
    """

    async def list_endpoints(self, db: AsyncSession) -> List[EndpointResponse]:
        """All records, newest first."""
        repo = EndpointRepository(db)
        try:
            endpoints = await repo.find_many()
        except StorageError as e:
            logger.error("Error fetching API endpoints: %s", e.message, exc_info=True)
            raise DatabaseError(message="Failed to fetch API endpoints", context=e.context)

        return [EndpointResponse.model_validate(endpoint) for endpoint in endpoints]

    async def create_endpoint(
        self, db: AsyncSession, payload: EndpointPayload
    ) -> EndpointResponse:
        """
        Validate and insert a new record.

        Raises:
            ValidationError: name, path, or method missing (no storage call)
            ConflictError:   name already taken
            DatabaseError:   any other storage failure
        """
        require_fields(payload)

        # One timestamp for both columns: a fresh record has createdAt == updatedAt
        now = datetime.now(timezone.utc)
        endpoint = ApiEndpoint(
            id=uuid.uuid4(),
            name=payload.name,
            path=payload.path,
            method=payload.method,
            description=payload.description,
            created_at=now,
            updated_at=now,
        )

        repo = EndpointRepository(db)
        try:
            await repo.create(endpoint)
        except UniqueConstraintViolation as e:
            logger.warning("Duplicate API endpoint name '%s'", payload.name)
            raise ConflictError(message=DUPLICATE_NAME_MESSAGE, context=e.context)
        except StorageError as e:
            logger.error("Error creating API endpoint: %s", e.message, exc_info=True)
            raise DatabaseError(message="Failed to create API endpoint", context=e.context)

        logger.info("API endpoint created: %s (%s %s)", endpoint.id, endpoint.method, endpoint.path)
        return EndpointResponse.model_validate(endpoint)

    async def get_endpoint(self, db: AsyncSession, endpoint_id: str) -> EndpointResponse:
        """
        Retrieve a single record.

        Raises:
            NotFoundError: no record with this id
            DatabaseError: lookup failed
        """
        key = parse_endpoint_id(endpoint_id)
        repo = EndpointRepository(db)
        try:
            endpoint = await repo.find_unique(key)
        except StorageError as e:
            logger.error("Error fetching API endpoint %s: %s", key, e.message, exc_info=True)
            raise DatabaseError(message="Failed to fetch API endpoint", context=e.context)

        if endpoint is None:
            raise NotFoundError(resource=RESOURCE, resource_id=str(key))

        return EndpointResponse.model_validate(endpoint)

    async def update_endpoint(
        self, db: AsyncSession, endpoint_id: str, payload: EndpointPayload
    ) -> EndpointResponse:
        """
        Replace name, path, method, and description of an existing record.

        The update is a full replacement: a payload without description
        clears it. updated_at moves to the current time.

        Raises:
            ValidationError: name, path, or method missing (no storage call)
            NotFoundError:   no record with this id
            ConflictError:   new name belongs to another record
            DatabaseError:   any other storage failure
        """
        require_fields(payload)
        key = parse_endpoint_id(endpoint_id)

        repo = EndpointRepository(db)
        try:
            endpoint = await repo.find_unique(key)
            if endpoint is None:
                raise NotFoundError(resource=RESOURCE, resource_id=str(key))

            await repo.update(
                endpoint,
                name=payload.name,
                path=payload.path,
                method=payload.method,
                description=payload.description,
                updated_at=datetime.now(timezone.utc),
            )
        except UniqueConstraintViolation as e:
            logger.warning("Duplicate API endpoint name '%s' on update of %s", payload.name, key)
            raise ConflictError(message=DUPLICATE_NAME_MESSAGE, context=e.context)
        except StorageError as e:
            logger.error("Error updating API endpoint %s: %s", key, e.message, exc_info=True)
            raise DatabaseError(message="Failed to update API endpoint", context=e.context)

        logger.info("API endpoint updated: %s", key)
        return EndpointResponse.model_validate(endpoint)

    async def delete_endpoint(self, db: AsyncSession, endpoint_id: str) -> MessageResponse:
        """
        Remove an existing record.

        Raises:
            NotFoundError: no record with this id
            DatabaseError: lookup or delete failed
        """
        key = parse_endpoint_id(endpoint_id)
        repo = EndpointRepository(db)
        try:
            endpoint = await repo.find_unique(key)
            if endpoint is None:
                raise NotFoundError(resource=RESOURCE, resource_id=str(key))
            await repo.delete(endpoint)
        except StorageError as e:
            logger.error("Error deleting API endpoint %s: %s", key, e.message, exc_info=True)
            raise DatabaseError(message="Failed to delete API endpoint", context=e.context)

        logger.info("API endpoint deleted: %s", key)
        return MessageResponse(message="API endpoint deleted successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
# EndpointService is stateless; one instance serves every request
endpoint_service = EndpointService()
