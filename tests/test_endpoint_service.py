"""
Endpoint Registry — Endpoint Service Unit Tests
=================================================

What:  Tests for EndpointService (list, create, get, update, delete).
How:   Uses a mock AsyncSession; no database involved.

What we test:
    ✅ Required-field validation happens before any storage call
    ✅ Unique violations become ConflictError, other faults DatabaseError
    ✅ Unknown and malformed ids raise NotFoundError
    ✅ Update replaces fields and refreshes updated_at
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from endpoint_registry.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from endpoint_registry.models.api_endpoint import ApiEndpoint
from endpoint_registry.schemas.endpoint import EndpointPayload
from endpoint_registry.services.endpoint_service import EndpointService


class FakeDriverError(Exception):
    """Stands in for a DBAPI exception carrying a SQLSTATE."""

    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def unique_violation():
    return IntegrityError(
        "INSERT INTO api_endpoints ...",
        {},
        FakeDriverError("duplicate key value violates unique constraint", sqlstate="23505"),
    )


def connection_lost():
    return OperationalError("SELECT ...", {}, FakeDriverError("connection refused"))


class TestEndpointServiceList:
    """Tests for list_endpoints."""

    def setup_method(self):
        self.service = EndpointService()

    @pytest.mark.asyncio
    async def test_list_returns_records_in_query_order(self, mock_db_session, sample_endpoint_data):
        newer = ApiEndpoint(**sample_endpoint_data)
        older_data = dict(sample_endpoint_data, id=uuid4(), name="older")
        older_data["created_at"] = older_data["updated_at"] = (
            sample_endpoint_data["created_at"] - timedelta(minutes=5)
        )
        older = ApiEndpoint(**older_data)

        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [newer, older]
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_endpoints(mock_db_session)

        assert [r.name for r in result] == ["ping", "older"]
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_storage_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = connection_lost()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_endpoints(mock_db_session)

        assert exc_info.value.message == "Failed to fetch API endpoints"


class TestEndpointServiceCreate:
    """Tests for create_endpoint."""

    def setup_method(self):
        self.service = EndpointService()

    @pytest.mark.asyncio
    async def test_create_success(self, mock_db_session):
        payload = EndpointPayload(name="ping", path="/ping", method="GET")

        result = await self.service.create_endpoint(mock_db_session, payload)

        assert result.name == "ping"
        assert result.path == "/ping"
        assert result.method == "GET"
        assert result.description is None
        assert result.created_at == result.updated_at
        mock_db_session.add.assert_called_once()
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_missing_method_never_touches_storage(self, mock_db_session):
        payload = EndpointPayload(name="ping", path="/ping")

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_endpoint(mock_db_session, payload)

        assert exc_info.value.message == "Missing required fields: name, path, method"
        assert exc_info.value.context["missing"] == ["method"]
        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_empty_string_counts_as_missing(self, mock_db_session):
        payload = EndpointPayload(name="", path="/ping", method="GET")

        with pytest.raises(ValidationError):
            await self.service.create_endpoint(mock_db_session, payload)

    @pytest.mark.asyncio
    async def test_create_duplicate_name_raises_conflict(self, mock_db_session):
        mock_db_session.flush.side_effect = unique_violation()
        payload = EndpointPayload(name="ping", path="/ping", method="GET")

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_endpoint(mock_db_session, payload)

        assert exc_info.value.message == "An API endpoint with this name already exists."
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_other_integrity_error_is_internal(self, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT ...", {}, FakeDriverError("null value in column", sqlstate="23502")
        )
        payload = EndpointPayload(name="ping", path="/ping", method="GET")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_endpoint(mock_db_session, payload)

        assert exc_info.value.message == "Failed to create API endpoint"


class TestEndpointServiceGet:
    """Tests for get_endpoint."""

    def setup_method(self):
        self.service = EndpointService()

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session, sample_endpoint_data):
        mock_db_session.get.return_value = ApiEndpoint(**sample_endpoint_data)

        result = await self.service.get_endpoint(mock_db_session, str(sample_endpoint_data["id"]))

        assert result.id == sample_endpoint_data["id"]
        assert result.description == "Liveness check"

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_endpoint(mock_db_session, str(uuid4()))

        assert exc_info.value.message == "API endpoint not found"

    @pytest.mark.asyncio
    async def test_get_malformed_id_is_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_endpoint(mock_db_session, "not-a-uuid")

        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_storage_failure(self, mock_db_session):
        mock_db_session.get.side_effect = connection_lost()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_endpoint(mock_db_session, str(uuid4()))

        assert exc_info.value.message == "Failed to fetch API endpoint"


class TestEndpointServiceUpdate:
    """Tests for update_endpoint."""

    def setup_method(self):
        self.service = EndpointService()

    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_refreshes_timestamp(
        self, mock_db_session, sample_endpoint_data
    ):
        past = datetime(2024, 1, 1, tzinfo=timezone.utc)
        existing = ApiEndpoint(**dict(sample_endpoint_data, created_at=past, updated_at=past))
        mock_db_session.get.return_value = existing
        payload = EndpointPayload(name="ping2", path="/v2/ping", method="POST")

        result = await self.service.update_endpoint(
            mock_db_session, str(existing.id), payload
        )

        assert result.name == "ping2"
        assert result.path == "/v2/ping"
        assert result.method == "POST"
        # Full replacement: omitted description is cleared
        assert result.description is None
        assert result.created_at == past
        assert result.updated_at > past
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup(self, mock_db_session):
        payload = EndpointPayload(name="ping", method="GET")

        with pytest.raises(ValidationError):
            await self.service.update_endpoint(mock_db_session, str(uuid4()), payload)

        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_db_session):
        payload = EndpointPayload(name="ping", path="/ping", method="GET")

        with pytest.raises(NotFoundError):
            await self.service.update_endpoint(mock_db_session, str(uuid4()), payload)

        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_name_collision_raises_conflict(self, mock_db_session, sample_endpoint_data):
        mock_db_session.get.return_value = ApiEndpoint(**sample_endpoint_data)
        mock_db_session.flush.side_effect = unique_violation()
        payload = EndpointPayload(name="taken", path="/ping", method="GET")

        with pytest.raises(ConflictError):
            await self.service.update_endpoint(
                mock_db_session, str(sample_endpoint_data["id"]), payload
            )

    @pytest.mark.asyncio
    async def test_update_storage_failure(self, mock_db_session, sample_endpoint_data):
        mock_db_session.get.return_value = ApiEndpoint(**sample_endpoint_data)
        mock_db_session.flush.side_effect = connection_lost()
        payload = EndpointPayload(name="ping2", path="/ping", method="GET")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_endpoint(
                mock_db_session, str(sample_endpoint_data["id"]), payload
            )

        assert exc_info.value.message == "Failed to update API endpoint"

    @pytest.mark.asyncio
    async def test_update_lookup_failure(self, mock_db_session):
        mock_db_session.get.side_effect = connection_lost()
        payload = EndpointPayload(name="ping", path="/ping", method="GET")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_endpoint(mock_db_session, str(uuid4()), payload)

        assert exc_info.value.message == "Failed to update API endpoint"


class TestEndpointServiceDelete:
    """Tests for delete_endpoint."""

    def setup_method(self):
        self.service = EndpointService()

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_db_session, sample_endpoint_data):
        existing = ApiEndpoint(**sample_endpoint_data)
        mock_db_session.get.return_value = existing

        result = await self.service.delete_endpoint(
            mock_db_session, str(sample_endpoint_data["id"])
        )

        assert result.message == "API endpoint deleted successfully"
        mock_db_session.delete.assert_awaited_once_with(existing)

    @pytest.mark.asyncio
    async def test_delete_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_endpoint(mock_db_session, str(uuid4()))

        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_storage_failure(self, mock_db_session, sample_endpoint_data):
        mock_db_session.get.return_value = ApiEndpoint(**sample_endpoint_data)
        mock_db_session.flush.side_effect = connection_lost()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.delete_endpoint(
                mock_db_session, str(sample_endpoint_data["id"])
            )

        assert exc_info.value.message == "Failed to delete API endpoint"
