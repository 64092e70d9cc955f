"""
Endpoint Registry — ApiEndpoint SQLAlchemy Model
==================================================

What:  ORM model representing the `api_endpoints` table.
Who:   Used by EndpointRepository for CRUD operations and by Alembic.

Table Design Rationale:
    - UUID primary key: generated in Python (uuid4), non-sequential
    - name: unique constraint; the database is the only arbiter of uniqueness,
      so concurrent creates with the same name are resolved there
    - path / method / description: unbounded text, stored exactly as submitted
    - created_at / updated_at: UTC with time zone; set by the service layer so
      a new row gets identical values for both

    Index on created_at DESC serves the list query (newest first).
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from endpoint_registry.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApiEndpoint(Base):
    """
    A registered API endpoint.

    Lifecycle:
        1. Created by POST /endpoints (created_at == updated_at)
        2. Fully replaced by PUT /endpoints/{id} (updated_at refreshed)
        3. Removed by DELETE /endpoints/{id}; no soft delete
    """

    __tablename__ = "api_endpoints"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    path: Mapped[str] = mapped_column(Text, nullable=False)

    # HTTP verb label, stored as sent (GET, POST, ...)
    method: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_api_endpoints_name"),
    )

    def __repr__(self) -> str:
        return (
            f"<ApiEndpoint(id={self.id}, name='{self.name}', "
            f"method='{self.method}', path='{self.path}')>"
        )


# Newest-first listing
Index("idx_api_endpoints_created_at", ApiEndpoint.created_at.desc())
