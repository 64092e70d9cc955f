"""
Endpoint Registry — Application Package Initializer
=====================================================

What: Marks the `endpoint_registry` directory as a Python package.
Why:  Enables imports like `from endpoint_registry.config import settings`.
Who:  Used by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows the same layered split all the way down:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, error mapping
    ├─────────────────────────────────────┤
    │      Repositories (Data Access)     │  ← find / create / update / delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Engine, pool, sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
