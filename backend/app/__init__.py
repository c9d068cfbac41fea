"""
Todo Backend: Application Package Initializer
===============================================

What: Marks the `app` directory as a Python package.
Who:  Used by Python's import system, pytest, and uvicorn (`uvicorn app.main:app`).

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Handlers)         │  ← One SQL statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine + sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls and service results into
    responses. Services only see an AsyncSession, so they can be driven
    by a mock session in unit tests.
"""

__version__ = "1.0.0"
