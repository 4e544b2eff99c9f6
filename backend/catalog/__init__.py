"""
Product Catalog Backend: Application Package
============================================

Layered layout:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← query/body parsing, status codes
    ├─────────────────────────────────────┤
    │      Services (data access)         │  ← parameter-bound statements
    ├─────────────────────────────────────┤
    │       Models & Schemas (data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (persistence)       │  ← async engine, per-request sessions
    └─────────────────────────────────────┘

Entry points: `uvicorn catalog.main:app` or `python -m catalog`.
"""

__version__ = "1.0.0"
