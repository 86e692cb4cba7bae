"""
Inkwell Backend - Application Package
=======================================

Blog platform API: user registration/login and blog post CRUD.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Uniqueness, hashing, author lookup
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Services take the database session as an argument, so they can be tested
against an in-memory SQLite database or a mocked session without HTTP.
"""

__version__ = "1.0.0"
