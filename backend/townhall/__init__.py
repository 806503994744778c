"""
Townhall Backend — Application Package Initializer
====================================================

What: Social discussion backend. Users post discussions, attach hashtags,
      and other users comment and like.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Rules)   │  ← existence checks, cascades
    ├─────────────────────────────────────┤
    │     Repositories (Data Access)      │  ← one per entity
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each layer receives the one below it explicitly: repositories take a
    session, services take repositories (see townhall.dependencies).
"""

__version__ = "1.0.0"
