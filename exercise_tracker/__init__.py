"""
Exercise Tracker — Application Package
========================================

A small exercise-logging HTTP API: create users, add exercises to a user,
read a user's exercise log filtered by date range and count.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Validation, Queries)  │  ← id/date/limit parsing, store access
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Injected async store client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
