"""
Meetups Backend: Package Initializer
=======================================

Architecture Note:
    The package follows a layered layout:

    ┌─────────────────────────────────────┐
    │         Services (Business Logic)   │  ← meetup CRUD, attendance, views
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Transport (HTTP), authentication and image upload live outside this
    package; they hand validated schemas and an authenticated User to the
    services.
"""

__version__ = "1.0.0"
