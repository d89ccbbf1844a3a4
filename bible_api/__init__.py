"""
Bible API Application Package

Public, read-only REST API over a Book → Chapter → Verse dataset.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine/session lifecycle
- exceptions.py: Validation / not-found / storage error taxonomy
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic response schemas
- repositories/: Data access per entity
- services/: Resolvers, pagination, caching, rate limiting
- routers/: API route handlers
- middleware/: Request logging
"""

__version__ = "0.1.0"
