"""
Feature modules for Run Compare.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models or dataclasses
- schemas.py - Pydantic schemas (optional)
- service.py - Business logic
- repository.py - Data access (optional)
"""
