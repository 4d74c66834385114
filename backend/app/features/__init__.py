"""
Feature modules for Race Plan.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models or plain dataclasses
- schemas.py - Pydantic schemas (optional)
- service.py - Business logic
- repository.py - Data access (optional)
- errors.py - Feature exceptions (optional)
"""
