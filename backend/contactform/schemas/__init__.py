"""Pydantic Schemas - request/response shapes for API endpoints.

Invariants:
    - Schemas check structure only (presence, JSON types); field rules live in core/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
