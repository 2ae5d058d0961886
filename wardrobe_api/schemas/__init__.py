"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Create schemas forbid unknown fields; update schemas require at least one field

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
