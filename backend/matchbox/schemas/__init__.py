"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - User ids are bounded in length here and whitespace-stripped by the services

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
