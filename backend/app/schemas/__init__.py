"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Request bodies carry raw form fields; forum validation rules run in services
    - Responses never include password hashes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Lenient request fields (default ""): missing fields become field-level
      "required" errors instead of a generic schema failure
"""
