"""Infrastructure Layer — persistence, hashing, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage errors are mapped to core DatabaseError, never swallowed

Design Decisions:
    - Thin wrappers over SQLAlchemy and bcrypt: core stays free of IO
"""
