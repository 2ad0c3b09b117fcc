"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own the unit of work (commit/rollback); repositories only flush
    - Every storage error is propagated (DatabaseError) or classified, never ignored
"""
