"""Infrastructure Layer — database sessions, logging, and retry.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All store calls wrapped with rollback and error mapping

Design Decisions:
    - Resilient wrappers around operations instead of retry logic in handlers
"""
