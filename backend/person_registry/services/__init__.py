"""Services Layer — record orchestration, repository, and query composition.

Invariants:
    - Services receive their collaborators (repository, retry executor) by injection
    - SQLAlchemy statements are composed here, never in routes

Design Decisions:
    - One file per concern: filters, repository, orchestration
"""
