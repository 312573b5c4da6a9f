"""Repositories — the persistence gateway consumed by services.

Invariants:
    - Repositories hold no business rules; services decide, repositories query
    - Every query excludes soft-deleted rows
"""
