"""Infrastructure Layer — database sessions, logging, password hashing and tokens.

Invariants:
    - Infrastructure never contains business rules (those live in core/)
"""
