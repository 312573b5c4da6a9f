"""HR Leave API package — employees, authentication and leave-request lifecycle.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
