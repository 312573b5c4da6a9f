"""Services Layer — auth, employee directory and leave-request lifecycle.

Invariants:
    - One service class per component, constructed per request around a DB session
    - Services raise HRLeaveError subclasses; routes never translate errors themselves
"""
