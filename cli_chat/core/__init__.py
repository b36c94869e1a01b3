"""Core Layer — domain types, errors, query building and row mapping. No IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
"""
