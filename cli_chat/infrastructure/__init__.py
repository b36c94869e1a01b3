"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Store failures leave this layer only as StoreError
"""
