"""Route Modules — one file per RPC service or concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - RPC modules export SERVICE_NAME and METHODS for reflection
"""
