"""Pydantic Schemas — RPC request/response messages.

Invariants:
    - Schemas validate at the system boundary; malformed bodies never reach services
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are wire contracts, models are persistence
"""
