"""cli-chat — user directory and chat RPC services over a relational store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
