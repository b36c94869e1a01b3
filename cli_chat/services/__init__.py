"""Services Layer — one service class per RPC service, one method per RPC.

Invariants:
    - Each method issues exactly one statement through StatementRunner
    - Services raise CliChatError subclasses; status mapping happens in api/
"""
