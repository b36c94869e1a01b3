"""Database Schema — declarative base shared by all ORM models.

Invariants:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
