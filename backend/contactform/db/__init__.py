"""Database Infrastructure - SQLAlchemy Base for the contact store.

Invariants:
    - Single async engine per process (owned by ContactStore)

Design Decisions:
    - aiosqlite driver for the file-backed SQLite store
"""
