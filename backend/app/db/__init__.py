"""Database Infrastructure - SQLAlchemy Base, dialect helpers and catalogue seed data.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
