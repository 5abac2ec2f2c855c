"""Dialect Helpers - INSERT ... ON CONFLICT for the backends we run on.

Invariants:
    - PostgreSQL (asyncpg) in production, SQLite (aiosqlite) in tests
    - Both dialect inserts expose on_conflict_do_update / on_conflict_do_nothing
      with the same signature
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def insert_for(db: AsyncSession, model):
    """Core INSERT for `model`'s table in the dialect of the session's bind."""
    dialect = db.get_bind().dialect.name
    try:
        insert = _INSERTS[dialect]
    except KeyError:
        raise RuntimeError(f"Upserts not supported on dialect '{dialect}'") from None
    return insert(model.__table__)
