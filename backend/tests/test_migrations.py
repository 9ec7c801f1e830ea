"""Migrations - the alembic revision builds the same contacts table as the ORM.

Tests cover:
    - upgrade head creates contacts on an empty database
    - the migrated table accepts inserts through ContactStore
    - downgrade base drops it again

Design Decisions:
    - Migrations run in sync fixtures/tests: env.py drives its own event loop
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from contactform.core.domain_types import ContactSubmission
from contactform.infrastructure.contact_store import ContactStore
from tests.db_helpers import fetch_contacts

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    return config


def _columns(db_path: Path) -> dict[str, set[str]]:
    """Table name -> column names."""
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        return {
            table: {c["name"] for c in inspector.get_columns(table)}
            for table in inspector.get_table_names()
        }
    finally:
        engine.dispose()


@pytest.fixture
def migrated_db(tmp_path, monkeypatch):
    db_path = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    command.upgrade(_alembic_config(), "head")
    return db_path


def test_upgrade_creates_contacts(migrated_db):
    assert _columns(migrated_db)["contacts"] == {
        "id", "name", "email", "subject", "message", "created_at",
    }


def test_downgrade_drops_contacts(migrated_db):
    command.downgrade(_alembic_config(), "base")
    assert "contacts" not in _columns(migrated_db)


async def test_migrated_table_accepts_inserts(migrated_db):
    store = ContactStore(f"sqlite+aiosqlite:///{migrated_db}")
    try:
        first = await store.insert(ContactSubmission("Ann", "ann@example.com", "", "Hi"))
        second = await store.insert(ContactSubmission("Bob", "bob@example.com", "", "Yo"))
        assert second > first
        rows = await fetch_contacts(store)
        assert all(r.created_at is not None for r in rows)
    finally:
        await store.dispose()
