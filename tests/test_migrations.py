# tests/test_migrations.py
"""The Alembic history must build the same messaging tables as the models."""

from pathlib import Path

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, inspect

from marketchat.db.session import Base
from marketchat.models import Message, UserBlock
from marketchat.scripts.migrate import include_object, run_upgrade_head


def test_upgrade_head_creates_messaging_tables(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    run_upgrade_head(url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"chat_message", "user_block", "alembic_version"} <= tables
        # Collaborator tables belong to the marketplace, not to these migrations.
        assert "app_user" not in tables
        assert "book" not in tables

        for model in (Message, UserBlock):
            migrated = {column["name"] for column in inspector.get_columns(model.__tablename__)}
            assert migrated == set(model.__table__.columns.keys())

        indexes = {index["name"] for index in inspector.get_indexes("chat_message")}
        assert {"ix_chat_message_pair_sent", "ix_chat_message_receiver_unread"} <= indexes
    finally:
        engine.dispose()


def test_models_match_migrated_schema(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'autogen.db'}"
    run_upgrade_head(url)

    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn, opts={"include_object": include_object})
            diff = compare_metadata(context, Base.metadata)
    finally:
        engine.dispose()

    # A fresh autogenerate must neither recreate the messaging tables nor add
    # the marketplace-owned user and book tables.
    assert diff == []


def test_collaborator_tables_are_excluded() -> None:
    assert include_object(Message.__table__, "chat_message", "table", False, None) is True
    assert include_object(None, "app_user", "table", False, None) is False
    assert include_object(None, "book", "table", False, None) is False
    assert include_object(None, "alembic_version", "table", True, None) is False
    book_owner = Base.metadata.tables["book"].c.owner_id
    assert include_object(book_owner, "owner_id", "column", False, None) is False


async def test_init_db_and_drop_tables(tmp_path: Path, monkeypatch) -> None:
    from sqlalchemy.ext.asyncio import create_async_engine

    import marketchat.init_db as init_db_module
    from marketchat.db import session as session_module

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dev.db'}")
    monkeypatch.setattr(session_module, "engine", engine)
    monkeypatch.setattr(init_db_module, "engine", engine)

    await init_db_module.init_db()
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
    assert {"chat_message", "user_block", "app_user", "book"} <= tables

    await session_module.drop_tables()
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert tables == []
    await engine.dispose()
