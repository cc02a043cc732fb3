# src/marketchat/scripts/migrate.py
from __future__ import annotations
import os
from alembic import command
from alembic.config import Config

from marketchat.core.settings import settings
from marketchat.models.marketplace import COLLABORATOR_TABLES


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    """Limit autogenerate to the messaging tables.

    Alembic's own bookkeeping table and the collaborator tables (users,
    books) are left alone in both directions.
    """
    if type_ == "table":
        return name != "alembic_version" and name not in COLLABORATOR_TABLES
    table = getattr(obj, "table", None)
    return table is None or table.name not in COLLABORATOR_TABLES


def run_upgrade_head(database_url: str | None = None) -> None:
    project_root = os.path.join(os.path.dirname(__file__), "..", "..", "..")
    cfg = Config(os.path.join(project_root, "alembic.ini"))
    # Alembic runs on a synchronous driver
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url_sync)
    cfg.set_main_option("script_location", os.path.abspath(os.path.join(project_root, "migrations")))
    command.upgrade(cfg, "head")

if __name__ == "__main__":
    run_upgrade_head()
