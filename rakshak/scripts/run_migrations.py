"""
Run Alembic migrations to head.

Usage:
    python -m rakshak.scripts.run_migrations
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect


BASELINE_REVISION = "20261017_01"


def _build_alembic_config() -> Config:
    repo_root = Path(__file__).resolve().parents[2]
    alembic_ini = repo_root / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")
    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(repo_root / "alembic"))
    db_url = os.getenv("DATABASE_URL")
    if db_url:
        cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def _needs_baseline_stamp(cfg: Config) -> bool:
    db_url = cfg.get_main_option("sqlalchemy.url")
    if not db_url:
        return False
    engine = create_engine(db_url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    if "alembic_version" in tables:
        return False
    # Databases built via create_all() carry no Alembic state yet.
    return any(name in tables for name in {"users", "fir", "complaints"})


def run_migrations_to_head(*, keep_app_logging: bool = False) -> None:
    cfg = _build_alembic_config()
    if keep_app_logging:
        cfg.attributes["skip_logging_config"] = True
    if _needs_baseline_stamp(cfg):
        command.stamp(cfg, BASELINE_REVISION)
    command.upgrade(cfg, "head")


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    try:
        run_migrations_to_head()
    except Exception as exc:
        logging.getLogger("scripts.run_migrations").error("Migration failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
