"""Create database tables for the Rakshak portal backend."""

from __future__ import annotations

import logging

from rakshak.core.db import engine
from rakshak.core.db import SessionContext
from rakshak.models import Base
from rakshak.services.auth_seed import seed_admin_user


logger = logging.getLogger("scripts.create_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified.")
    with SessionContext() as db:
        seed_admin_user(db)


if __name__ == "__main__":
    main()
