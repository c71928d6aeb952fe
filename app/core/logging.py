from __future__ import annotations

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


# Centralized app logging configuration (format + level).
def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # passlib warns on every start about the bcrypt version attribute it looks up
    logging.getLogger("passlib").setLevel(logging.ERROR)
