from __future__ import annotations

import logging

from suarasekolah.core import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """Configure the root logger from LOG_LEVEL."""
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # httpx logs every request at INFO, which would leak service calls into app logs
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
