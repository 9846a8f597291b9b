"""
Meetups Backend: Logging Setup
=================================

What:  Configures the root logger for whatever process hosts the services.
How:   Plain `logging.basicConfig` with a stdout handler; every module
       obtains its own logger via `logging.getLogger(__name__)`.
When:  Called once by the hosting process before using the services.
"""

import logging
import sys
from typing import Optional

from meetups.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Args:
        level: Overrides `settings.log_level` when given (e.g. "DEBUG").
    """
    level_name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # SQL echo is driven by the engine's `echo` flag, not by the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
