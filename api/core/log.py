"""
Logging setup.

Modules log through `logging.getLogger(__name__)` with short
`event_name key=value` messages; this only configures the root logger.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    # basicConfig is a no-op once the root logger has handlers, so the level
    # is applied separately for reconfiguration.
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)
