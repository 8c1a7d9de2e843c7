"""
Logging configuration.

The packaged `geosphere/config/logging.yaml` is a `dictConfig` document; the level comes
from settings (`GEOSPHERE_LOG_LEVEL`) unless the caller passes one explicitly (the CLI's
`--log-level`). The geodesy modules only ever call `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import copy
import logging.config

from geosphere.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    """Apply the packaged logging config at `level` (default: the configured app level)."""
    config = copy.deepcopy(get_logging_config())
    level = (level or get_settings().app.log_level).upper()

    config.setdefault("root", {})["level"] = level
    config.setdefault("loggers", {}).setdefault("geosphere", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
