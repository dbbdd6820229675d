"""
Logging setup for Data Alchemist.

Everything logs under the "dataalchemist" namespace logger, which gets a
single stdout handler the first time setup_logging() runs.

What goes where:
    DEBUG:   column mappings, per-analysis thresholds and counts
    INFO:    uploads loaded, validation totals, rules added/accepted, exports
    WARNING: uploads missing columns, rule text that produced bad parameters
    ERROR:   uploads or exports that could not be produced

Usage:
    from dataalchemist.logging_config import setup_logging
    setup_logging(settings.log_level)

    # In any module:
    import logging
    logger = logging.getLogger(__name__)
"""

import logging
import sys

APP_LOGGER = "dataalchemist"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that chatter at INFO while reading workbooks
QUIET_LOGGERS = ("openpyxl",)

_logging_configured = False


def _stdout_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: str = "INFO") -> None:
    """Attach the app handler once and (re)apply the level.

    Streamlit reruns app.py on every interaction, so this is called many
    times per session. Unknown level names fall back to INFO.

    Args:
        level: Log level name, case-insensitive.
    """
    global _logging_configured  # noqa: PLW0603

    app_logger = logging.getLogger(APP_LOGGER)

    if not _logging_configured:
        app_logger.addHandler(_stdout_handler())
        # Streamlit installs its own root handler
        app_logger.propagate = False
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        _logging_configured = True

    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
