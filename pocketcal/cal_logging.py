"""
Central logging configuration for pocketcal.

Sets levels for the package's module loggers so debug output from the codec
and store can be switched on without touching third-party loggers.
"""

import logging
import os
from typing import Optional

POCKETCAL_MODULES = [
    "pocketcal",
    "pocketcal.calendar.ics_decoder",
    "pocketcal.calendar.ics_encoder",
    "pocketcal.calendar.day_index",
    "pocketcal.domain.event_store",
    "pocketcal.core.config_manager",
]


def configure_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for pocketcal modules.

    Args:
        debug_mode: Whether to enable debug logging for pocketcal modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        POCKETCAL_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        POCKETCAL_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("POCKETCAL_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("POCKETCAL_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Keep handlers installed by pocketcal._init_logging; add a plain one otherwise
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s"))
        root_logger.addHandler(handler)

    module_level = logging.DEBUG if final_debug else logging.INFO
    for module in POCKETCAL_MODULES:
        logging.getLogger(module).setLevel(module_level)

    if final_debug:
        root_logger.debug("Debug logging enabled for pocketcal modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in POCKETCAL_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
