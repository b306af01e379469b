"""
Component loggers for reflector.

Every module logs through a named child of the ``reflector`` logger so a
single handler configured by the CLI (see shared.logging_config) controls
the whole process. This module provides a factory to create log functions
with a component name, eliminating the need to look the logger up in every
module.

Usage:
    from shared.log import create_logger
    log_trace, log_debug, log_info, log_warn, log_error = create_logger("Mirror")
    log_info("filling 3 missing captures")  # -> logger "reflector.mirror"
"""

import logging

ROOT_LOGGER = "reflector"

# Below DEBUG, for per-byte and per-entry chatter
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def get_logger(component: str = "") -> logging.Logger:
    """Return the stdlib logger for a component ("" gives the root reflector logger)."""
    if not component:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{component.lower().replace(' ', '_')}")


def create_logger(component: str = ""):
    """Create log functions for a component.

    Args:
        component: Component name. "Remote HTTP" logs to "reflector.remote_http",
                   an empty name logs to "reflector".

    Returns:
        Tuple of (log_trace, log_debug, log_info, log_warn, log_error) functions.
    """
    logger = get_logger(component)

    def log_trace(msg): logger.log(TRACE, msg)
    def log_debug(msg): logger.debug(msg)
    def log_info(msg): logger.info(msg)
    def log_warn(msg): logger.warning(msg)
    def log_error(msg): logger.error(msg)

    return log_trace, log_debug, log_info, log_warn, log_error
