"""
Logging utilities for the Scholargy backend.

Provides module loggers that inherit the app-wide configuration.

CRITICAL PRIVACY RULES:
- NEVER log full student profiles (names, GPAs and test scores are PII)
- NEVER log API keys, Supabase keys or secrets
- NEVER return raw reasoning-service error text to clients (log it instead)

Acceptable logging:
- High-level events (e.g., "NextStepsGenerator invoked", "Fallback steps used")
- Non-sensitive metadata (e.g., "matches=4, scholarships=5")
- Sanitized error messages from the backing store or reasoning service
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get the logger for the specified module.

    Handlers and formatting are configured once in ``scholargy.main`` from
    ``LOG_LEVEL``; loggers returned here propagate to the root logger.

    Args:
        name: Module name (typically __name__)
        level: Optional level override for this logger only

    Returns:
        Logger instance

    Usage:
        >>> from scholargy.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
