"""
Configure the logger
"""

import logging
import re

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def set_log_level(level: str) -> None:
    """Apply the configured level once settings are available"""
    logging.getLogger().setLevel(level.upper())


def log_settings(settings) -> None:
    """Log configuration settings, masking passwords and secrets"""
    logger.info("Configuration Settings:")

    values = settings.model_dump()
    for key, value in values.items():
        if ("PASSWORD" in key or "SECRET" in key) and value is not None:
            logger.info("  %s: %s", key, "*****")
        elif key in ("DATABASE_URI", "SQLALCHEMY_DATABASE_URI") and value is not None:
            # Mask password in database URI if present
            masked_value = re.sub(r"://(.*?):(.*?)@", r"://\1:*****@", value)
            logger.info("  %s: %s", key, masked_value)
        else:
            logger.info("  %s: %s", key, value)
