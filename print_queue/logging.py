import logging
import logging.config
import os

from .core.config import settings


def configure_logging(config_file: str = None) -> None:
    """Load logging.conf when present, otherwise fall back to a console setup."""
    config_file = config_file or settings.LOG_CONFIG_FILE
    if os.path.exists(config_file):
        logging.config.fileConfig(config_file, disable_existing_loggers=False)
    else:
        logging.basicConfig(
            level=settings.LOG_LEVEL.upper(),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )

