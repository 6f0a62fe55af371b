"""Logging configuration for tipjar."""

import logging

from tipjar.config.settings import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(settings: Settings, verbose: bool = False) -> logging.Logger:
    """Log to ``<config_dir>/logs/tipjar.log`` and, for warnings, to stderr."""
    logger = logging.getLogger("tipjar")
    if getattr(logger, "_tipjar_configured", False):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_dir / "tipjar.log")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"File logging disabled: {e}")

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger._tipjar_configured = True
    return logger
