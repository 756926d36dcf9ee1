"""Logging configuration helpers."""

import logging

APP_LOGGER = "photo_proofing"
_NOISY_LOGGERS = ("httpx", "httpcore", "stripe", "PIL")


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the app logger and quiet chatty libraries.

    Safe to call repeatedly; the handler is only installed once.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger
