import logging
import sys

from flask.logging import default_handler

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(app):
    """Send the package logger (app.logger and every scribeboard.* module) to stdout.

    Safe to call once per app; the handler is only attached the first time.
    """
    logger = logging.getLogger("scribeboard")
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    logger.removeHandler(default_handler)

    if not any(getattr(h, "_scribeboard", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._scribeboard = True
        logger.addHandler(handler)

    # noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
