# grapeleaf/core/logging_setup.py
import logging

from grapeleaf.core.config import Config

_configured = False


def configure_logging(level: str = None) -> None:
    """
    Pasang handler root sekali saja (app factory dan tools memanggil ini).
    Panggilan berikutnya hanya mengubah level.
    """
    global _configured
    level = (level or Config.LOG_LEVEL).upper()

    if not _configured:
        logging.basicConfig(level=level, format=Config.LOG_FORMAT)
        _configured = True

    logging.getLogger("grapeleaf").setLevel(level)
