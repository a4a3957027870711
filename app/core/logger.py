import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger once for the whole API process."""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # Avoid stacking handlers when the app is created more than once (tests, reload)
    if any(getattr(h, "_mindmate", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._mindmate = True
    root.addHandler(handler)
