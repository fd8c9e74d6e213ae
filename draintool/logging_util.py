import logging
import sys
from .config import LOG_FILE, LOG_LEVEL

def setup_logging() -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE is not None:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_FILE))
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        handlers=handlers,
    )
    # The Lambda runtime installs its own root handler, which makes basicConfig a no-op.
    logging.getLogger().setLevel(LOG_LEVEL)
