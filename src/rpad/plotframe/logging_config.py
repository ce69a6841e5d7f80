import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send 'rpad.plotframe' log records to stdout, at DEBUG level if verbose."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("rpad.plotframe")
    logger.setLevel(level)

    # Scripts may call this more than once.
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
