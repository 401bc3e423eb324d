"""Console logging for the gen_panel command line."""
import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send 'panelcut' log records to stderr; DEBUG when *verbose*, else WARNING.

    Safe to call more than once: the previous handler is replaced.
    """
    logger = logging.getLogger("panelcut")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
