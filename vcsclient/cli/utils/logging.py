"""Console logging for the vcsclient command line."""

import logging
import sys

logger = logging.getLogger("vcsclient")

# debug output names the emitting module; normal output is the bare message
_FORMATS = {
    True: "%(levelname)-7s %(name)s: %(message)s",
    False: "%(message)s",
}


class ConsoleHandler(logging.StreamHandler):
    """Stream handler bound to the current ``sys.stdout`` at emit time."""

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value):
        pass


def configure_logging(debug: bool):
    """
    Route vcsclient log records to stdout.

    Safe to call repeatedly: the console handler is installed once and only
    its level and format follow the debug flag.
    """
    handler = next((h for h in logger.handlers if isinstance(h, ConsoleHandler)), None)
    if handler is None:
        handler = ConsoleHandler()
        logger.addHandler(handler)

    handler.setFormatter(logging.Formatter(_FORMATS[bool(debug)]))
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
