"""A basic logging helper shared by the route tools."""
import logging
import sys


def setup_logging(level=logging.INFO, stream=None):
    """Configures basic logging.

    Records go to ``stream`` (stderr by default) so that reports printed on
    stdout stay clean.
    """
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        force=True,
    )
