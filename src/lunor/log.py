"""Logging setup for command-line runs"""

import logging


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_verbose = False


def configure_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Configure the root logger; once --verbose was given, DEBUG sticks for the run."""
    global _verbose
    _verbose = _verbose or verbose
    logging.basicConfig(
        level=logging.DEBUG if _verbose else getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        force=True,
    )
