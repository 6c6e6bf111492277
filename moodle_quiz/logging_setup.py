from __future__ import annotations
import logging
import sys


def level_for_verbosity(verbose: int, quiet: bool = False) -> int:
    if quiet:
        return logging.WARNING
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_console_logging(level: int = logging.INFO) -> None:
    """
    Call once from the command line entry point. Library code only logs,
    it never installs handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        # already configured (pytest caplog, embedding app)
        root.setLevel(level)
        return

    root.setLevel(level)
    h = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    h.setFormatter(fmt)
    root.addHandler(h)
