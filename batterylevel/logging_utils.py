from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(*, log_dir: Path | None = None, verbose: bool = True) -> logging.Logger:
    """
    Set up logging for batterylevel.

    Args:
        log_dir: Optional directory to write batterylevel.log into
        verbose: If True (default), show DEBUG level logs. If False, only show INFO and above.
    """
    logger = logging.getLogger("batterylevel")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "batterylevel.log")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logger.propagate = False
    return logger
