from __future__ import annotations

import logging
import pathlib
import sys

ROOT_LOGGER = "orfsets"


def get_logger(name: str = ROOT_LOGGER, log_file: str | None = None, verbose: bool = False) -> logging.Logger:
    # data rows may go to stdout, so status messages use stderr
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")

    sh = logging.StreamHandler(sys.stderr); sh.setFormatter(fmt); logger.addHandler(sh)
    if log_file:
        pathlib.Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file); fh.setFormatter(fmt); logger.addHandler(fh)
    return logger
