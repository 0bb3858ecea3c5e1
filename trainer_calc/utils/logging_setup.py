"""Logging setup utility for the project.

Usage:
    from trainer_calc.utils.logging_setup import setup_logging
    setup_logging()
"""
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path
import sys

def setup_logging(level: int | str = logging.INFO, log_to_file: bool = False, log_dir: str | None = None) -> None:
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured
        return
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    fmt = logging.Formatter('%(asctime)s | %(levelname)s | %(name)s | %(message)s')

    # stderr so JSON printed by the CLI on stdout stays parseable
    ch = logging.StreamHandler(stream=sys.stderr)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_to_file:
        path = Path(log_dir or (Path.cwd() / 'logs'))
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(path / 'trainer_calc.log', maxBytes=2_000_000, backupCount=3, encoding='utf-8')
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    # urllib3 chatters at DEBUG for every request to the calc service
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
