# tagvocab/common/logging.py
from __future__ import annotations

import logging

from tagvocab.common.settings import get_settings


def get_logger(name: str = "tagvocab", level: int | str | None = None) -> logging.Logger:
    """
    Return a named logger. If nothing has configured logging yet (no root
    handlers), install a basicConfig once so messages are not dropped.
    The level defaults to Settings.log_level.
    """
    if level is None:
        level = get_settings().log_level.upper()
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
