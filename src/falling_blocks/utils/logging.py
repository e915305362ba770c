from __future__ import annotations

import logging

from rich.logging import RichHandler

ROOT_LOGGER = "falling_blocks"


def setup_logger(*, name: str = ROOT_LOGGER, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """Attach one handler to the package logger; engine and session modules log beneath it."""
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if use_rich:
        handler: logging.Handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))

    logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER", "setup_logger"]
