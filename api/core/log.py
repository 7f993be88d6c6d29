"""
Root logger setup.
"""

from __future__ import annotations

import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a console handler to the root logger once.

    Calling this again (e.g. when the app module is imported by tests and by
    uvicorn) leaves the existing handlers alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return None

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
