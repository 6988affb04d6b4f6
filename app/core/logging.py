from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the ``app`` logger tree.

    Calling it again only updates the level, so building several apps in one
    process (tests, the proxy and web app side by side) does not duplicate
    output.
    """
    root = logging.getLogger("app")
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
