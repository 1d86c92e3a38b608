"""Logger access for facetfeed."""

from __future__ import annotations

import logging

_ROOT_LOGGER_NAME = "facetfeed"
_configured = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given.

    The package logger carries a ``NullHandler`` so that applications decide
    where records go.
    """

    global _configured
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not _configured:
        root.addHandler(logging.NullHandler())
        _configured = True
    if not name or name == _ROOT_LOGGER_NAME:
        return root
    if name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)
