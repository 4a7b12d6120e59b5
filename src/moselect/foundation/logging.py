from __future__ import annotations

import logging

_PACKAGE_LOGGER = "moselect"
_DEFAULT_FORMAT = "%(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger under the ``moselect`` namespace; ``name`` may be a module ``__name__``."""
    if not name or name == _PACKAGE_LOGGER:
        return logging.getLogger(_PACKAGE_LOGGER)
    if name.startswith(_PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_PACKAGE_LOGGER}.{name}")


def configure_moselect_logging(
    *,
    level: int | str = logging.INFO,
    fmt: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Attach a console handler to the ``moselect`` logger.

    Selection code only emits DEBUG records (front counts, hyperplane fallbacks,
    niching picks); call this with ``level=logging.DEBUG`` to see them.

    Notes:
        - Opt-in only; library code never calls logging.basicConfig().
        - Nothing is attached when the root logger or the "moselect" logger already has handlers.
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level {level!r}.")

    if logging.getLogger().handlers or package_logger.handlers:
        return package_logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


__all__ = ["configure_moselect_logging", "get_logger"]
