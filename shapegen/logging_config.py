"""Logging setup for shapegen.

All modules obtain loggers through :func:`get_logger` so that they share the
``shapegen`` namespace and pick up the handler installed by the CLI.
"""

import logging

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "shapegen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``shapegen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Configured logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: int | str = logging.WARNING, rich_output: bool = True) -> None:
    """Install a single handler on the package root logger.

    Args:
        level: Logging level name or number.
        rich_output: Use rich's console handler instead of a plain stream handler.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if rich_output:
        handler: logging.Handler = RichHandler(
            show_path=False, rich_tracebacks=True, markup=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    logger.propagate = False
