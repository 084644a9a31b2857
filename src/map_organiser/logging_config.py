"""
Logging for map-organiser runs.

Log records go to stderr through rich so the CLI's tables and progress
bar on stdout stay readable. A run that talks to ORIS and Nominatim for
minutes can also append its records to a plain log file.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "map_organiser"

# requests' connection pool logs every ORIS and Nominatim connection at DEBUG
HTTP_LOGGERS = ("urllib3",)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the map_organiser loggers for one CLI run.

    Args:
        verbose: DEBUG records, source paths and tracebacks with locals;
                 HTTP connection records are shown too
        quiet: Only ERROR records
        log_file: File to append records to, in addition to stderr

    Returns:
        The map_organiser logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # place names and queries are logged verbatim
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(level if verbose else max(level, logging.WARNING))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger under the map_organiser namespace.

    `get_logger(__name__)` inside the package returns the module's own
    logger; any other name is nested below map_organiser.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
