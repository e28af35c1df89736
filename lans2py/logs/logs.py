"""Standardise logging."""

import logging
import sys
from datetime import datetime
from pathlib import Path

# pylint: disable=assignment-from-no-return

start = datetime.now()
LOG_INFO_FORMATTER = logging.Formatter(
    fmt="[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s", datefmt="%a, %d %b %Y %H:%M:%S"
)
LOG_ERROR_FORMATTER = logging.Formatter(
    fmt="[%(asctime)s] [%(levelname)-8s] [%(name)s] [%(filename)s] [%(lineno)s] %(message)s",
    datefmt="%a, %d %b %Y %H:%M:%S",
)

LOGGER_NAME = "lans2py"


def setup_logger(log_name: str = LOGGER_NAME, log_file: bool = False) -> logging.Logger:
    """
    Logger setup.

    The logger is initialised when the package is imported (this function is called from ``__init__.py``). Two stream
    handlers are created, one for general output and one for errors which carries the file and line number of the
    message. Pass ``log_file=True`` to also write messages to a time stamped file in the current directory. Modules
    create their own logger from ``LOGGER_NAME`` and inherit this configuration.

    Parameters
    ----------
    log_name : str
        Name under which logging information occurs.
    log_file : bool
        Whether to add a handler writing to a log file in the current working directory.

    Returns
    -------
    logging.Logger
        Logger object.

    Examples
    --------
    To use the logger in (sub-)modules have the following.

        import logging
        from lans2py.logs.logs import LOGGER_NAME

        LOGGER = logging.getLogger(LOGGER_NAME)

        LOGGER.info('This is a log message.')
    """
    logger = logging.getLogger(log_name)
    logger.setLevel(logging.INFO)
    logger.propagate = True
    if not logger.handlers:
        out_stream_handler = logging.StreamHandler(sys.stdout)
        out_stream_handler.setLevel(logging.DEBUG)
        out_stream_handler.setFormatter(LOG_INFO_FORMATTER)

        err_stream_handler = logging.StreamHandler(sys.stderr)
        err_stream_handler.setLevel(logging.ERROR)
        err_stream_handler.setFormatter(LOG_ERROR_FORMATTER)

        logger.addHandler(out_stream_handler)
        logger.addHandler(err_stream_handler)
    if log_file and not any(isinstance(handler, logging.FileHandler) for handler in logger.handlers):
        file_handler = logging.FileHandler(Path().cwd().stem + f"-{start.strftime('%Y-%m-%d-%H-%M-%S')}.log")
        file_handler.setFormatter(LOG_ERROR_FORMATTER)
        logger.addHandler(file_handler)

    return logger
