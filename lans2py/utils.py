"""Utilities."""

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from lans2py.logs.logs import LOGGER_NAME

LOGGER = logging.getLogger(LOGGER_NAME)


COLUMN_SETS = {
    "pixels": (
        "ROI",
        "variable",
        "x.px",
        "y.px",
    ),
    "summary": (
        "variable",
        "data_type",
        "value",
        "sigma",
    ),
}


class MissingColumnError(KeyError):
    """Raised when a data frame lacks a column that an operation requires."""

    def __init__(self, column: str, context: str = None) -> None:
        """
        Initialise the error.

        Parameters
        ----------
        column : str
            Name of the missing column.
        context : str
            Optional name of the operation that needed the column.
        """
        self.column = column
        self.context = context
        message = f"{column} column does not exist"
        if context is not None:
            message = f"[{context}] {message}"
        super().__init__(message)

    def __str__(self) -> str:
        """
        Return the message without the quoting ``KeyError`` applies.

        Returns
        -------
        str
            Error message naming the missing column.
        """
        return str(self.args[0])


class FootprintMismatchError(ValueError):
    """Raised when variables of the same ROI cover different sets of pixels."""

    pass  # pylint: disable=unnecessary-pass


def convert_path(path: str | Path) -> Path:
    """
    Ensure path is Path object.

    Parameters
    ----------
    path : str | Path
        Path to be converted.

    Returns
    -------
    Path
        Pathlib object of path.
    """
    return Path().cwd() if path == "./" else Path(path).expanduser()


def check_columns(data: pd.DataFrame, columns: Iterable[str], context: str = None) -> None:
    """
    Check that all required columns are present, in order.

    Parameters
    ----------
    data : pd.DataFrame
        Data frame to check.
    columns : Iterable[str]
        Required column names, the first one missing is reported.
    context : str
        Name of the operation performing the check, included in the error message.

    Raises
    ------
    MissingColumnError
        If any of the columns is absent.
    """
    for column in columns:
        if column not in data.columns:
            raise MissingColumnError(column, context=context)


def present_columns(data: pd.DataFrame, candidates: Iterable[str]) -> list[str]:
    """
    Return the subset of candidate columns that exist in a data frame, preserving order.

    Parameters
    ----------
    data : pd.DataFrame
        Data frame to inspect.
    candidates : Iterable[str]
        Column names to look for.

    Returns
    -------
    list[str]
        Candidate columns found in ``data``.
    """
    return [column for column in candidates if column in data.columns]


def create_empty_dataframe(
    column_set: str = "pixels", keys: Iterable[str] = (), extra_columns: Iterable[str] = ()
) -> pd.DataFrame:
    """
    Create an empty data frame for returning when no results are found.

    Parameters
    ----------
    column_set : str
        The name of the set of columns for the empty dataframe.
    keys : Iterable[str]
        Columns placed before the column set, typically grouping keys.
    extra_columns : Iterable[str]
        Columns placed after the column set.

    Returns
    -------
    pd.DataFrame
        Empty Pandas DataFrame.
    """
    return pd.DataFrame(columns=[*keys, *COLUMN_SETS[column_set], *extra_columns])
