"""Derive sums, isotope ratios, fractional abundances and custom quantities from ROI summary tables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

import numpy as np
import pandas as pd

from lans2py.logs.logs import LOGGER_NAME
from lans2py.tables import SIGMA_SUFFIX, id_columns, spread_data
from lans2py.utils import check_columns

LOGGER = logging.getLogger(LOGGER_NAME)

# pylint: disable=too-many-arguments
# pylint: disable=too-many-positional-arguments

ION_COUNT = "ion_count"


def prepare_summary(data: pd.DataFrame) -> pd.DataFrame:
    """
    Ensure a long format summary table has ``data_type`` and ``sigma`` columns.

    Rows without a ``data_type`` are taken to be ion counts and missing errors of ion counts follow counting
    statistics (``sqrt(value)``).

    Parameters
    ----------
    data : pd.DataFrame
        Long format table with at least ``variable`` and ``value`` columns.

    Returns
    -------
    pd.DataFrame
        Copy of the table with ``data_type`` and ``sigma``.
    """
    check_columns(data, ("variable", "value"), context="calculate")
    data = data.copy()
    if "data_type" not in data.columns:
        data["data_type"] = ION_COUNT
    if "sigma" not in data.columns:
        data["sigma"] = np.nan
    counts = (data["data_type"] == ION_COUNT) & data["sigma"].isna()
    data.loc[counts, "sigma"] = np.sqrt(data.loc[counts, "value"])
    return data


def calculate(
    data: pd.DataFrame,
    data_type: str,
    variables: Iterable[str | Sequence[str]],
    value_fun: Callable,
    error_fun: Callable | None = None,
    name_fun: Callable[..., str] | None = None,
    filter_new: Callable[[pd.DataFrame], pd.Series] | None = None,
    quiet: bool = False,
) -> pd.DataFrame:
    """
    Calculate new variables from existing ones and append them to a long format summary table.

    For every set of input variables the functions are called with the value and error of each input variable in turn,
    i.e. ``value_fun(m, m_sigma, n, n_sigma)`` for a pair, operating on whole columns of the spread data.

    Parameters
    ----------
    data : pd.DataFrame
        Long format summary table (id columns plus ``variable``, ``data_type``, ``value`` and ``sigma``).
    data_type : str
        Data type recorded for the new rows, e.g. ``ratio``.
    variables : Iterable[str | Sequence[str]]
        Sets of input variables, one new variable is calculated from each set.
    value_fun : Callable
        Function calculating the new values.
    error_fun : Callable | None
        Function calculating the errors of the new values, errors are ``NaN`` if not given.
    name_fun : Callable[..., str] | None
        Function receiving the input variable names and returning the new variable name. Defaults to joining the names
        with ``,``.
    filter_new : Callable[[pd.DataFrame], pd.Series] | None
        Function returning a boolean mask of the new rows to keep.
    quiet : bool
        Whether to suppress the information message.

    Returns
    -------
    pd.DataFrame
        The input table with the new rows appended.
    """
    data = prepare_summary(data)
    index = id_columns(data)
    wide = spread_data(data).set_index(index)
    name_fun = name_fun if name_fun is not None else lambda *names: ",".join(names)

    new_rows = []
    for variable_set in variables:
        variable_set = (variable_set,) if isinstance(variable_set, str) else tuple(variable_set)
        missing = [variable for variable in variable_set if variable not in wide.columns]
        if missing:
            raise ValueError(f"[{data_type}] Variable(s) {missing} are not present in the data.")
        name = name_fun(*variable_set)
        if name in wide.columns:
            raise ValueError(f"[{data_type}] Variable '{name}' already exists in the data.")
        arguments = []
        for variable in variable_set:
            arguments.extend([wide[variable], wide[f"{variable}{SIGMA_SUFFIX}"]])
        calculated = pd.DataFrame(
            {
                "variable": name,
                "data_type": data_type,
                "value": value_fun(*arguments),
                "sigma": error_fun(*arguments) if error_fun is not None else np.nan,
            },
            index=wide.index,
        )
        new_rows.append(calculated.dropna(subset=["value"]).reset_index())

    if not new_rows:
        return data
    new = pd.concat(new_rows, ignore_index=True)
    if filter_new is not None:
        new = new.loc[filter_new(new)]
    if not quiet:
        LOGGER.info(
            f"[{data_type}] {len(new)} values added for variable(s) {', '.join(pd.unique(new['variable']).astype(str))}"
        )
    return pd.concat([data, new[data.columns]], ignore_index=True)


def sum_error(*sigmas: pd.Series) -> pd.Series:
    """
    Propagate the error of a sum of independent measurements.

    Parameters
    ----------
    *sigmas : pd.Series
        Errors of each summand.

    Returns
    -------
    pd.Series
        Square root of the sum of the squared errors.
    """
    return np.sqrt(sum(sigma**2 for sigma in sigmas))


def ratio_error(m: pd.Series, m_sigma: pd.Series, n: pd.Series, n_sigma: pd.Series) -> pd.Series:
    """
    Propagate the error of the ratio ``m / n``.

    Parameters
    ----------
    m : pd.Series
        Numerator.
    m_sigma : pd.Series
        Error of the numerator.
    n : pd.Series
        Denominator.
    n_sigma : pd.Series
        Error of the denominator.

    Returns
    -------
    pd.Series
        Error of the ratio.
    """
    return np.abs(m / n) * np.sqrt((m_sigma / m) ** 2 + (n_sigma / n) ** 2)


def abundance_error(m: pd.Series, m_sigma: pd.Series, n: pd.Series, n_sigma: pd.Series) -> pd.Series:
    """
    Propagate the error of the fractional abundance ``m / (m + n)``.

    Parameters
    ----------
    m : pd.Series
        Counts of the isotope of interest.
    m_sigma : pd.Series
        Error of ``m``.
    n : pd.Series
        Counts of the other isotope.
    n_sigma : pd.Series
        Error of ``n``.

    Returns
    -------
    pd.Series
        Error of the fractional abundance.
    """
    return np.sqrt((n * m_sigma) ** 2 + (m * n_sigma) ** 2) / (m + n) ** 2


def _as_sets(variable_sets: tuple, size: int | None = None) -> list[tuple[str, ...]]:
    """
    Validate the variable sets passed to the calculation shortcuts.

    Parameters
    ----------
    variable_sets : tuple
        Sets of variable names.
    size : int | None
        Required size of each set, any size of at least two if ``None``.

    Returns
    -------
    list[tuple[str, ...]]
        Variable sets as tuples.
    """
    sets = [tuple(variable_set) for variable_set in variable_sets]
    for variable_set in sets:
        if size is not None and len(variable_set) != size:
            raise ValueError(f"Expected {size} variables, got {len(variable_set)} : {variable_set}")
        if size is None and len(variable_set) < 2:
            raise ValueError(f"At least two variables are needed, got : {variable_set}")
    return sets


def calculate_sums(
    data: pd.DataFrame,
    *variable_sets: Sequence[str],
    name_fun: Callable[..., str] | None = None,
    filter_new: Callable[[pd.DataFrame], pd.Series] | None = None,
    quiet: bool = False,
) -> pd.DataFrame:
    """
    Calculate sums of ion counts, e.g. total carbon from ``("12C", "13C")``.

    Parameters
    ----------
    data : pd.DataFrame
        Long format summary table.
    *variable_sets : Sequence[str]
        Sets of two or more variables to sum.
    name_fun : Callable[..., str] | None
        Naming function, defaults to joining the names with ``+`` (``12C+13C``).
    filter_new : Callable[[pd.DataFrame], pd.Series] | None
        Function returning a boolean mask of the new rows to keep.
    quiet : bool
        Whether to suppress the information message.

    Returns
    -------
    pd.DataFrame
        The input table with the sums appended (``data_type`` is ``ion_sum``).
    """
    return calculate(
        data,
        data_type="ion_sum",
        variables=_as_sets(variable_sets),
        value_fun=lambda *args: sum(args[::2]),
        error_fun=lambda *args: sum_error(*args[1::2]),
        name_fun=name_fun if name_fun is not None else lambda *names: "+".join(names),
        filter_new=filter_new,
        quiet=quiet,
    )


def calculate_ratios(
    data: pd.DataFrame,
    *variable_pairs: Sequence[str],
    name_fun: Callable[[str, str], str] | None = None,
    filter_new: Callable[[pd.DataFrame], pd.Series] | None = None,
    quiet: bool = False,
) -> pd.DataFrame:
    """
    Calculate isotope ratios, e.g. ``("13C", "12C")`` for 13C/12C.

    Parameters
    ----------
    data : pd.DataFrame
        Long format summary table.
    *variable_pairs : Sequence[str]
        Pairs of numerator and denominator.
    name_fun : Callable[[str, str], str] | None
        Naming function, defaults to ``m/n``.
    filter_new : Callable[[pd.DataFrame], pd.Series] | None
        Function returning a boolean mask of the new rows to keep.
    quiet : bool
        Whether to suppress the information message.

    Returns
    -------
    pd.DataFrame
        The input table with the ratios appended (``data_type`` is ``ratio``).
    """
    return calculate(
        data,
        data_type="ratio",
        variables=_as_sets(variable_pairs, size=2),
        value_fun=lambda m, m_sigma, n, n_sigma: m / n,
        error_fun=ratio_error,
        name_fun=name_fun if name_fun is not None else lambda m, n: f"{m}/{n}",
        filter_new=filter_new,
        quiet=quiet,
    )


def calculate_abundances(
    data: pd.DataFrame,
    *variable_pairs: Sequence[str],
    percent: bool = False,
    name_fun: Callable[[str, str], str] | None = None,
    filter_new: Callable[[pd.DataFrame], pd.Series] | None = None,
    quiet: bool = False,
) -> pd.DataFrame:
    """
    Calculate fractional abundances ``m / (m + n)``, e.g. ``("13C", "12C")`` for the 13C fraction of carbon.

    Parameters
    ----------
    data : pd.DataFrame
        Long format summary table.
    *variable_pairs : Sequence[str]
        Pairs of the isotope of interest and the other isotope.
    percent : bool
        Report atom percent (x100) rather than a fraction.
    name_fun : Callable[[str, str], str] | None
        Naming function, defaults to ``m F`` (or ``m at%`` when ``percent``).
    filter_new : Callable[[pd.DataFrame], pd.Series] | None
        Function returning a boolean mask of the new rows to keep.
    quiet : bool
        Whether to suppress the information message.

    Returns
    -------
    pd.DataFrame
        The input table with the abundances appended (``data_type`` is ``abundance``).
    """
    scale = 100.0 if percent else 1.0
    suffix = "at%" if percent else "F"
    return calculate(
        data,
        data_type="abundance",
        variables=_as_sets(variable_pairs, size=2),
        value_fun=lambda m, m_sigma, n, n_sigma: scale * m / (m + n),
        error_fun=lambda *args: scale * abundance_error(*args),
        name_fun=name_fun if name_fun is not None else lambda m, n: f"{m} {suffix}",
        filter_new=filter_new,
        quiet=quiet,
    )
