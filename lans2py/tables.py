"""Reshape and rescale LANS data frames."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd

from lans2py.logs.logs import LOGGER_NAME
from lans2py.utils import COLUMN_SETS, MissingColumnError, check_columns, present_columns

LOGGER = logging.getLogger(LOGGER_NAME)

SIGMA_SUFFIX = " sigma"


def id_columns(data: pd.DataFrame) -> list[str]:
    """
    Return the columns that identify a measurement in a long format summary table.

    Parameters
    ----------
    data : pd.DataFrame
        Long format summary table.

    Returns
    -------
    list[str]
        All columns other than ``variable``, ``data_type``, ``value`` and ``sigma``.
    """
    return [column for column in data.columns if column not in COLUMN_SETS["summary"]]


def spread_data(data: pd.DataFrame, values: bool = True, errors: bool = True) -> pd.DataFrame:
    """
    Spread a long format summary table into a wide table with one column per variable.

    Values are placed in a column named after the variable (e.g. ``13C``) and errors in a column with the suffix
    `` sigma`` (e.g. ``13C sigma``). The ``data_type`` column is dropped.

    Parameters
    ----------
    data : pd.DataFrame
        Long format table with ``variable``, ``value`` and optionally ``sigma`` columns.
    values : bool
        Whether to include the values.
    errors : bool
        Whether to include the errors.

    Returns
    -------
    pd.DataFrame
        Wide table with the id columns followed by the value and error columns of each variable.
    """
    if not values and not errors:
        raise ValueError("At least one of values or errors must be included when spreading data.")
    check_columns(data, ("variable", "value"), context="spread_data")
    if errors:
        check_columns(data, ("sigma",), context="spread_data")
    index = id_columns(data)
    if not index:
        raise ValueError("No id columns (e.g. 'analysis', 'ROI') to spread the data by.")

    data = data.assign(variable=data["variable"].astype(str))
    variables = list(pd.unique(data["variable"]))
    columns = []
    if values:
        columns.append(data.pivot(index=index, columns="variable", values="value"))
    if errors:
        sigma = data.pivot(index=index, columns="variable", values="sigma")
        columns.append(sigma.rename(columns=lambda variable: f"{variable}{SIGMA_SUFFIX}"))
    wide = pd.concat(columns, axis=1)
    order = []
    for variable in variables:
        if values:
            order.append(variable)
        if errors:
            order.append(f"{variable}{SIGMA_SUFFIX}")
    wide = wide[order]
    wide.columns.name = None
    return wide.reset_index()


def gather_data(data: pd.DataFrame, id_columns: Sequence[str]) -> pd.DataFrame:  # pylint: disable=redefined-outer-name
    """
    Gather a wide table produced by ``spread_data()`` back into long format.

    Parameters
    ----------
    data : pd.DataFrame
        Wide table.
    id_columns : Sequence[str]
        Columns identifying each row, all remaining columns are treated as variables (or their errors).

    Returns
    -------
    pd.DataFrame
        Long table with the id columns, ``variable``, ``value`` and (when error columns exist) ``sigma``.
    """
    id_columns = list(id_columns)
    check_columns(data, id_columns, context="gather_data")
    measured = [column for column in data.columns if column not in id_columns]
    variables = [column for column in measured if not str(column).endswith(SIGMA_SUFFIX)]
    errors = [column for column in measured if str(column).endswith(SIGMA_SUFFIX)]
    long = data.melt(id_vars=id_columns, value_vars=variables, var_name="variable", value_name="value")
    if errors:
        sigma = data.melt(id_vars=id_columns, value_vars=errors, var_name="variable", value_name="sigma")
        sigma["variable"] = sigma["variable"].str.removesuffix(SIGMA_SUFFIX)
        long = long.merge(sigma, on=[*id_columns, "variable"], how="left")
    return long


def normalize_maps(data: pd.DataFrame, group_by: Sequence[str] = ("analysis", "variable")) -> pd.DataFrame:
    """
    Scale the ``value`` of each map to the range zero to one.

    Each group (by default each analysis and variable) is divided by its own maximum. Groups whose maximum is not
    positive are set to zero.

    Parameters
    ----------
    data : pd.DataFrame
        Long format ion map table.
    group_by : Sequence[str]
        Columns defining a single map, those absent from ``data`` are ignored.

    Returns
    -------
    pd.DataFrame
        Copy of ``data`` with ``value`` normalised.
    """
    check_columns(data, ("value",), context="normalize_maps")
    keys = present_columns(data, group_by)
    data = data.copy()
    if keys:
        maximum = data.groupby(keys, observed=True)["value"].transform("max")
    else:
        maximum = pd.Series(data["value"].max(), index=data.index)
    with np.errstate(divide="ignore", invalid="ignore"):
        data["value"] = np.where(maximum > 0, data["value"] / maximum, 0.0)
    return data


def add_um_coordinates(
    data: pd.DataFrame, frame_size_um: float | None = None, frame_size_px: int | None = None
) -> pd.DataFrame:
    """
    Add the ``x.um`` and ``y.um`` micrometre coordinates of each pixel.

    Parameters
    ----------
    data : pd.DataFrame
        Long format ion map table with ``x.px`` and ``y.px``.
    frame_size_um : float | None
        Width of the (square) frame in micrometres. If ``None`` the ``frame_size`` column is used.
    frame_size_px : int | None
        Width of the frame in pixels. If ``None`` it is inferred per analysis as the largest pixel index plus one.

    Returns
    -------
    pd.DataFrame
        Copy of ``data`` with ``x.um`` and ``y.um`` columns.
    """
    check_columns(data, ("x.px", "y.px"), context="add_um_coordinates")
    data = data.copy()
    if frame_size_um is None:
        if "frame_size" not in data.columns:
            raise MissingColumnError("frame_size", context="add_um_coordinates")
        frame_size_um = data["frame_size"]
    if frame_size_px is None:
        extent = data[["x.px", "y.px"]].max(axis=1)
        keys = present_columns(data, ("analysis",))
        frame_size_px = (extent.groupby([data[key] for key in keys]).transform("max") if keys else extent.max()) + 1
    scaling = frame_size_um / frame_size_px
    data["x.um"] = data["x.px"] * scaling
    data["y.um"] = data["y.px"] * scaling
    LOGGER.debug("Added micrometre coordinates to ion map data.")
    return data
