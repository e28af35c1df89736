"""Extract the boundary pixels of regions of interest (ROIs) from LANS ion map tables."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import pandas as pd
from pandas.core.groupby import DataFrameGroupBy

from lans2py.logs.logs import LOGGER_NAME
from lans2py.utils import FootprintMismatchError, check_columns, create_empty_dataframe, present_columns

LOGGER = logging.getLogger(LOGGER_NAME)

REQUIRED_COLUMNS = ("ROI", "variable", "x.px", "y.px")
DEFAULT_GROUP_BY = ("analysis", "plane")
NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))
POSITION = ["x.px", "y.px"]


def extract_roi_boundaries(
    data: pd.DataFrame | DataFrameGroupBy,
    group_by: Sequence[str] | None = None,
    reference_variable: str | None = None,
    require_identical_footprints: bool = True,
) -> pd.DataFrame:
    """
    Find the pixels that lie on the boundary of their ROI.

    A pixel is on the boundary when at least one of its four axis-aligned neighbours is not part of the same ROI, this
    includes the edges of holes within a ROI. The geometry is a property of the ROI mask so it is determined once per
    ROI from a single reference variable and then repeated for every variable (ion species) measured in that ROI.
    Background pixels (``ROI <= 0``) are never returned.

    Parameters
    ----------
    data : pd.DataFrame | DataFrameGroupBy
        Long format ion map with one row per analysis, ROI, variable and pixel. Must have the columns ``ROI``,
        ``variable``, ``x.px`` and ``y.px``. A grouped data frame may be passed in which case its keys are used as
        ``group_by``.
    group_by : Sequence[str] | None
        Columns partitioning the data in addition to ``ROI`` (which is always applied). Defaults to whichever of
        ``analysis`` and ``plane`` are present.
    reference_variable : str | None
        Variable whose pixels define the ROI geometry. Defaults to the alphabetically first variable of each ROI.
    require_identical_footprints : bool
        Check that every variable of a ROI covers exactly the same pixels and raise an error if not. When ``False``
        the reference variable's geometry is used and columns carried through are ``NaN`` where a variable lacks the
        pixel.

    Returns
    -------
    pd.DataFrame
        Boundary pixels, one row per pixel and variable, with the grouping keys, ``ROI``, ``variable``, ``x.px``,
        ``y.px`` and any further input columns (e.g. ``value``) for that variable.

    Raises
    ------
    MissingColumnError
        If one of the required columns or a grouping column is absent.
    FootprintMismatchError
        If ``require_identical_footprints`` and the variables of a ROI do not cover the same pixels.
    ValueError
        If ``reference_variable`` is given but absent from a ROI, or if grouped data is not grouped by column names.
    """
    if isinstance(data, DataFrameGroupBy):
        keys = data.keys
        if isinstance(keys, str):
            group_by = [keys]
        elif isinstance(keys, (list, tuple)) and all(isinstance(key, str) for key in keys):
            group_by = list(keys)
        else:
            raise ValueError(
                'Grouped data must be grouped by column names, e.g. data.groupby("analysis") or '
                f'data.groupby(["analysis", "plane"]), not by {type(keys).__name__}'
            )
        data = data.obj
    check_columns(data, REQUIRED_COLUMNS, context="extract_roi_boundaries")
    if group_by is None:
        keys = present_columns(data, DEFAULT_GROUP_BY)
    else:
        keys = [group_by] if isinstance(group_by, str) else list(group_by)
        keys = [key for key in keys if key != "ROI"]
    check_columns(data, keys, context="extract_roi_boundaries")
    roi_keys = [*keys, "ROI"]
    pixel_keys = [*roi_keys, *POSITION]
    carried = [column for column in data.columns if column not in (*pixel_keys, "variable")]

    rois = data.loc[data["ROI"] > 0]
    if rois.empty:
        LOGGER.info("No pixels are assigned to a ROI, there are no boundaries to extract.")
        return create_empty_dataframe("pixels", keys=keys, extra_columns=carried)

    if require_identical_footprints:
        check_footprints(rois, roi_keys)
    reference = reference_pixels(rois, roi_keys, reference_variable)
    border = reference.loc[is_on_border(reference, roi_keys)]
    LOGGER.debug(f"Boundary pixels : {len(border)} of {len(reference)} reference pixels.")

    variables = rois[[*roi_keys, "variable"]].drop_duplicates()
    border = border.merge(variables, on=roi_keys, how="inner")
    if carried:
        measurements = rois.drop_duplicates(subset=[*pixel_keys, "variable"])
        border = border.merge(measurements, on=[*pixel_keys, "variable"], how="left")
    border = border[[*roi_keys, "variable", *POSITION, *carried]]
    return border.sort_values([*roi_keys, "variable", "y.px", "x.px"]).reset_index(drop=True)


def reference_pixels(rois: pd.DataFrame, roi_keys: list[str], reference_variable: str | None = None) -> pd.DataFrame:
    """
    Select the distinct pixel positions of the reference variable of each ROI.

    Parameters
    ----------
    rois : pd.DataFrame
        Pixels assigned to a ROI.
    roi_keys : list[str]
        Columns identifying a ROI (grouping keys and ``ROI``).
    reference_variable : str | None
        Variable to use, if ``None`` the alphabetically first variable of each ROI is used.

    Returns
    -------
    pd.DataFrame
        Columns ``roi_keys``, ``x.px`` and ``y.px`` with one row per occupied position.
    """
    names = rois["variable"].astype(str)
    if reference_variable is None:
        groups = names.groupby([rois[key] for key in roi_keys], sort=False, observed=True, dropna=False)
        selected = names == groups.transform("min")
    else:
        selected = names == str(reference_variable)
        missing = (
            rois[roi_keys]
            .drop_duplicates()
            .merge(rois.loc[selected, roi_keys].drop_duplicates(), how="left", indicator=True)
            .query("_merge == 'left_only'")
        )
        if not missing.empty:
            group = missing[roi_keys].iloc[0].to_dict()
            raise ValueError(f"Reference variable '{reference_variable}' is not present in ROI group {group}")
    return rois.loc[selected, [*roi_keys, *POSITION]].drop_duplicates().reset_index(drop=True)


def is_on_border(positions: pd.DataFrame, roi_keys: list[str]) -> npt.NDArray[np.bool_]:
    """
    Test whether each position is missing at least one of its four neighbours within the same ROI.

    Membership is tested against a hashed index of all occupied positions so the cost is linear in the number of
    pixels.

    Parameters
    ----------
    positions : pd.DataFrame
        Distinct pixel positions with the ``roi_keys``, ``x.px`` and ``y.px`` columns.
    roi_keys : list[str]
        Columns identifying a ROI.

    Returns
    -------
    npt.NDArray[np.bool_]
        Boolean array aligned with ``positions``, ``True`` for boundary pixels.
    """
    columns = [*roi_keys, *POSITION]
    occupied = pd.MultiIndex.from_frame(positions[columns])
    on_border = np.zeros(len(positions), dtype=bool)
    for dx, dy in NEIGHBOUR_OFFSETS:
        neighbours = positions[columns].assign(**{"x.px": positions["x.px"] + dx, "y.px": positions["y.px"] + dy})
        on_border |= ~pd.MultiIndex.from_frame(neighbours).isin(occupied)
    return on_border


def check_footprints(rois: pd.DataFrame, roi_keys: list[str]) -> None:
    """
    Check that every variable of a ROI covers the same set of pixels.

    Parameters
    ----------
    rois : pd.DataFrame
        Pixels assigned to a ROI.
    roi_keys : list[str]
        Columns identifying a ROI.

    Raises
    ------
    FootprintMismatchError
        If a pixel of a ROI is not measured for every variable of that ROI.
    """
    pixels = rois[[*roi_keys, "variable", *POSITION]].drop_duplicates()
    per_position = (
        pixels.groupby([*roi_keys, *POSITION], sort=False, observed=True, dropna=False)["variable"]
        .nunique()
        .reset_index(name="n_position")
    )
    per_roi = (
        pixels.groupby(roi_keys, sort=False, observed=True, dropna=False)["variable"]
        .nunique()
        .reset_index(name="n_roi")
    )
    counts = per_position.merge(per_roi, on=roi_keys)
    mismatched = counts.loc[counts["n_position"] < counts["n_roi"]]
    if mismatched.empty:
        return
    first = mismatched.iloc[0]
    group = {key: first[key] for key in roi_keys}
    group_keys = pd.Series(group)
    in_roi = ((pixels[roi_keys] == group_keys) | (pixels[roi_keys].isna() & group_keys.isna())).all(axis=1)
    at_position = in_roi & (pixels["x.px"] == first["x.px"]) & (pixels["y.px"] == first["y.px"])
    measured = set(pixels.loc[at_position, "variable"].astype(str))
    absent = sorted(set(pixels.loc[in_roi, "variable"].astype(str)) - measured)
    raise FootprintMismatchError(
        f"Variables {absent} do not cover pixel ({first['x.px']}, {first['y.px']}) of ROI group {group}, all variables "
        "of a ROI must cover the same pixels (pass require_identical_footprints=False to use the reference geometry)"
    )
