"""Process individual LANS export tables, used by the command line programmes in ''run_modules''."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from lans2py.borders import extract_roi_boundaries
from lans2py.calculations import calculate_abundances, calculate_ratios, calculate_sums, prepare_summary
from lans2py.io import get_out_path, read_table, write_table
from lans2py.logs.logs import LOGGER_NAME
from lans2py.plotting import plot_maps, save_maps
from lans2py.tables import spread_data

LOGGER = logging.getLogger(LOGGER_NAME)

# pylint: disable=too-many-arguments
# pylint: disable=too-many-positional-arguments

# Errors arising from malformed or unsuitable input tables, a file raising one of these is skipped in batch runs.
INPUT_ERRORS = (KeyError, ValueError, pd.errors.ParserError, pd.errors.EmptyDataError)


def process_borders(
    table_path: Path,
    base_dir: Path,
    loading_config: dict,
    borders_config: dict,
    output_dir: Path,
) -> tuple[Path, int | None]:
    """
    Extract the ROI boundary pixels of an ion map table and write them to ''roi_borders.csv''.

    Parameters
    ----------
    table_path : Path
        Ion map table to process.
    base_dir : Path
        Directory that was searched for tables, the output mirrors the structure below it.
    loading_config : dict
        Options for reading the table.
    borders_config : dict
        Options for ''extract_roi_boundaries()'' (the ''run'' key is ignored).
    output_dir : Path
        Directory to write output to.

    Returns
    -------
    tuple[Path, int | None]
        The table path and the number of boundary rows written, ''None'' if processing failed.
    """
    options = {key: value for key, value in borders_config.items() if key != "run"}
    try:
        data = read_table(table_path, **loading_config)
        border = extract_roi_boundaries(data, **options)
        write_table(border, get_out_path(table_path, base_dir, output_dir), "roi_borders.csv")
        LOGGER.info(f"[{table_path.stem}] : ROI border extraction completed successfully.")
        return table_path, len(border)
    except INPUT_ERRORS as e:
        LOGGER.error(f"[{table_path.stem}] : ROI border extraction failed - skipping. Error : {e}")
        return table_path, None


def process_maps(
    table_path: Path,
    base_dir: Path,
    loading_config: dict,
    borders_config: dict,
    maps_config: dict,
    output_dir: Path,
) -> tuple[Path, Path | None]:
    """
    Plot the ion maps of a table, with ROI boundaries if requested, and save the figure.

    Parameters
    ----------
    table_path : Path
        Ion map table to plot.
    base_dir : Path
        Directory that was searched for tables.
    loading_config : dict
        Options for reading the table.
    borders_config : dict
        Options for ROI boundary extraction, ''reference_variable'' and ''require_identical_footprints'' are used.
    maps_config : dict
        Plotting options.
    output_dir : Path
        Directory to write output to.

    Returns
    -------
    tuple[Path, Path | None]
        The table path and the saved figure, ''None'' if plotting failed.
    """
    options = maps_config.copy()
    savefig_format = options.pop("savefig_format")
    savefig_dpi = options.pop("savefig_dpi")
    options.pop("run", None)
    try:
        data = read_table(table_path, **loading_config)
        fig, _ = plot_maps(
            data,
            reference_variable=borders_config.get("reference_variable"),
            require_identical_footprints=borders_config.get("require_identical_footprints", True),
            **options,
        )
        outfile = save_maps(
            fig,
            get_out_path(table_path, base_dir, output_dir),
            filename=f"{table_path.stem}_maps",
            savefig_format=savefig_format,
            savefig_dpi=savefig_dpi,
        )
        return table_path, outfile
    except INPUT_ERRORS as e:
        LOGGER.error(f"[{table_path.stem}] : Plotting ion maps failed - skipping. Error : {e}")
        return table_path, None


def run_calculations(data: pd.DataFrame, calculations_config: dict) -> pd.DataFrame:
    """
    Apply the sums, ratios and abundances listed in the configuration, in that order.

    Missing errors of ion counts are filled from counting statistics first so the result can always be spread.

    Parameters
    ----------
    data : pd.DataFrame
        Long format summary table.
    calculations_config : dict
        Dictionary with ''sums'', ''ratios'', ''abundances'' and ''percent''.

    Returns
    -------
    pd.DataFrame
        The table with derived variables appended.
    """
    data = prepare_summary(data)
    if calculations_config["sums"]:
        data = calculate_sums(data, *calculations_config["sums"])
    if calculations_config["ratios"]:
        data = calculate_ratios(data, *calculations_config["ratios"])
    if calculations_config["abundances"]:
        data = calculate_abundances(data, *calculations_config["abundances"], percent=calculations_config["percent"])
    return data


def process_calculations(
    table_path: Path,
    base_dir: Path,
    loading_config: dict,
    calculations_config: dict,
    output_dir: Path,
) -> tuple[Path, pd.DataFrame | None]:
    """
    Derive new variables for a ROI summary table and write the long (and optionally wide) result.

    Parameters
    ----------
    table_path : Path
        Summary table to process.
    base_dir : Path
        Directory that was searched for tables.
    loading_config : dict
        Options for reading the table.
    calculations_config : dict
        Calculation options.
    output_dir : Path
        Directory to write output to.

    Returns
    -------
    tuple[Path, pd.DataFrame | None]
        The table path and the extended table, ''None'' if processing failed.
    """
    out_path = get_out_path(table_path, base_dir, output_dir)
    try:
        data = run_calculations(read_table(table_path, **loading_config), calculations_config)
        write_table(data, out_path, f"{table_path.stem}_calculated.csv")
        if calculations_config["spread"]:
            write_table(spread_data(data), out_path, f"{table_path.stem}_wide.csv")
        LOGGER.info(f"[{table_path.stem}] : Calculations completed successfully.")
        return table_path, data
    except INPUT_ERRORS as e:
        LOGGER.error(f"[{table_path.stem}] : Calculations failed - skipping. Error : {e}")
        return table_path, None
