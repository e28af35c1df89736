"""Plot NanoSIMS ion maps exported from LANS."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import numpy.typing as npt
import pandas as pd
import seaborn as sns
from matplotlib.patches import Patch

from lans2py.borders import extract_roi_boundaries
from lans2py.logs.logs import LOGGER_NAME
from lans2py.tables import normalize_maps
from lans2py.theme import Colormap
from lans2py.utils import check_columns

LOGGER = logging.getLogger(LOGGER_NAME)

# pylint: disable=too-many-arguments
# pylint: disable=too-many-locals
# pylint: disable=too-many-positional-arguments

MAP_COLUMNS = ("analysis", "variable", "x.px", "y.px", "value")


def plot_maps(
    data: pd.DataFrame,
    draw_rois: bool = True,
    normalize: bool = True,
    color_scale: Sequence[str] = ("black", "white"),
    roi_marker_size: float = 4.0,
    palette: str = "deep",
    panel_size: float = 3.0,
    reference_variable: str | None = None,
    require_identical_footprints: bool = True,
    cmap: str | None = None,
) -> tuple[plt.Figure, npt.NDArray]:
    """
    Plot ion maps as a grid of rasters with one row per analysis and one column per variable.

    ROI boundaries can be overlaid for clarity. There is no smoothing so ratios or abundances, where individual pixels
    take extreme values, are unlikely to render well.

    Parameters
    ----------
    data : pd.DataFrame
        Long format ion map table with ``analysis``, ``variable``, ``x.px``, ``y.px`` and ``value`` (and ``ROI`` when
        drawing boundaries). If ``x.um`` and ``y.um`` are present the axes are in micrometres.
    draw_rois : bool
        Whether to draw the ROI boundaries.
    normalize : bool
        Whether to scale each panel to its own maximum intensity.
    color_scale : Sequence[str]
        Colours for low and high intensity, black and white by default.
    roi_marker_size : float
        Size (points squared) of the markers drawn on boundary pixels.
    palette : str
        Seaborn palette used to colour the ROIs.
    panel_size : float
        Width and height of each panel in inches.
    reference_variable : str | None
        Variable defining the ROI geometry, see ``extract_roi_boundaries()``.
    require_identical_footprints : bool
        Whether all variables of a ROI must cover the same pixels, see ``extract_roi_boundaries()``.
    cmap : str | None
        Name of a colormap (``lans``, ``lans_hot`` or any Matplotlib colormap) used instead of ``color_scale``.

    Returns
    -------
    tuple[plt.Figure, npt.NDArray]
        Matplotlib figure and the two dimensional array of axes.
    """
    if data is None or len(data) == 0:
        raise ValueError("no rows in data frame")
    check_columns(data, MAP_COLUMNS, context="plot_maps")

    rois = None
    if draw_rois:
        rois = extract_roi_boundaries(
            data.groupby("analysis", observed=True),
            reference_variable=reference_variable,
            require_identical_footprints=require_identical_footprints,
        )
    if normalize:
        data = normalize_maps(data, group_by=("analysis", "variable"))

    analyses = list(pd.unique(data["analysis"]))
    variables = list(pd.unique(data["variable"]))
    unit = "µm" if {"x.um", "y.um"}.issubset(data.columns) else "px"
    cmap = Colormap.from_colour_scale(*color_scale) if cmap is None else Colormap(cmap).get_cmap()
    vmin, vmax = (0.0, 1.0) if normalize else (float(data["value"].min()), float(data["value"].max()))

    fig, axes = plt.subplots(
        len(analyses),
        len(variables),
        figsize=(panel_size * len(variables), panel_size * len(analyses) + 1),
        squeeze=False,
        sharex=True,
        sharey=True,
    )
    roi_colours = {}
    if rois is not None and not rois.empty:
        roi_ids = sorted(pd.unique(rois["ROI"]))
        roi_colours = dict(zip(roi_ids, sns.color_palette(palette, n_colors=len(roi_ids))))

    image = None
    for row, analysis in enumerate(analyses):
        for column, variable in enumerate(variables):
            ax = axes[row, column]
            ax.set_facecolor("black")
            panel = data.loc[(data["analysis"] == analysis) & (data["variable"] == variable)]
            if panel.empty:
                ax.set_axis_off()
                continue
            scale = pixel_size(panel) if unit == "µm" else 1.0
            raster, extent = rasterize(panel, scale)
            image = ax.imshow(raster, origin="lower", extent=extent, cmap=cmap, vmin=vmin, vmax=vmax)
            if roi_colours:
                border = rois.loc[(rois["analysis"] == analysis) & (rois["variable"] == variable)]
                for roi_id, border_pixels in border.groupby("ROI"):
                    ax.scatter(
                        border_pixels["x.px"] * scale,
                        border_pixels["y.px"] * scale,
                        s=roi_marker_size,
                        marker="s",
                        color=roi_colours[roi_id],
                        linewidths=0,
                    )
            ax.set_aspect("equal")
            if row == 0:
                ax.set_title(str(variable), fontsize=14)
            if column == 0:
                ax.set_ylabel(f"{analysis}\ny [{unit}]")
            if row == len(analyses) - 1:
                ax.set_xlabel(f"x [{unit}]")

    if image is not None:
        fig.colorbar(image, ax=axes.ravel().tolist(), orientation="horizontal", fraction=0.04, pad=0.08)
    if roi_colours:
        handles = [Patch(color=colour, label=str(roi_id)) for roi_id, colour in roi_colours.items()]
        fig.legend(handles=handles, title="ROI", loc="upper right")
    LOGGER.debug(f"Plotted {len(analyses)} analyses x {len(variables)} variables.")
    return fig, axes


def pixel_size(panel: pd.DataFrame) -> float:
    """
    Determine the width of a pixel in micrometres.

    Parameters
    ----------
    panel : pd.DataFrame
        Ion map of a single analysis with ``x.px`` and ``x.um``.

    Returns
    -------
    float
        Micrometres per pixel, one if it can not be determined.
    """
    nonzero = panel.loc[panel["x.px"] != 0]
    if nonzero.empty:
        return 1.0
    return float(np.median(nonzero["x.um"] / nonzero["x.px"]))


def rasterize(panel: pd.DataFrame, scale: float = 1.0) -> tuple[npt.NDArray, tuple[float, float, float, float]]:
    """
    Convert a long format ion map of a single analysis and variable into a two dimensional array.

    Parameters
    ----------
    panel : pd.DataFrame
        Ion map with ``x.px``, ``y.px`` and ``value``.
    scale : float
        Size of a pixel in the plotting units.

    Returns
    -------
    tuple[npt.NDArray, tuple[float, float, float, float]]
        Array indexed ``[y, x]`` (``NaN`` where no pixel is recorded) and its extent for ``imshow(origin='lower')``.
    """
    x_min, x_max = int(panel["x.px"].min()), int(panel["x.px"].max())
    y_min, y_max = int(panel["y.px"].min()), int(panel["y.px"].max())
    raster = np.full((y_max - y_min + 1, x_max - x_min + 1), np.nan)
    raster[panel["y.px"].to_numpy(dtype=int) - y_min, panel["x.px"].to_numpy(dtype=int) - x_min] = panel[
        "value"
    ].to_numpy(dtype=float)
    extent = ((x_min - 0.5) * scale, (x_max + 0.5) * scale, (y_min - 0.5) * scale, (y_max + 0.5) * scale)
    return raster, extent


def save_maps(
    fig: plt.Figure,
    output_dir: str | Path,
    filename: str,
    savefig_format: str = "png",
    savefig_dpi: int | str = "figure",
) -> Path:
    """
    Save a figure of ion maps and close it.

    Parameters
    ----------
    fig : plt.Figure
        Figure returned by ``plot_maps()``.
    output_dir : str | Path
        Directory to save to, created if it does not exist.
    filename : str
        Name of the file without extension.
    savefig_format : str
        Format to save as, any format supported by Matplotlib.
    savefig_dpi : int | str
        Resolution, ``figure`` uses the figure's own resolution.

    Returns
    -------
    Path
        Path to the saved figure.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    outfile = output_dir / f"{filename}.{savefig_format}"
    fig.savefig(outfile, format=savefig_format, dpi=savefig_dpi, bbox_inches="tight")
    plt.close(fig)
    LOGGER.info(f"[{filename}] Ion maps saved to : {outfile}")
    return outfile
