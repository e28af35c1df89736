"""Tests of ion map plotting."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest
from matplotlib.colors import LinearSegmentedColormap, to_rgba

from lans2py.plotting import pixel_size, plot_maps, rasterize, save_maps
from lans2py.theme import Colormap
from lans2py.utils import FootprintMismatchError, MissingColumnError


def test_plot_maps_layout(ion_map: pd.DataFrame) -> None:
    """One row of panels per analysis and one column per variable."""
    fig, axes = plot_maps(ion_map)
    assert isinstance(fig, plt.Figure)
    assert axes.shape == (2, 2)
    assert axes[0, 0].get_title() == "12C"
    assert axes[0, 1].get_title() == "13C"
    assert axes[1, 0].get_ylabel() == "a2\ny [px]"
    assert axes[1, 1].get_xlabel() == "x [px]"
    plt.close(fig)


def test_plot_maps_draws_rois(ion_map: pd.DataFrame) -> None:
    """Each ROI is drawn as markers on its border pixels and listed in the legend."""
    fig, axes = plot_maps(ion_map)
    # ROI 1 has 8 border pixels and ROI 2 all 8 of its pixels
    offsets = [collection.get_offsets() for collection in axes[0, 0].collections]
    assert sorted(len(offset) for offset in offsets) == [8, 8]
    legend = fig.legends[0]
    assert legend.get_title().get_text() == "ROI"
    assert [text.get_text() for text in legend.get_texts()] == ["1", "2"]
    plt.close(fig)


def test_plot_maps_without_rois(ion_map: pd.DataFrame) -> None:
    """Maps without ROI boundaries do not need a ROI column."""
    fig, axes = plot_maps(ion_map.drop(columns="ROI"), draw_rois=False)
    assert all(len(ax.collections) == 0 for ax in axes.ravel())
    assert not fig.legends
    plt.close(fig)


def test_plot_maps_normalize(ion_map: pd.DataFrame) -> None:
    """Normalised panels share a zero to one colour scale, raw panels span the data."""
    fig, axes = plot_maps(ion_map, draw_rois=False, normalize=True)
    assert axes[0, 0].images[0].get_clim() == (0.0, 1.0)
    plt.close(fig)
    fig, axes = plot_maps(ion_map, draw_rois=False, normalize=False)
    assert axes[0, 0].images[0].get_clim() == (ion_map["value"].min(), ion_map["value"].max())
    plt.close(fig)


def test_plot_maps_micrometres(ion_map_um: pd.DataFrame) -> None:
    """Axes are in micrometres when the coordinates are available."""
    fig, axes = plot_maps(ion_map_um)
    assert axes[1, 0].get_xlabel() == "x [µm]"
    assert axes[0, 0].images[0].get_extent() == pytest.approx([-1.0, 13.0, -1.0, 13.0])
    plt.close(fig)


@pytest.mark.parametrize(
    ("cmap", "expected"),
    [
        pytest.param(None, "lans_custom", id="colour scale"),
        pytest.param("lans_hot", "lans_hot", id="lans_hot"),
        pytest.param("viridis", "viridis", id="matplotlib colormap"),
    ],
)
def test_plot_maps_cmap(ion_map: pd.DataFrame, cmap: str | None, expected: str) -> None:
    """A named colormap replaces the two colour scale."""
    fig, axes = plot_maps(ion_map, draw_rois=False, color_scale=("navy", "gold"), cmap=cmap)
    assert axes[0, 0].images[0].get_cmap().name == expected
    plt.close(fig)


def test_plot_maps_footprint_mismatch(ion_map: pd.DataFrame) -> None:
    """ROIs whose variables cover different pixels are drawn from the reference geometry only when allowed."""
    ion_map = ion_map.drop(index=ion_map.index[(ion_map["variable"] == "13C") & (ion_map["ROI"] == 1)][:1])
    with pytest.raises(FootprintMismatchError):
        plot_maps(ion_map)
    fig, axes = plot_maps(ion_map, require_identical_footprints=False)
    assert sorted(len(collection.get_offsets()) for collection in axes[0, 1].collections) == [8, 8]
    plt.close(fig)


def test_plot_maps_empty() -> None:
    """An empty table can not be plotted."""
    with pytest.raises(ValueError, match="no rows in data frame"):
        plot_maps(pd.DataFrame(columns=["analysis", "variable", "x.px", "y.px", "value"]))


def test_plot_maps_missing_column(ion_map: pd.DataFrame) -> None:
    """Required columns are checked before plotting."""
    with pytest.raises(MissingColumnError, match="value column does not exist"):
        plot_maps(ion_map.drop(columns="value"))


def test_rasterize() -> None:
    """Pixels are placed at [y, x] and missing pixels are NaN."""
    panel = pd.DataFrame({"x.px": [1, 2, 1], "y.px": [5, 5, 6], "value": [1.0, 2.0, 3.0]})
    raster, extent = rasterize(panel, scale=2.0)
    np.testing.assert_array_equal(raster, np.array([[1.0, 2.0], [3.0, np.nan]]))
    assert extent == (1.0, 5.0, 9.0, 13.0)


@pytest.mark.parametrize(
    ("x_px", "x_um", "expected"),
    [
        pytest.param([0, 1, 2], [0.0, 0.25, 0.5], 0.25, id="quarter micrometre"),
        pytest.param([0, 0], [0.0, 0.0], 1.0, id="single column"),
    ],
)
def test_pixel_size(x_px: list, x_um: list, expected: float) -> None:
    """Pixel size is the ratio of micrometre to pixel coordinates."""
    assert pixel_size(pd.DataFrame({"x.px": x_px, "x.um": x_um})) == pytest.approx(expected)


@pytest.mark.parametrize("savefig_format", [pytest.param("png", id="png"), pytest.param("pdf", id="pdf")])
def test_save_maps(ion_map: pd.DataFrame, tmp_path: Path, savefig_format: str) -> None:
    """Figures are saved in the requested format and closed."""
    fig, _ = plot_maps(ion_map)
    outfile = save_maps(fig, tmp_path / "nested", "maps", savefig_format=savefig_format, savefig_dpi=50)
    assert outfile == tmp_path / "nested" / f"maps.{savefig_format}"
    assert outfile.is_file()
    assert not plt.fignum_exists(fig.number)


@pytest.mark.parametrize(
    ("name", "low", "high"),
    [
        pytest.param("lans", "black", "white", id="lans"),
        pytest.param("lans_hot", "black", "white", id="lans_hot"),
    ],
)
def test_colormap(name: str, low: str, high: str) -> None:
    """The package colormaps run from black to white."""
    cmap = Colormap(name).get_cmap()
    assert isinstance(cmap, LinearSegmentedColormap)
    assert cmap(0.0) == pytest.approx(to_rgba(low))
    assert cmap(1.0) == pytest.approx(to_rgba(high))


def test_colormap_from_matplotlib() -> None:
    """Other names are looked up in Matplotlib."""
    assert Colormap("viridis").get_cmap().name == "viridis"
    assert str(Colormap()) == "lans2py Colormap: lans"
