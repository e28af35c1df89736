"""Fixtures for testing."""

import numpy as np
import pandas as pd
import pytest

RNG = np.random.default_rng(seed=1000)
MAP_SIZE = 7
VARIABLES = ("12C", "13C")


@pytest.fixture()
def ion_map() -> pd.DataFrame:
    """
    A 7x7 ion map of two analyses and two variables.

    ROI 1 is a 3x3 block in the corner, ROI 2 a 2x4 block on the opposite edge and all other pixels are background
    (ROI 0).
    """
    frames = []
    for analysis in ("a1", "a2"):
        roi = np.zeros((MAP_SIZE, MAP_SIZE), dtype=int)
        roi[0:3, 0:3] = 1
        roi[3:7, 5:7] = 2
        for variable in VARIABLES:
            y, x = np.indices(roi.shape)
            frames.append(
                pd.DataFrame(
                    {
                        "analysis": analysis,
                        "ROI": roi.ravel(),
                        "variable": variable,
                        "x.px": x.ravel(),
                        "y.px": y.ravel(),
                        "value": RNG.poisson(lam=100, size=roi.size).astype(float),
                    }
                )
            )
    return pd.concat(frames, ignore_index=True)


@pytest.fixture()
def ion_map_um(ion_map: pd.DataFrame) -> pd.DataFrame:  # pylint: disable=redefined-outer-name
    """The ion map with micrometre coordinates for a 14 um frame."""
    return ion_map.assign(**{"x.um": ion_map["x.px"] * 2.0, "y.um": ion_map["y.px"] * 2.0, "frame_size": 14.0})


@pytest.fixture()
def summary() -> pd.DataFrame:
    """A long format ROI summary table of ion counts for two analyses and two ROIs."""
    return pd.DataFrame(
        {
            "analysis": ["a1"] * 4 + ["a2"] * 4,
            "ROI": [1, 1, 2, 2] * 2,
            "variable": ["12C", "13C"] * 4,
            "data_type": "ion_count",
            "value": [100.0, 25.0, 400.0, 100.0, 900.0, 100.0, 16.0, 4.0],
        }
    )
