"""Colour scales for NanoSIMS ion maps."""

import logging

import matplotlib as mpl
import matplotlib.cm
import numpy as np
from matplotlib.colors import LinearSegmentedColormap, to_rgba

from lans2py.logs.logs import LOGGER_NAME

LOGGER = logging.getLogger(LOGGER_NAME)


class Colormap:
    """
    Class for setting the Colormap.

    Parameters
    ----------
    name : str
        Name of colormap to use.
    """

    def __init__(self, name: str = "lans"):
        """
        Initialise the class.

        Parameters
        ----------
        name : str
            Name of colormap to use.
        """
        self.name = name
        self.cmap = None
        self.set_cmap(self.name)

    def __str__(self) -> str:
        """
        Return string representation of object.

        Returns
        -------
        str
            String detailing the colormap.
        """
        return f"lans2py Colormap: {self.name}"

    def set_cmap(self, name: str) -> None:
        """
        Set the ColorMap.

        Parameters
        ----------
        name : str
            Name of the colormap to return.
        """
        if name.lower() == "lans":
            self.cmap = self.lans()
        elif name.lower() == "lans_hot":
            self.cmap = self.lans_hot()
        else:
            # Get one of the matplotlib colormaps
            self.cmap = mpl.colormaps[name]
        LOGGER.debug(f"[theme] Colormap set to : {name}")

    def get_cmap(self) -> matplotlib.cm:
        """
        Return the matplotlib.cm colormap object.

        Returns
        -------
        matplotlib.cm
            Matplotlib Color map object.
        """
        return self.cmap

    @staticmethod
    def from_colour_scale(low: str, high: str, name: str = "lans_custom") -> LinearSegmentedColormap:
        """
        Build a two colour gradient from low to high intensity.

        Parameters
        ----------
        low : str
            Any Matplotlib colour specification used for the lowest intensity.
        high : str
            Any Matplotlib colour specification used for the highest intensity.
        name : str
            Name given to the colormap.

        Returns
        -------
        LinearSegmentedColormap
            Gradient between the two colours.
        """
        return LinearSegmentedColormap.from_list(name, [to_rgba(low), to_rgba(high)], N=256)

    @staticmethod
    def lans() -> LinearSegmentedColormap:
        """
        Black to white gradient, the default for ion count maps.

        Returns
        -------
        LinearSegmentedColormap
            The 'lans' colormap.
        """
        return Colormap.from_colour_scale("black", "white", name="lans")

    @staticmethod
    def lans_hot() -> LinearSegmentedColormap:
        """
        Black, red, yellow and white gradient similar to the LANS ratio image palette.

        Returns
        -------
        LinearSegmentedColormap
            The 'lans_hot' colormap.
        """
        N = 4
        vals = np.ones((N, 4))
        vals[0] = [0.0, 0.0, 0.0, 1.0]
        vals[1] = [200 / 256, 16 / 256, 16 / 256, 1.0]
        vals[2] = [250 / 256, 220 / 256, 40 / 256, 1.0]
        vals[3] = [1.0, 1.0, 1.0, 1.0]

        return LinearSegmentedColormap.from_list("lans_hot", vals, N=256)
