"""lans2py."""

from importlib.metadata import PackageNotFoundError, version

from matplotlib import colormaps

from .logs.logs import setup_logger
from .theme import Colormap

LOGGER = setup_logger()

try:
    __version__ = version("lans2py")
except PackageNotFoundError:
    __version__ = "0.0.0"
__release__ = ".".join(__version__.split(".")[:2])

CONFIG_DOCUMENTATION_REFERENCE = """# For more information on configuration and how to use it see the README.\n"""

for _name in ("lans", "lans_hot"):
    if _name not in colormaps:
        colormaps.register(cmap=Colormap(_name).get_cmap())


def log_lans2py_version() -> None:
    """Log the lans2py version to system logger."""
    LOGGER.info(f"lans2py version : {__version__}")
