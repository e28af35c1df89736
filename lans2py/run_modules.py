"""
Run lans2py modules.

This provides entry points for running lans2py as a command line programme. Each function within this module is a
wrapper which runs functions from the ''processing'' module over every table found, in parallel.
"""

import argparse
import logging
import sys
from collections.abc import Callable
from functools import partial
from multiprocessing import Pool
from pprint import pformat

from tqdm import tqdm

from lans2py.config import reconcile_config_args
from lans2py.io import find_files, write_yaml
from lans2py.logs.logs import LOGGER_NAME
from lans2py.processing import process_borders, process_calculations, process_maps
from lans2py.validation import DEFAULT_CONFIG_SCHEMA, validate_config

# The logger is set up in __init__.py and setup is idempotent so this returns the same object.
LOGGER = logging.getLogger(LOGGER_NAME)


def _set_logging(log_level: str | None) -> None:
    """
    Set the logging level.

    Parameters
    ----------
    log_level : str
        String for the desired log-level.
    """
    if log_level == "warning":
        LOGGER.setLevel("WARNING")
    elif log_level == "error":
        LOGGER.setLevel("ERROR")
    elif log_level == "debug":
        LOGGER.setLevel("DEBUG")
    else:
        LOGGER.setLevel("INFO")


def _log_setup(config: dict, args: argparse.Namespace | None, table_files: list) -> None:
    """
    Log the current configuration.

    Parameters
    ----------
    config : dict
        Dictionary of configuration options.
    args : argparse.Namespace | None
        Arguments function was invoked with.
    table_files : list
        Tables that have been found.
    """
    LOGGER.info(f"Configuration file loaded from      : {getattr(args, 'config_file', None)}")
    LOGGER.info(f"Scanning for tables in              : {config['base_dir']}")
    LOGGER.info(f"Output directory                    : {str(config['output_dir'])}")
    LOGGER.info(f"Looking for tables with extension   : {config['file_ext']}")
    LOGGER.info(f"Tables with extension {config['file_ext']} in {config['base_dir']} : {len(table_files)}")
    if len(table_files) == 0:
        LOGGER.error(f"No tables with extension {config['file_ext']} in {config['base_dir']}")
        LOGGER.error("Please check your configuration and directories.")
        sys.exit()
    LOGGER.debug(f"Configuration after update         : \n{pformat(config, indent=4)}")  # noqa: T203


def _parse_configuration(args: argparse.Namespace | None = None) -> tuple[dict, list]:
    """
    Load configurations, validate them and find the tables to process.

    Parameters
    ----------
    args : argparse.Namespace | None
        Arguments.

    Returns
    -------
    tuple[dict, list]
        Returns the dictionary of configuration options and a list of tables found under the base directory.
    """
    config = reconcile_config_args(args=args)
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")
    _set_logging(config["log_level"])
    config["output_dir"].mkdir(parents=True, exist_ok=True)
    table_files = find_files(config["base_dir"], file_ext=config["file_ext"])
    # Skip tables written by earlier runs
    output_dir = config["output_dir"].resolve()
    table_files = [table for table in table_files if output_dir not in table.resolve().parents]
    _log_setup(config, args, table_files)
    return config, table_files


def _run_in_pool(processing_function: Callable, table_files: list, cores: int, description: str) -> dict:
    """
    Run a processing function over every table with a pool of workers.

    Parameters
    ----------
    processing_function : Callable
        Function taking a table path and returning a tuple of the path and its result (``None`` on failure).
    table_files : list
        Tables to process.
    cores : int
        Number of processes.
    description : str
        Progress bar description.

    Returns
    -------
    dict
        Results keyed by table path, failed tables are excluded.
    """
    results = {}
    with Pool(processes=cores) as pool:
        with tqdm(total=len(table_files), desc=description) as pbar:
            for table_path, result in pool.imap_unordered(processing_function, table_files):
                if result is not None:
                    results[table_path] = result
                pbar.update()
    LOGGER.info(f"Successfully processed {len(results)} of {len(table_files)} tables.")
    return results


def borders(args: argparse.Namespace | None = None) -> dict:
    """
    Find ion map tables and write the ROI boundary pixels of each.

    Parameters
    ----------
    args : argparse.Namespace | None
        Arguments.

    Returns
    -------
    dict
        Number of boundary rows written, keyed by table path.
    """
    config, table_files = _parse_configuration(args)
    if not config["borders"]["run"]:
        LOGGER.info("ROI border extraction is disabled, enable it in the configuration with 'borders.run'.")
        return {}
    processing_function = partial(
        process_borders,
        base_dir=config["base_dir"],
        loading_config=config["loading"],
        borders_config=config["borders"],
        output_dir=config["output_dir"],
    )
    results = _run_in_pool(
        processing_function,
        table_files,
        config["cores"],
        description=f"Extracting ROI boundaries from {config['base_dir']}, results are under {config['output_dir']}",
    )
    write_yaml(config, output_dir=config["output_dir"])
    return results


def maps(args: argparse.Namespace | None = None) -> dict:
    """
    Find ion map tables and plot each.

    Parameters
    ----------
    args : argparse.Namespace | None
        Arguments.

    Returns
    -------
    dict
        Saved figures keyed by table path.
    """
    config, table_files = _parse_configuration(args)
    if not config["maps"]["run"]:
        LOGGER.info("Plotting ion maps is disabled, enable it in the configuration with 'maps.run'.")
        return {}
    processing_function = partial(
        process_maps,
        base_dir=config["base_dir"],
        loading_config=config["loading"],
        borders_config=config["borders"],
        maps_config=config["maps"],
        output_dir=config["output_dir"],
    )
    results = _run_in_pool(
        processing_function,
        table_files,
        config["cores"],
        description=f"Plotting ion maps from {config['base_dir']}, results are under {config['output_dir']}",
    )
    write_yaml(config, output_dir=config["output_dir"])
    return results


def calculate(args: argparse.Namespace | None = None) -> dict:
    """
    Find ROI summary tables and derive sums, ratios and abundances for each.

    Parameters
    ----------
    args : argparse.Namespace | None
        Arguments.

    Returns
    -------
    dict
        Extended tables keyed by table path.
    """
    config, table_files = _parse_configuration(args)
    if not config["calculations"]["run"]:
        LOGGER.info("Calculations are disabled, enable them in the configuration with 'calculations.run'.")
        return {}
    processing_function = partial(
        process_calculations,
        base_dir=config["base_dir"],
        loading_config=config["loading"],
        calculations_config=config["calculations"],
        output_dir=config["output_dir"],
    )
    results = _run_in_pool(
        processing_function,
        table_files,
        config["cores"],
        description=f"Calculating derived quantities in {config['base_dir']}, output under {config['output_dir']}",
    )
    write_yaml(config, output_dir=config["output_dir"])
    return results
