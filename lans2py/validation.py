"""Validation of configuration."""

import logging
import os
from pathlib import Path

from schema import And, Or, Schema, SchemaError

from lans2py.logs.logs import LOGGER_NAME

LOGGER = logging.getLogger(LOGGER_NAME)

# pylint: disable=line-too-long


def validate_config(config: dict, schema: Schema, config_type: str) -> None:
    """
    Validate configuration.

    Parameters
    ----------
    config : dict
        Config dictionary imported by read_yaml() and updated with command line arguments.
    schema : Schema
        A schema against which the configuration is to be compared.
    config_type : str
        Description of of configuration being validated.
    """
    try:
        schema.validate(config)
        LOGGER.info(f"The {config_type} is valid.")
    except SchemaError as schema_error:
        raise SchemaError(
            f"There is an error in your {config_type} configuration. "
            "Please refer to the first error message above for details"
        ) from schema_error


VARIABLE_PAIRS = [
    And(
        [str],
        lambda pair: len(pair) == 2,
        error="Invalid value in config for calculations, each entry should be a pair of variables e.g. [13C, 12C]",
    )
]

DEFAULT_CONFIG_SCHEMA = Schema(
    {
        "base_dir": Path,
        "output_dir": Path,
        "log_level": Or(
            "debug",
            "info",
            "warning",
            "error",
            error="Invalid value in config for 'log_level', valid values are 'info' (default), 'debug', 'error' or 'warning",
        ),
        "cores": And(int, lambda n: 1 <= n <= os.cpu_count(), error="Invalid value in config for 'cores'"),
        "file_ext": Or(
            ".csv",
            ".tsv",
            ".txt",
            ".dat",
            error="Invalid value in config for 'file_ext', valid values are '.csv', '.tsv', '.txt' or '.dat'.",
        ),
        "loading": {
            "separator": Or(None, str, error="Invalid value in config for 'loading.separator', should be a string"),
        },
        "borders": {
            "run": Or(
                True,
                False,
                error="Invalid value in config for 'borders.run', valid values are 'True' or 'False'",
            ),
            "reference_variable": Or(
                None, str, error="Invalid value in config for 'borders.reference_variable', should be a string or null"
            ),
            "require_identical_footprints": Or(
                True,
                False,
                error="Invalid value in config for 'borders.require_identical_footprints', valid values are 'True' or 'False'",
            ),
        },
        "maps": {
            "run": Or(
                True,
                False,
                error="Invalid value in config for 'maps.run', valid values are 'True' or 'False'",
            ),
            "draw_rois": Or(
                True,
                False,
                error="Invalid value in config for 'maps.draw_rois', valid values are 'True' or 'False'",
            ),
            "normalize": Or(
                True,
                False,
                error="Invalid value in config for 'maps.normalize', valid values are 'True' or 'False'",
            ),
            "color_scale": And(
                [str],
                lambda scale: len(scale) == 2,
                error="Invalid value in config for 'maps.color_scale', should be two colours e.g. [black, white]",
            ),
            "roi_marker_size": And(Or(int, float), lambda n: n > 0),
            "cmap": Or(None, str, error="Invalid value in config for 'maps.cmap', should be the name of a colormap or null"),
            "palette": str,
            "panel_size": And(Or(int, float), lambda n: n > 0),
            "savefig_format": Or(
                "png",
                "pdf",
                "svg",
                error="Invalid value in config for 'maps.savefig_format', valid values are 'png', 'pdf' or 'svg'",
            ),
            "savefig_dpi": Or(
                "figure",
                And(Or(int, float), lambda n: n > 0),
                error="Invalid value in config for 'maps.savefig_dpi', should be a positive number or 'figure'",
            ),
        },
        "calculations": {
            "run": Or(
                True,
                False,
                error="Invalid value in config for 'calculations.run', valid values are 'True' or 'False'",
            ),
            "sums": [
                And(
                    [str],
                    lambda variables: len(variables) >= 2,
                    error="Invalid value in config for 'calculations.sums', each entry should list two or more variables",
                )
            ],
            "ratios": VARIABLE_PAIRS,
            "abundances": VARIABLE_PAIRS,
            "percent": Or(
                True,
                False,
                error="Invalid value in config for 'calculations.percent', valid values are 'True' or 'False'",
            ),
            "spread": Or(
                True,
                False,
                error="Invalid value in config for 'calculations.spread', valid values are 'True' or 'False'",
            ),
        },
    }
)
