"""
Entry point for all lans2py programs.

Parses command-line arguments and passes input on to the relevant functions / modules.
"""

import argparse as arg
import sys
from pathlib import Path

from lans2py import __version__, log_lans2py_version, run_modules
from lans2py.config import write_config_with_comments


def _str_to_bool(value: str) -> bool:
    """
    Convert a command line string to a boolean.

    Parameters
    ----------
    value : str
        String such as 'true' or 'False'.

    Returns
    -------
    bool
        The boolean value.
    """
    if value.lower() in ("true", "yes", "1"):
        return True
    if value.lower() in ("false", "no", "0"):
        return False
    raise arg.ArgumentTypeError(f"Boolean value expected, got '{value}'.")


def create_parser() -> arg.ArgumentParser:
    """
    Create a parser for reading options.

    Creates a parser, with multiple sub-parsers for reading options to run 'lans2py'.

    Returns
    -------
    arg.ArgumentParser
        Argument parser.
    """
    parser = arg.ArgumentParser(
        description="Process NanoSIMS data exported from LANS. Add the name of the program you wish to run."
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"Installed version of lans2py: {__version__}",
        help="Report the current version of lans2py that is installed",
    )
    parser.add_argument(
        "-c",
        "--config-file",
        dest="config_file",
        type=Path,
        required=False,
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "-b",
        "--base-dir",
        dest="base_dir",
        type=Path,
        required=False,
        help="Base directory to scan for tables.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        type=Path,
        required=False,
        help="Output directory to write results to.",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        dest="log_level",
        type=str,
        required=False,
        help="Logging level to use, default is 'info' for verbose output use 'debug'.",
    )
    parser.add_argument(
        "-j",
        "--cores",
        dest="cores",
        type=int,
        required=False,
        help="Number of CPU cores to use when processing.",
    )
    parser.add_argument(
        "-f",
        "--file-ext",
        dest="file_ext",
        type=str,
        required=False,
        help="File extension to scan for.",
    )
    parser.add_argument(
        "--separator",
        dest="loading_separator",
        type=str,
        required=False,
        help="Column separator of the tables, inferred from the file extension by default.",
    )

    subparsers = parser.add_subparsers(title="program", description="Available programs, listed below:", dest="module")

    borders_parser = subparsers.add_parser(
        "borders",
        description="Extract the boundary pixels of each ROI from ion map tables.",
        help="Extract the boundary pixels of each ROI from ion map tables.",
    )
    borders_parser.add_argument(
        "--reference-variable",
        dest="borders_reference_variable",
        type=str,
        required=False,
        help="Variable defining the ROI geometry, defaults to the alphabetically first variable of each ROI.",
    )
    borders_parser.add_argument(
        "--require-identical-footprints",
        dest="borders_require_identical_footprints",
        type=_str_to_bool,
        required=False,
        help="Whether all variables of a ROI must cover the same pixels (true/false).",
    )
    borders_parser.set_defaults(func=run_modules.borders)

    maps_parser = subparsers.add_parser(
        "maps",
        description="Plot ion maps with optional ROI boundaries.",
        help="Plot ion maps with optional ROI boundaries.",
    )
    maps_parser.add_argument(
        "--draw-rois",
        dest="maps_draw_rois",
        type=_str_to_bool,
        required=False,
        help="Whether to overlay ROI boundaries (true/false).",
    )
    maps_parser.add_argument(
        "--normalize",
        dest="maps_normalize",
        type=_str_to_bool,
        required=False,
        help="Whether to scale each map to its maximum intensity (true/false).",
    )
    maps_parser.add_argument(
        "--color-scale",
        dest="maps_color_scale",
        type=str,
        nargs=2,
        required=False,
        help="Colours for low and high intensity, e.g. 'black white'.",
    )
    maps_parser.add_argument(
        "--reference-variable",
        dest="borders_reference_variable",
        type=str,
        required=False,
        help="Variable defining the ROI geometry.",
    )
    maps_parser.add_argument(
        "--require-identical-footprints",
        dest="borders_require_identical_footprints",
        type=_str_to_bool,
        required=False,
        help="Whether all variables of a ROI must cover the same pixels (true/false).",
    )
    maps_parser.add_argument(
        "--cmap",
        dest="maps_cmap",
        type=str,
        required=False,
        help="Named colormap used instead of the colour scale, e.g. 'lans_hot' or 'viridis'.",
    )
    maps_parser.add_argument(
        "--savefig-format",
        dest="maps_savefig_format",
        type=str,
        required=False,
        help="Format for saving figures to, options are 'png', 'svg' or 'pdf'.",
    )
    maps_parser.add_argument(
        "--savefig-dpi",
        dest="maps_savefig_dpi",
        type=int,
        required=False,
        help="Resolution of saved figures.",
    )
    maps_parser.set_defaults(func=run_modules.maps)

    calculate_parser = subparsers.add_parser(
        "calculate",
        description="Derive sums, ratios and abundances for ROI summary tables.",
        help="Derive sums, ratios and abundances for ROI summary tables.",
    )
    calculate_parser.add_argument(
        "--sum",
        dest="calculations_sums",
        type=str,
        nargs="+",
        action="append",
        required=False,
        help="Variables to sum, may be given more than once, e.g. '--sum 12C 13C'.",
    )
    calculate_parser.add_argument(
        "--ratio",
        dest="calculations_ratios",
        type=str,
        nargs=2,
        action="append",
        required=False,
        help="Numerator and denominator of a ratio, may be given more than once, e.g. '--ratio 13C 12C'.",
    )
    calculate_parser.add_argument(
        "--abundance",
        dest="calculations_abundances",
        type=str,
        nargs=2,
        action="append",
        required=False,
        help="Isotope and the other isotope for a fractional abundance, e.g. '--abundance 13C 12C'.",
    )
    calculate_parser.add_argument(
        "--percent",
        dest="calculations_percent",
        type=_str_to_bool,
        required=False,
        help="Report abundances in atom percent (true/false).",
    )
    calculate_parser.set_defaults(func=run_modules.calculate)

    create_config_parser = subparsers.add_parser(
        "create-config",
        description="Create a configuration file using the defaults.",
        help="Create a configuration file using the defaults.",
    )
    create_config_parser.add_argument(
        "-f",
        "--filename",
        dest="filename",
        type=Path,
        required=False,
        help="Name of YAML file to save configuration to (default 'config.yaml').",
    )
    create_config_parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        type=Path,
        required=False,
        default="./",
        help="Path to where the YAML file should be saved (default './' the current directory).",
    )
    create_config_parser.set_defaults(func=write_config_with_comments)

    return parser


def entry_point(manually_provided_args=None, testing=False) -> None:
    """
    Entry point for all lans2py programs.

    Main entry point for running 'lans2py' which allows the different programs ('borders', 'maps', 'calculate' and
    'create-config') to be run.

    Parameters
    ----------
    manually_provided_args : None
        Manually provided arguments.
    testing : bool
        Whether testing is being carried out.

    Returns
    -------
    None
        Does not return anything.
    """
    log_lans2py_version()

    parser = create_parser()
    args = parser.parse_args() if manually_provided_args is None else parser.parse_args(manually_provided_args)

    # No program specified, print help and exit
    if not args.module:
        parser.print_help()
        sys.exit()

    if testing:
        return args

    # call the relevant function
    args.func(args)

    return None
