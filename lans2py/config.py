"""Functions and tools for working with configuration files."""

import logging
from argparse import Namespace
from collections.abc import MutableMapping
from datetime import datetime
from pathlib import Path
from pkgutil import get_data
from typing import TypeVar

import yaml

from lans2py import CONFIG_DOCUMENTATION_REFERENCE
from lans2py.io import read_yaml
from lans2py.logs.logs import LOGGER_NAME
from lans2py.utils import convert_path

MutableMappingType = TypeVar("MutableMappingType", bound="MutableMapping")

LOGGER = logging.getLogger(LOGGER_NAME)


def reconcile_config_args(args: Namespace | None) -> dict:
    """
    Reconcile command line arguments with the default configuration.

    Command line arguments take precedence over the default configuration. If a partial configuration file is specified
    (with '-c' or '--config-file') the defaults are over-ridden by these values (internally the configuration
    dictionary is updated with these values). Any other command line arguments take precedence over both the default
    and those supplied in a configuration file (again the dictionary is updated).

    Parameters
    ----------
    args : Namespace
        Command line arguments passed into lans2py.

    Returns
    -------
    dict
        The configuration dictionary.
    """
    default_config = yaml.full_load(get_data(package="lans2py", resource="default_config.yaml"))
    if args is not None and getattr(args, "config_file", None) is not None:
        config = read_yaml(str(args.config_file))
        # Prioritise the loaded config so it overrides the default
        config = merge_mappings(map1=default_config, map2=config)
    else:
        config = default_config

    # Override the config with command line arguments passed in, eg --output_dir ./output/
    if args is not None:
        config = update_config(config, args)
    else:
        config = update_config(config, {})

    return config


def merge_mappings(map1: MutableMappingType, map2: MutableMappingType) -> MutableMappingType:
    """
    Merge two mappings (dictionaries), with priority given to the second mapping.

    Parameters
    ----------
    map1 : MutableMapping
        First mapping to merge, with secondary priority.
    map2 : MutableMapping
        Second mapping to merge, with primary priority.

    Returns
    -------
    dict
        Merged dictionary.
    """
    for key, value in map2.items():
        # If the value is another mapping, then recurse
        if isinstance(value, MutableMapping):
            map1[key] = merge_mappings(map1.get(key, {}), value)
        else:
            map1[key] = value
    return map1


def update_config(config: dict, args: dict | Namespace) -> dict:
    """
    Update the configuration with any arguments.

    Nested sections are updated from arguments prefixed with the section name, e.g. ``maps_normalize`` updates
    ``config["maps"]["normalize"]``.

    Parameters
    ----------
    config : dict
        Dictionary of configuration (typically read from YAML file specified with '-c/--config <filename>').
    args : Namespace
        Command line arguments.

    Returns
    -------
    dict
        Dictionary updated with command arguments.
    """
    args = vars(args) if isinstance(args, Namespace) else args

    for arg_key, arg_value in args.items():
        if arg_value is None or callable(arg_value):
            continue
        if arg_key in config and not isinstance(config[arg_key], dict):
            original_value = config[arg_key]
            config[arg_key] = arg_value
            LOGGER.debug(f"Updated config config[{arg_key}] : {original_value} > {arg_value} ")
            continue
        for section, options in config.items():
            if isinstance(options, dict) and arg_key.startswith(f"{section}_"):
                option = arg_key.removeprefix(f"{section}_")
                if option in options:
                    original_value = options[option]
                    options[option] = arg_value
                    LOGGER.debug(f"Updated config config[{section}][{option}] : {original_value} > {arg_value} ")
    if "base_dir" in config.keys():
        config["base_dir"] = convert_path(config["base_dir"])
    if "output_dir" in config.keys():
        config["output_dir"] = convert_path(config["output_dir"])
    return config


def write_config_with_comments(args: Namespace = None) -> None:
    """
    Write a sample configuration with in-line comments.

    This function is not designed to be used interactively but can be, just call it without any arguments and it will
    write a configuration to './config.yaml'.

    Parameters
    ----------
    args : Namespace
        A Namespace object parsed from argparse with values for 'filename' and 'output_dir'.
    """
    output_dir = Path("./") if args is None or args.output_dir is None else Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    filename = "config.yaml" if args is None or args.filename is None else args.filename
    config = get_data(package="lans2py", resource="default_config.yaml")

    if ".yaml" not in str(filename) and ".yml" not in str(filename):
        config_path = output_dir / f"{filename}.yaml"
    else:
        config_path = output_dir / filename

    with config_path.open("w", encoding="utf-8") as f:
        f.write(f"# Config file generated {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"{CONFIG_DOCUMENTATION_REFERENCE}")
        f.write(config.decode("utf-8"))

    LOGGER.info(f"A sample configuration has been written to : {str(config_path)}")
