"""Functions for reading and writing data."""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd
from ruamel.yaml import YAML, YAMLError

from lans2py import CONFIG_DOCUMENTATION_REFERENCE, __version__
from lans2py.logs.logs import LOGGER_NAME

LOGGER = logging.getLogger(LOGGER_NAME)

SEPARATORS = {".csv": ",", ".tsv": "\t", ".txt": "\t", ".dat": r"\s+"}


def read_yaml(filename: str | Path) -> dict:
    """
    Read a YAML file.

    Parameters
    ----------
    filename : Union[str, Path]
        YAML file to read.

    Returns
    -------
    Dict
        Dictionary of the file.
    """
    with Path(filename).open(encoding="utf-8") as f:
        try:
            yaml_file = YAML(typ="safe")
            return yaml_file.load(f)
        except YAMLError as exception:
            LOGGER.error(exception)
            return {}


def get_date_time() -> str:
    """
    Get a date and time for adding to generated files or logging.

    Returns
    -------
    str
        A string of the current date and time, formatted appropriately.
    """
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def write_yaml(
    config: dict,
    output_dir: str | Path,
    config_file: str = "config.yaml",
    header_message: str = None,
) -> None:
    """
    Write a configuration (stored as a dictionary) to a YAML file.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    output_dir : Union[str, Path]
        Path to save the dictionary to as a YAML file (it will be called 'config.yaml').
    config_file : str
        Filename to write to.
    header_message : str
        String to write to the header message of the YAML file.
    """
    output_config = Path(output_dir) / config_file
    # Revert PosixPath items to string
    config = path_to_str(config)

    if header_message:
        header = f"# {header_message} : {get_date_time()}\n" + CONFIG_DOCUMENTATION_REFERENCE
    else:
        header = f"# Configuration from lans2py run completed : {get_date_time()}\n" + CONFIG_DOCUMENTATION_REFERENCE
    header += f"# lans2py version: {__version__}\n"

    output_config.write_text(header, encoding="utf-8")

    yaml = YAML(typ="safe")
    with output_config.open("a", encoding="utf-8") as f:
        try:
            yaml.dump(config, f)
        except YAMLError as exception:
            LOGGER.error(exception)


def path_to_str(config: dict) -> dict:
    """
    Recursively traverse a dictionary and convert any Path() objects to strings for writing to YAML.

    Parameters
    ----------
    config : dict
        Dictionary to be converted.

    Returns
    -------
    Dict:
        The same dictionary with any Path() objects converted to string.
    """
    for key, value in config.items():
        if isinstance(value, dict):
            path_to_str(value)
        elif isinstance(value, Path):
            config[key] = str(value)

    return config


def get_out_path(table_path: Path = None, base_dir: Path = None, output_dir: Path = None) -> Path:
    """
    Add the table path relative to the base directory to the output directory.

    Parameters
    ----------
    table_path : Path
        The path of the current table.
    base_dir : Path
        Directory that was searched for files.
    output_dir : Path
        The output directory specified in the configuration file.

    Returns
    -------
    Path
        The output path that mirrors the input path structure, with a directory named after the file stem.
    """
    # If table_path is relative and doesn't include base_dir then a ValueError is raised, in which
    # case we just want to append the table_path to the output_dir
    try:
        return output_dir / table_path.relative_to(base_dir).parent / table_path.stem
    except ValueError:
        return output_dir / table_path.parent / table_path.stem
    # AttributeError is raised if table_path is a string (since it isn't a Path() object with a .suffix)
    except AttributeError:
        LOGGER.error("A string form of a Path has been passed to 'get_out_path()' for table_path")
        raise


def find_files(base_dir: str | Path = None, file_ext: str = ".csv") -> list:
    """
    Recursively scan the specified directory for files with the given file extension.

    Parameters
    ----------
    base_dir : Union[str, Path]
        Directory to recursively search for files, if not specified the current directory is scanned.
    file_ext : str
        File extension to search for.

    Returns
    -------
    List
        Sorted list of files found with the extension in the given directory.
    """
    base_dir = Path("./") if base_dir is None else Path(base_dir)
    return sorted(base_dir.glob("**/*" + file_ext))


def read_table(filename: str | Path, separator: str | None = None, analysis: str | None = None) -> pd.DataFrame:
    """
    Read a delimited text table of LANS data into a data frame.

    Parameters
    ----------
    filename : str | Path
        File to read.
    separator : str | None
        Column separator, inferred from the file extension when ``None`` (comma for ``.csv``, tab for ``.tsv`` and
        ``.txt``, whitespace for ``.dat``).
    analysis : str | None
        Analysis name to add when the table has no ``analysis`` column, defaults to the file stem.

    Returns
    -------
    pd.DataFrame
        The table.
    """
    filename = Path(filename)
    if separator is None:
        separator = SEPARATORS.get(filename.suffix.lower(), ",")
    try:
        data = pd.read_csv(filename, sep=separator)
    except FileNotFoundError as e:
        LOGGER.error(f"File not found : {filename}")
        raise e
    if "analysis" not in data.columns:
        data.insert(0, "analysis", filename.stem if analysis is None else analysis)
    LOGGER.debug(f"[{filename.stem}] Loaded {len(data)} rows and columns : {list(data.columns)}")
    return data


def write_table(data: pd.DataFrame, output_dir: str | Path, filename: str) -> Path:
    """
    Write a data frame to a CSV file, creating the output directory if required.

    Parameters
    ----------
    data : pd.DataFrame
        Data to write.
    output_dir : str | Path
        Directory to write to.
    filename : str
        Name of the file.

    Returns
    -------
    Path
        Path to the written file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    outfile = output_dir / filename
    data.to_csv(outfile, index=False)
    LOGGER.info(f"Saved {len(data)} rows to : {outfile}")
    return outfile
