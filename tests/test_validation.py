"""Test validation function."""

from contextlib import nullcontext as does_not_raise
from copy import deepcopy
from pathlib import Path
from pkgutil import get_data

import pytest
import yaml
from schema import Or, Schema, SchemaError

from lans2py.config import update_config
from lans2py.validation import DEFAULT_CONFIG_SCHEMA, validate_config

TEST_SCHEMA = Schema(
    {
        "a": Path,
        "b": Or("aa", "bb", error="Invalid value in config, valid values are 'aa' or 'bb"),
        "positive_integer": lambda n: 0 < n,
        "absolute_threshold": Or(int, float, error="Invalid value in config should be type int or float"),
    }
)

DEFAULT_CONFIG = update_config(yaml.full_load(get_data(package="lans2py", resource="default_config.yaml")), {})


@pytest.mark.parametrize(
    ("config", "expectation"),
    [
        # A valid configuration
        ({"a": Path(), "b": "aa", "positive_integer": 4, "absolute_threshold": 10.0}, does_not_raise()),
        # Invalid value for a (string instead of Path)
        ({"a": "path", "b": "aa", "positive_integer": 4, "absolute_threshold": 10.0}, pytest.raises(SchemaError)),
        # Invalid value for b (int instead of str)
        ({"a": Path(), "b": 3, "positive_integer": 4, "absolute_threshold": 10.0}, pytest.raises(SchemaError)),
        # Invalid value for positive_integer (-ve instead +ve)
        ({"a": Path(), "b": "aa", "positive_integer": -4, "absolute_threshold": 10.0}, pytest.raises(SchemaError)),
        # Invalid value for absolute_threshold (str instead of int/float)
        ({"a": Path(), "b": "aa", "positive_integer": 4, "absolute_threshold": "five"}, pytest.raises(SchemaError)),
    ],
)
def test_validate(config, expectation) -> None:
    """Test various configurations."""
    with expectation:
        validate_config(config, schema=TEST_SCHEMA, config_type="Test YAML")


def test_validate_default_config() -> None:
    """The shipped configuration passes validation."""
    validate_config(DEFAULT_CONFIG, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")


@pytest.mark.parametrize(
    ("section", "option", "value", "expectation"),
    [
        pytest.param(None, "log_level", "verbose", pytest.raises(SchemaError), id="unknown log level"),
        pytest.param(None, "cores", 0, pytest.raises(SchemaError), id="no cores"),
        pytest.param(None, "file_ext", ".xlsx", pytest.raises(SchemaError), id="unsupported extension"),
        pytest.param("loading", "separator", ";", does_not_raise(), id="semicolon separator"),
        pytest.param("borders", "reference_variable", "12C", does_not_raise(), id="reference variable"),
        pytest.param("borders", "reference_variable", 12, pytest.raises(SchemaError), id="numeric reference variable"),
        pytest.param("borders", "require_identical_footprints", "yes", pytest.raises(SchemaError), id="footprints str"),
        pytest.param("maps", "color_scale", ["black"], pytest.raises(SchemaError), id="one colour"),
        pytest.param("maps", "color_scale", ["navy", "gold"], does_not_raise(), id="two colours"),
        pytest.param("maps", "roi_marker_size", -1.0, pytest.raises(SchemaError), id="negative marker size"),
        pytest.param("maps", "savefig_format", "jpg", pytest.raises(SchemaError), id="unsupported format"),
        pytest.param("maps", "cmap", "lans_hot", does_not_raise(), id="named colormap"),
        pytest.param("maps", "cmap", 3, pytest.raises(SchemaError), id="numeric colormap"),
        pytest.param("maps", "savefig_dpi", "figure", does_not_raise(), id="figure dpi"),
        pytest.param("maps", "savefig_dpi", 0, pytest.raises(SchemaError), id="zero dpi"),
        pytest.param("calculations", "sums", [["12C", "13C", "14N"]], does_not_raise(), id="sum of three"),
        pytest.param("calculations", "sums", [["12C"]], pytest.raises(SchemaError), id="sum of one"),
        pytest.param("calculations", "ratios", [["13C", "12C"]], does_not_raise(), id="ratio pair"),
        pytest.param("calculations", "ratios", [["13C", "12C", "14N"]], pytest.raises(SchemaError), id="ratio triple"),
        pytest.param("calculations", "abundances", [["15N"]], pytest.raises(SchemaError), id="abundance single"),
    ],
)
def test_validate_default_config_options(section: str, option: str, value, expectation) -> None:
    """Invalid options in the configuration are rejected."""
    config = deepcopy(DEFAULT_CONFIG)
    if section is None:
        config[option] = value
    else:
        config[section][option] = value
    with expectation:
        validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")
