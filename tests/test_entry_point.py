"""Test the entry point of lans2py and its ability to correctly direct to programs."""

from collections.abc import Callable
from pathlib import Path

import pytest

from lans2py import run_modules
from lans2py.config import write_config_with_comments
from lans2py.entry_point import _str_to_bool, entry_point


# Test "help" arguments
@pytest.mark.parametrize("option", [("-h"), ("--help")])
def test_entry_point_help(capsys, option) -> None:
    """Test the help argument of the general entry point."""
    try:
        entry_point(manually_provided_args=[option])
    except SystemExit:
        pass
    output = capsys.readouterr().out

    assert "usage:" in output
    assert "program" in output


@pytest.mark.parametrize(
    (("argument", "option")),
    [
        ("borders", "-h"),
        ("borders", "--help"),
        ("maps", "-h"),
        ("maps", "--help"),
        ("calculate", "-h"),
        ("calculate", "--help"),
        ("create-config", "-h"),
        ("create-config", "--help"),
    ],
)
def test_entry_point_subprocess_help(capsys, argument: str, option: str) -> None:
    """Test the help argument to the master and sub entry points."""
    try:
        entry_point(manually_provided_args=[argument, option])
    except SystemExit:
        pass
    output = capsys.readouterr().out

    assert "usage:" in output
    assert argument in output


def test_entry_point_no_program(capsys) -> None:
    """Test help is printed and the programme exits when no program is given."""
    with pytest.raises(SystemExit):
        entry_point(manually_provided_args=[])
    assert "usage:" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("options", "expected_function", "expected_args"),
    [
        pytest.param(
            ["-b", "./maps", "-j", "1", "borders", "--reference-variable", "12C"],
            run_modules.borders,
            {"base_dir": Path("./maps"), "cores": 1, "borders_reference_variable": "12C"},
            id="borders with reference variable",
        ),
        pytest.param(
            ["borders", "--require-identical-footprints", "false"],
            run_modules.borders,
            {"borders_require_identical_footprints": False},
            id="borders without footprint check",
        ),
        pytest.param(
            ["--separator", ";", "maps", "--draw-rois", "no", "--color-scale", "navy", "gold"],
            run_modules.maps,
            {"loading_separator": ";", "maps_draw_rois": False, "maps_color_scale": ["navy", "gold"]},
            id="maps options",
        ),
        pytest.param(
            ["maps", "--savefig-format", "pdf", "--savefig-dpi", "300"],
            run_modules.maps,
            {"maps_savefig_format": "pdf", "maps_savefig_dpi": 300},
            id="maps saving options",
        ),
        pytest.param(
            ["maps", "--require-identical-footprints", "false", "--cmap", "lans_hot"],
            run_modules.maps,
            {"borders_require_identical_footprints": False, "maps_cmap": "lans_hot"},
            id="maps footprints and colormap",
        ),
        pytest.param(
            ["calculate", "--sum", "12C", "13C", "--ratio", "13C", "12C", "--ratio", "15N", "14N", "--percent", "true"],
            run_modules.calculate,
            {
                "calculations_sums": [["12C", "13C"]],
                "calculations_ratios": [["13C", "12C"], ["15N", "14N"]],
                "calculations_abundances": None,
                "calculations_percent": True,
            },
            id="calculate options",
        ),
        pytest.param(
            ["create-config", "--filename", "dummy/path/config.yaml"],
            write_config_with_comments,
            {"filename": Path("dummy/path/config.yaml"), "output_dir": "./"},
            id="create config",
        ),
    ],
)
def test_entry_point(options: list, expected_function: Callable, expected_args: dict) -> None:
    """Test the entry point maps options to arguments and the function to run."""
    returned_args = entry_point(options, testing=True)
    assert returned_args.func == expected_function
    for argument, value in expected_args.items():
        assert getattr(returned_args, argument) == value


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        pytest.param("True", True, id="True"),
        pytest.param("yes", True, id="yes"),
        pytest.param("0", False, id="0"),
        pytest.param("false", False, id="false"),
    ],
)
def test_str_to_bool(value: str, expected: bool) -> None:
    """Test conversion of command line strings to booleans."""
    assert _str_to_bool(value) is expected


def test_str_to_bool_invalid(capsys) -> None:
    """Test an invalid boolean is rejected by the parser."""
    with pytest.raises(SystemExit):
        entry_point(["maps", "--normalize", "maybe"], testing=True)
    assert "Boolean value expected, got 'maybe'" in capsys.readouterr().err
