"""Tests for the headless wrapper's argument handling."""

import pytest

from jni_lens_cli import parse_cli_args


def test_binary_and_methods():
    binary, methods, out_dir, analyze, script_args = parse_cli_args(["libfoo.so", "m.json"])
    assert (binary, methods, out_dir, analyze, script_args) == ("libfoo.so", "m.json", "out", True, [])


def test_output_and_passthrough_options():
    parsed = parse_cli_args(["-o", "build", "libfoo.so", "m.json", "analyze=0", "on_type_error=skip"])
    assert parsed == ("libfoo.so", "m.json", "build", False, ["on_type_error=skip"])


def test_missing_methods_file_exits():
    with pytest.raises(SystemExit) as excinfo:
        parse_cli_args(["libfoo.so"])
    assert excinfo.value.code == 1


def test_help_exits_zero():
    with pytest.raises(SystemExit) as excinfo:
        parse_cli_args(["--help"])
    assert excinfo.value.code == 0
