"""Argument parsing helpers for the JNI signature script.

Ghidra scripts receive a flat list of strings. The script supports:
- `-h/--help` to print usage
- a positional methods file (output of FindNativeJNIMethods)
- `key=value` overrides (`methods`, `report_dir`, `archive`, `on_type_error`)
"""

from __future__ import annotations

from typing import Any

from jni_config import DEFAULT_TYPE_ERROR_POLICY, TYPE_ERROR_POLICIES

PATH_OPTIONS: tuple[str, ...] = ("report_dir", "archive")


def _default_options() -> dict[str, Any]:
    return {
        "report_dir": None,
        "archive": None,
        "on_type_error": DEFAULT_TYPE_ERROR_POLICY,
    }


def parse_args(args: list[str]) -> tuple[str | None, dict[str, Any], bool]:
    options = _default_options()
    methods_path: str | None = None
    show_help = False

    for arg in args:
        if arg in ("-h", "--help"):
            show_help = True
            continue
        if "=" in arg:
            key, value = arg.split("=", 1)
            value = (value or "").strip()
            if key == "methods":
                methods_path = value or None
                continue
            if key in PATH_OPTIONS:
                options[key] = value or None
                continue
            if key == "on_type_error":
                lowered = value.lower()
                if lowered in TYPE_ERROR_POLICIES:
                    options[key] = lowered
                else:
                    print("Invalid value for %s: %s" % (key, value))
                continue
            print("Unknown option: %s" % key)
        else:
            if methods_path is None:
                methods_path = arg

    return methods_path, options, show_help


def print_usage():
    print("JNI Lens signature applier")
    print("Usage:")
    print("  <script> <methods.json> [key=value ...]")
    print("Options:")
    print("  report_dir=<dir>        write report.json and facts/ under <dir>")
    print("  archive=<jni_all.gdt>   JNI type archive (default: already open or module data)")
    print("  on_type_error=%s" % "|".join(TYPE_ERROR_POLICIES))
