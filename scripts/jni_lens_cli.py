#!/usr/bin/env python
import os
import shutil
import sys
from pathlib import Path

from jni_config import ERROR_FILENAME, REPORT_FILENAME


def usage(exit_code=1):
    print("Usage:", file=sys.stderr)
    print("  jni_lens <binary> <methods.json> [-o <output_dir>] [key=value ...]", file=sys.stderr)
    print("Options (key=value):", file=sys.stderr)
    print("  analyze=0|1            run Ghidra auto-analysis before the pass (default 1)", file=sys.stderr)
    print("  archive=<jni_all.gdt>  JNI type archive", file=sys.stderr)
    print("  on_type_error=abort|skip", file=sys.stderr)
    print("Default output dir: out", file=sys.stderr)
    raise SystemExit(exit_code)


def parse_cli_args(argv):
    binary_path = None
    methods_path = None
    out_dir = "out"
    analyze = True
    script_args = []
    idx = 0
    count = len(argv)
    while idx < count:
        arg = argv[idx]
        idx += 1
        if arg in ("-h", "--help"):
            usage(0)
        if arg in ("-o", "--output"):
            if idx >= count:
                print("Missing value for -o/--output.", file=sys.stderr)
                usage(1)
            out_dir = argv[idx]
            idx += 1
            continue
        if "=" in arg:
            key, value = arg.split("=", 1)
            if key == "analyze":
                analyze = value.strip().lower() in ("1", "true", "yes", "on")
                continue
            script_args.append(arg)
            continue
        if binary_path is None:
            binary_path = arg
        elif methods_path is None:
            methods_path = arg
        else:
            print(f"Unexpected argument: {arg}", file=sys.stderr)
            usage(1)
    if not binary_path or not methods_path:
        usage(1)
    return binary_path, methods_path, out_dir, analyze, script_args


def resolve_binary(binary_path):
    binary_file = Path(binary_path)
    if binary_file.is_file():
        return binary_file
    resolved = shutil.which(binary_path)
    if resolved:
        resolved_path = Path(resolved)
        if resolved_path.is_file():
            return resolved_path
    print(f"Binary not found: {binary_path}", file=sys.stderr)
    print("Hint: provide a full path to the native library.", file=sys.stderr)
    raise SystemExit(1)


def main(argv):
    binary_path, methods_path, out_dir, analyze, script_args = parse_cli_args(argv)
    binary_file = resolve_binary(binary_path)
    methods_file = Path(methods_path)
    if not methods_file.is_file():
        print(f"Methods file not found: {methods_path}", file=sys.stderr)
        raise SystemExit(1)

    install_dir = os.environ.get("GHIDRA_INSTALL_DIR")
    if not install_dir:
        print("GHIDRA_INSTALL_DIR is not set; point it at a Ghidra install.", file=sys.stderr)
        raise SystemExit(1)

    from pyghidra import core as pyghidra_core

    script_path = Path(__file__).resolve().parent / "jni_lens_apply.py"
    if not script_path.is_file():
        print(f"Could not locate {script_path}.", file=sys.stderr)
        raise SystemExit(1)

    # Ghidra's ProjectLocator requires an absolute path.
    out_dir_path = Path(out_dir).resolve()
    project_dir = out_dir_path / "ghidra_project"
    report_dir = out_dir_path / "report"
    out_dir_path.mkdir(parents=True, exist_ok=True)
    for path in (report_dir / REPORT_FILENAME, report_dir / ERROR_FILENAME):
        try:
            path.unlink()
        except FileNotFoundError:
            pass

    with pyghidra_core._flat_api(
        str(binary_file),
        str(project_dir),
        binary_file.stem,
        analyze=analyze,
        program_name=binary_file.name,
        nested_project_location=False,
        install_dir=Path(install_dir),
    ) as script:
        script.run(
            str(script_path),
            [str(methods_file.resolve()), f"report_dir={report_dir}"] + script_args,
        )

    error_path = report_dir / ERROR_FILENAME
    if error_path.is_file():
        print(f"JNI Lens pass failed; see {error_path}", file=sys.stderr)
        raise SystemExit(1)
    if not (report_dir / REPORT_FILENAME).is_file():
        print(f"JNI Lens pass failed; missing {report_dir / REPORT_FILENAME}", file=sys.stderr)
        raise SystemExit(1)
    print(f"JNI Lens report: {report_dir / REPORT_FILENAME}")


def cli():
    main(sys.argv[1:])


if __name__ == "__main__":
    cli()
