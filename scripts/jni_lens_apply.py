# JNI Lens: apply JNI signatures from FindNativeJNIMethods output.
#@author
#@category JNI
#@menupath Tools.JNI Lens.Apply JNI Signatures
#@toolbar

import os
import sys
import traceback

try:
    script_dir = os.path.dirname(os.path.abspath(__file__))
except Exception:
    script_dir = None
if script_dir and script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from applicator import apply_jni_signatures
from collectors.methods import load_declared_methods
from ghidra_catalog import GhidraTypeCatalog, open_jni_archive
from ghidra_program import GhidraFunctionStore
from jni_cli import parse_args, print_usage
from jni_config import ERROR_FILENAME
from outputs.report import write_report
from ghidra.util import SystemUtilities


def _data_type_manager_service():
    try:
        tool = state.getTool()  # noqa: F821 - provided by GhidraScript runtime
    except Exception:
        tool = None
    if tool is None:
        return None
    from ghidra.app.services import DataTypeManagerService

    return tool.getService(DataTypeManagerService)


def run_pass(program, methods_path, options):
    print("[+] Import jni_all.h...")
    service = _data_type_manager_service()
    manager = open_jni_archive(service, options.get("archive"))
    try:
        methods = load_declared_methods(methods_path)
        report = apply_jni_signatures(
            methods,
            GhidraFunctionStore(program),
            GhidraTypeCatalog(manager),
            on_type_error=options["on_type_error"],
        )
    finally:
        # Archives opened without the tool service are owned by this script.
        if service is None:
            try:
                manager.close()
            except Exception:
                pass

    report_dir = options.get("report_dir")
    if report_dir:
        report_path = write_report(
            report_dir,
            report,
            program_name=str(program.getName()),
            methods_path=methods_path,
        )
        print("Report written: %s" % report_path)
    return report


def main():
    args = getScriptArgs()  # noqa: F821 - provided by GhidraScript runtime
    methods_path, options, show_help = parse_args(list(args))
    if show_help:
        print_usage()
        return
    if methods_path is None:
        if SystemUtilities.isInHeadlessMode():
            print("Methods file required in headless mode.")
            print_usage()
            return
        methods_path = askFile(  # noqa: F821 - provided by GhidraScript runtime
            "Select method argument file", "Open"
        ).getAbsolutePath()
    try:
        run_pass(currentProgram, methods_path, options)  # noqa: F821
    except Exception:
        report_dir = options.get("report_dir")
        if report_dir:
            error_path = os.path.join(report_dir, ERROR_FILENAME)
            try:
                os.makedirs(report_dir, exist_ok=True)
                with open(error_path, "w", encoding="utf-8") as handle:
                    handle.write(traceback.format_exc())
            except Exception:
                pass
            print("JNI Lens signature pass failed; see %s" % error_path)
        else:
            print("JNI Lens signature pass failed")
        raise
    print("JNI Lens signature pass complete")


main()
