#!/usr/bin/env python3
"""Check a jni_lens report directory for internal consistency.

Validates that report.json parses, that the summary counts agree with the
outcome list, and that the facts/ tables referenced by facts/index.json exist
and carry the same rows, without invoking Ghidra.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any

STATUS_COUNT_KEYS = {
    "applied": "applied_count",
    "no_match": "no_match_count",
    "unsupported": "unsupported_count",
    "type_error": "type_error_count",
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "report",
        type=Path,
        help="Path to a report directory or the jni_lens output directory containing report/",
    )
    return parser.parse_args(argv)


def resolve_report_root(path: Path) -> Path:
    if path.is_dir() and (path / "report.json").is_file():
        return path
    candidate = path / "report"
    if candidate.is_dir() and (candidate / "report.json").is_file():
        return candidate
    return path


def check_summary(payload: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    summary = payload.get("summary")
    outcomes = payload.get("outcomes")
    if not isinstance(summary, dict) or not isinstance(outcomes, list):
        return ["report.json missing summary or outcomes"]
    if summary.get("method_count") != len(outcomes):
        errors.append(
            f"method_count {summary.get('method_count')} != {len(outcomes)} outcomes"
        )
    statuses = Counter(entry.get("status") for entry in outcomes if isinstance(entry, dict))
    for status, key in STATUS_COUNT_KEYS.items():
        if summary.get(key) != statuses.get(status, 0):
            errors.append(f"{key} {summary.get(key)} != {statuses.get(status, 0)} {status} outcomes")
    for key, list_key in (("indexed_count", "indexed"), ("ignored_count", "ignored")):
        entries = payload.get(list_key)
        if isinstance(entries, list) and summary.get(key) != len(entries):
            errors.append(f"{key} {summary.get(key)} != {len(entries)} {list_key} entries")
    return errors


def check_facts(report_root: Path, payload: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    facts_index = report_root / "facts" / "index.json"
    if not facts_index.is_file():
        return ["facts/index.json not found"]
    try:
        index_payload = json.loads(facts_index.read_text())
    except json.JSONDecodeError as exc:
        return [f"facts/index.json: {exc}"]
    tables = index_payload.get("tables") if isinstance(index_payload, dict) else None
    if not isinstance(tables, list):
        return ["facts/index.json missing tables list"]

    import pyarrow.parquet as pq

    for table in tables:
        if not isinstance(table, dict):
            continue
        for path in table.get("paths") or []:
            table_path = report_root / path
            if not table_path.is_file():
                errors.append(f"missing fact table {path}")
                continue
            rows = pq.read_table(table_path).to_pylist()
            if len(rows) != table.get("row_count"):
                errors.append(f"{path}: {len(rows)} rows != row_count {table.get('row_count')}")
            if table.get("name") == "jni_methods" and rows != payload.get("outcomes"):
                errors.append(f"{path}: rows differ from report.json outcomes")
    return errors


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    report_root = resolve_report_root(args.report)
    report_path = report_root / "report.json"
    if not report_path.is_file():
        print(f"report.json not found under: {report_root}", file=sys.stderr)
        return 2
    try:
        payload = json.loads(report_path.read_text())
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON: {report_path}: {exc}", file=sys.stderr)
        return 1

    errors = check_summary(payload) + check_facts(report_root, payload)
    if errors:
        print("Report check failed:", file=sys.stderr)
        for entry in errors:
            print(f"- {entry}", file=sys.stderr)
        return 1
    print(f"Report ok: {report_root}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
