"""Pass report payloads.

`report.json` carries the summary counts and function lists; per-method
outcomes are also written as the `jni_methods` Parquet fact table so larger
runs can be queried without re-running Ghidra. `facts/index.json` describes
that table for `tools/check_report.py`.

JSON formatting (indentation, sorted keys, ASCII escaping) is kept stable so
reports from repeated passes diff cleanly.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from jni_config import (
    JNI_LENS_VERSION,
    METHOD_FACTS_TABLE,
    REPORT_FILENAME,
    REPORT_SCHEMA_VERSION,
)
from pipeline.types import PassReport

METHOD_FACT_SCHEMA = pa.schema(
    [
        pa.field("method_index", pa.int64(), nullable=False),
        pa.field("qualified_name", pa.string(), nullable=False),
        pa.field("candidate_name", pa.string()),
        pa.field("status", pa.string(), nullable=False),
        pa.field("parameter_count", pa.int64()),
        pa.field("detail", pa.string()),
    ]
)
METHOD_FACTS_PATH = f"facts/{METHOD_FACTS_TABLE}.parquet"
FACTS_INDEX_PATH = "facts/index.json"


def _write_json(path: Path, obj: Any) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=True))
        handle.write("\n")


def build_method_rows(report: PassReport) -> list[dict[str, Any]]:
    rows = []
    for idx, outcome in enumerate(report.outcomes):
        rows.append(
            {
                "method_index": idx,
                "qualified_name": outcome.qualified_name,
                "candidate_name": outcome.candidate_name,
                "status": outcome.status,
                "parameter_count": outcome.parameter_count,
                "detail": outcome.detail,
            }
        )
    return rows


def build_method_facts(report: PassReport) -> pa.Table:
    return pa.Table.from_pylist(build_method_rows(report), schema=METHOD_FACT_SCHEMA)


def build_facts_index(table: pa.Table) -> dict[str, Any]:
    return {
        "schema": {"name": "jni_lens_facts", "version": REPORT_SCHEMA_VERSION},
        "tables": [
            {
                "name": METHOD_FACTS_TABLE,
                "primary_key": ["method_index"],
                "paths": [METHOD_FACTS_PATH],
                "schema": [
                    {"name": field.name, "type": str(field.type)}
                    for field in table.schema
                ],
                "row_count": table.num_rows,
                "description": "One row per declared native method, in methods-file order.",
            }
        ],
    }


def build_report_payload(
    report: PassReport,
    *,
    program_name: str | None = None,
    methods_path: str | None = None,
) -> dict[str, Any]:
    return {
        "schema": {"name": "jni_lens_report", "version": REPORT_SCHEMA_VERSION},
        "tool_version": JNI_LENS_VERSION,
        "program_name": program_name,
        "methods_path": methods_path,
        "summary": report.summary(),
        "indexed": list(report.indexed),
        "ignored": list(report.ignored),
        "onload_modified": list(report.onload_modified),
        "outcomes": build_method_rows(report),
        "facts_ref": FACTS_INDEX_PATH,
    }


def write_report(
    report_root: str | os.PathLike[str],
    report: PassReport,
    *,
    program_name: str | None = None,
    methods_path: str | None = None,
) -> Path:
    root = Path(report_root)
    os.makedirs(root / "facts", exist_ok=True)

    table = build_method_facts(report)
    pq.write_table(table, root / METHOD_FACTS_PATH)
    _write_json(root / FACTS_INDEX_PATH, build_facts_index(table))

    report_path = root / REPORT_FILENAME
    _write_json(
        report_path,
        build_report_payload(report, program_name=program_name, methods_path=methods_path),
    )
    return report_path
