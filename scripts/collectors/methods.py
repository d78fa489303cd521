"""Declared native method list loader.

Reads the JSON written by the Java-side scanner:

    {"methods": [{"methodName": "com.example.Foo.bar",
                  "argumentTypes": ["jint"],
                  "returnType": "jboolean",
                  "isStatic": false}]}
"""

from __future__ import annotations

import json
import os
from typing import Any

from jni_errors import MethodsFileError
from pipeline.types import DeclaredMethod


def _require_str(entry: dict[str, Any], key: str, position: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise MethodsFileError(f"methods[{position}] missing string field {key!r}")
    return value


def parse_declared_method(entry: Any, position: int = 0) -> DeclaredMethod:
    if not isinstance(entry, dict):
        raise MethodsFileError(f"methods[{position}] is not an object")
    method_name = _require_str(entry, "methodName", position)
    return_type = _require_str(entry, "returnType", position)
    argument_types = entry.get("argumentTypes")
    if argument_types is None:
        argument_types = []
    if not isinstance(argument_types, list) or not all(
        isinstance(item, str) for item in argument_types
    ):
        raise MethodsFileError(f"methods[{position}].argumentTypes must be a list of strings")
    is_static = entry.get("isStatic")
    if is_static is None:
        is_static = False
    if not isinstance(is_static, bool):
        raise MethodsFileError(f"methods[{position}].isStatic must be a boolean")
    return DeclaredMethod(
        qualified_name=method_name,
        argument_types=tuple(argument_types),
        return_type=return_type,
        is_static=is_static,
    )


def parse_declared_methods(payload: Any) -> list[DeclaredMethod]:
    if not isinstance(payload, dict):
        raise MethodsFileError("methods file root must be a JSON object")
    entries = payload.get("methods")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise MethodsFileError("'methods' must be a list")
    return [parse_declared_method(entry, position) for position, entry in enumerate(entries)]


def load_declared_methods(path: str | os.PathLike[str]) -> list[DeclaredMethod]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise MethodsFileError(f"cannot read methods file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MethodsFileError(f"invalid JSON in methods file {path}: {exc}") from exc
    return parse_declared_methods(payload)
