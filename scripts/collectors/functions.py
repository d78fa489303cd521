"""JNI function enumeration.

Walks the program's functions once and sorts them into the name index used for
matching, the analyst-ignored list, and `JNI_OnLoad` entry points.
"""

from __future__ import annotations

from jni_config import IGNORE_MARKER, JNI_ONLOAD_NAME
from pipeline.types import FunctionInventory, FunctionStore
from symbols import is_jni_symbol


def is_ignored_comment(comment: str | None) -> bool:
    if not comment:
        return False
    return IGNORE_MARKER in comment


def collect_jni_functions(store: FunctionStore) -> FunctionInventory:
    inventory = FunctionInventory()
    for function in store.iter_functions():
        name = function.name
        if is_jni_symbol(name):
            if is_ignored_comment(function.comment):
                inventory.ignored.append(name)
            else:
                inventory.index[name] = function
        elif name == JNI_ONLOAD_NAME:
            inventory.onload.append(function)
    return inventory
