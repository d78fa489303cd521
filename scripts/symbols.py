"""JNI symbol name mangling helpers.

`mangle_native_method_name` re-derives the short `Java_...` symbol a JNI
toolchain emits for a native method, so it can be compared byte-for-byte with
function names already present in the program:

- `_` becomes `_1` (underscore is then free to act as the separator)
- non-ASCII code points become `_0` plus lowercase hex, padded to 4 digits
- `.` separators become `_`, and the result is prefixed with `Java_`

The long (overloaded) form appends `__` plus the mangled argument signature.
It is not derived here; callers get `UnsupportedMangling` instead.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from jni_config import JNI_SYMBOL_PREFIX
from jni_errors import UnsupportedMangling
from pipeline.types import DeclaredMethod


def escape_code_points(value: str) -> str:
    parts: list[str] = []
    # str iteration is by code point, so astral characters are visited once.
    for char in value:
        codepoint = ord(char)
        if codepoint <= 127:
            parts.append(char)
        else:
            # Above 0xFFFF this yields 5-6 digits, which JNI decoders read ambiguously.
            parts.append("_0%04x" % codepoint)
    return "".join(parts)


def mangle_native_method_name(qualified_name: str, *, overloaded: bool = False) -> str:
    if overloaded:
        raise UnsupportedMangling(qualified_name)
    escaped = escape_code_points(qualified_name.replace("_", "_1"))
    return JNI_SYMBOL_PREFIX + "_".join(escaped.split("."))


def find_overloaded_symbols(methods: Iterable[DeclaredMethod]) -> set[str]:
    """Return base symbol names that more than one declared method mangles to.

    Identical qualified names collide, and so can distinct names that only meet
    after escaping (e.g. U+10400 and U+1040 followed by "0").
    """
    counts = Counter(mangle_native_method_name(method.qualified_name) for method in methods)
    return {symbol for symbol, count in counts.items() if count > 1}


def is_jni_symbol(name: str | None) -> bool:
    if not name:
        return False
    return name.startswith(JNI_SYMBOL_PREFIX)
