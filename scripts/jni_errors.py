"""Exception types raised by the JNI signature pass.

Per-method conditions (`UnsupportedMangling`, and `TypeResolutionError` under the
`skip` policy) are recovered inside the sweep. Setup failures (`MethodsFileError`,
`CatalogSetupError`) are raised before any function is touched.
"""

from __future__ import annotations


class JniLensError(Exception):
    pass


class UnsupportedMangling(JniLensError):
    """Raised when a symbol name would need an overload signature suffix."""

    def __init__(self, qualified_name: str):
        super().__init__(f"overloaded native method not supported: {qualified_name}")
        self.qualified_name = qualified_name


class TypeResolutionError(JniLensError):
    def __init__(self, type_name: str, path: str | None = None):
        where = f" ({path})" if path else ""
        super().__init__(f"type not found in catalog: {type_name}{where}")
        self.type_name = type_name
        self.path = path


class CatalogSetupError(JniLensError):
    pass


class MethodsFileError(JniLensError):
    pass
