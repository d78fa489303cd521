"""JNI type catalog access.

`open_jni_archive` is the explicit setup step: it returns the `jni_all` data
type manager (already open in the tool, or opened from `jni_all.gdt`) and
`GhidraTypeCatalog` resolves type names against it for the pass.
"""

from __future__ import annotations

import os
from typing import Any

from jni_config import (
    JNI_ARCHIVE_FILE,
    JNI_ARCHIVE_MODULE,
    JNI_ARCHIVE_NAME,
    JNI_HEADER_CATEGORY,
)
from jni_errors import CatalogSetupError, TypeResolutionError


def type_path(type_name: str) -> str:
    return f"{JNI_HEADER_CATEGORY}/{type_name}"


class GhidraTypeCatalog:
    def __init__(self, manager: Any):
        self.manager = manager
        self._cache: dict[str, Any] = {}

    def resolve(self, type_name: str) -> Any:
        cached = self._cache.get(type_name)
        if cached is not None:
            return cached
        path = type_path(type_name)
        data_type = self.manager.getDataType(path)
        if data_type is None:
            raise TypeResolutionError(type_name, path)
        self._cache[type_name] = data_type
        return data_type


def find_open_archive(service: Any, name: str = JNI_ARCHIVE_NAME) -> Any | None:
    if service is None:
        return None
    try:
        managers = list(service.getDataTypeManagers())
    except Exception:
        return None
    for manager in managers:
        try:
            if str(manager.getName()) == name:
                return manager
        except Exception:
            continue
    return None


def _default_archive_path() -> str:
    from ghidra.framework import Application

    try:
        resource = Application.getModuleDataFile(JNI_ARCHIVE_MODULE, JNI_ARCHIVE_FILE)
    except Exception as exc:
        raise CatalogSetupError(
            f"{JNI_ARCHIVE_FILE} not found in module {JNI_ARCHIVE_MODULE}; pass archive=<path>"
        ) from exc
    return str(resource.getFile(True).getAbsolutePath())


def open_jni_archive(service: Any = None, archive_file: str | None = None) -> Any:
    """Return the `jni_all` DataTypeManager, opening the archive file if needed.

    With a `DataTypeManagerService` (GUI tool) the archive is opened through the
    service so it shows up in the Data Type Manager; headless runs open it
    directly as a `FileDataTypeManager`.
    """

    manager = find_open_archive(service)
    if manager is not None:
        return manager

    path = archive_file or _default_archive_path()
    if not os.path.isfile(path):
        raise CatalogSetupError(f"JNI type archive not found: {path}")

    from java.io import File

    try:
        if service is not None:
            archive = service.openArchive(File(path), False)
            return archive.getDataTypeManager()
        from ghidra.program.model.data import FileDataTypeManager

        return FileDataTypeManager.openFileArchive(File(path), False)
    except Exception as exc:
        raise CatalogSetupError(f"Failed to open JNI type archive {path}: {exc}") from exc
