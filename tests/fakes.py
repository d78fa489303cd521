"""In-memory stand-ins for the Ghidra function store and type catalog."""

from __future__ import annotations

from typing import Any, Iterable

from jni_errors import TypeResolutionError
from pipeline.types import ParameterSpec

JNI_TYPES = (
    "JNIEnv *",
    "JavaVM *",
    "jobject",
    "jclass",
    "jstring",
    "jint",
    "jlong",
    "jboolean",
    "jbyteArray",
    "void",
)


class FakeFunction:
    def __init__(self, name, comment=None, parameters=None, return_type="undefined"):
        self.name = name
        self.comment = comment
        self.parameters: list[tuple[str, Any]] = list(parameters or [])
        self.return_type = return_type
        self.update_count = 0

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    def replace_signature(self, parameters: list[ParameterSpec], return_type: Any) -> None:
        self.parameters = [(param.name, param.data_type) for param in parameters]
        self.return_type = return_type
        self.update_count += 1

    def set_parameter(self, index: int, name: str, data_type: Any) -> None:
        self.parameters[index] = (name, data_type)
        self.update_count += 1

    def set_return_type(self, data_type: Any) -> None:
        self.return_type = data_type
        self.update_count += 1

    def signature(self):
        return list(self.parameters), self.return_type


class FakeFunctionStore:
    def __init__(self, functions: Iterable[FakeFunction]):
        self.functions = list(functions)

    def iter_functions(self):
        return iter(self.functions)

    def by_name(self, name):
        for function in self.functions:
            if function.name == name:
                return function
        raise KeyError(name)


class FakeTypeCatalog:
    """Resolves type names to themselves, like a catalog of opaque descriptors."""

    def __init__(self, names: Iterable[str] = JNI_TYPES):
        self.names = set(names)
        self.lookups: list[str] = []

    def resolve(self, type_name: str) -> Any:
        self.lookups.append(type_name)
        if type_name not in self.names:
            raise TypeResolutionError(type_name, f"/jni_all.h/{type_name}")
        return type_name
