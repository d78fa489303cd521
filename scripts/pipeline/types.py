from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Protocol

METHOD_STATUS_APPLIED = "applied"
METHOD_STATUS_NO_MATCH = "no_match"
METHOD_STATUS_UNSUPPORTED = "unsupported"
METHOD_STATUS_TYPE_ERROR = "type_error"


@dataclass(frozen=True)
class DeclaredMethod:
    """One native method as reported by the external scanner."""

    qualified_name: str
    argument_types: tuple[str, ...]
    return_type: str
    is_static: bool = False


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    data_type: Any


class DiscoveredFunction(Protocol):
    """Host-owned function handle; read and updated, never created."""

    @property
    def name(self) -> str: ...

    @property
    def comment(self) -> str | None: ...

    @property
    def parameter_count(self) -> int: ...

    def replace_signature(self, parameters: list[ParameterSpec], return_type: Any) -> None: ...

    def set_parameter(self, index: int, name: str, data_type: Any) -> None: ...

    def set_return_type(self, data_type: Any) -> None: ...


class FunctionStore(Protocol):
    def iter_functions(self) -> Iterator[DiscoveredFunction]: ...


class TypeResolver(Protocol):
    def resolve(self, type_name: str) -> Any: ...


@dataclass
class FunctionInventory:
    """Functions enumerated once per pass, before any declared method is matched."""

    index: dict[str, DiscoveredFunction] = field(default_factory=dict)
    ignored: list[str] = field(default_factory=list)
    onload: list[DiscoveredFunction] = field(default_factory=list)


@dataclass(frozen=True)
class MethodOutcome:
    qualified_name: str
    candidate_name: str | None
    status: str
    parameter_count: int | None = None
    detail: str | None = None


@dataclass
class PassReport:
    indexed: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)
    onload_modified: list[str] = field(default_factory=list)
    outcomes: list[MethodOutcome] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    def summary(self) -> dict[str, Any]:
        return {
            "indexed_count": len(self.indexed),
            "ignored_count": len(self.ignored),
            "onload_modified_count": len(self.onload_modified),
            "method_count": len(self.outcomes),
            "applied_count": self.count(METHOD_STATUS_APPLIED),
            "no_match_count": self.count(METHOD_STATUS_NO_MATCH),
            "unsupported_count": self.count(METHOD_STATUS_UNSUPPORTED),
            "type_error_count": self.count(METHOD_STATUS_TYPE_ERROR),
        }
