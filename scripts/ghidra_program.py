"""Ghidra `Program` adapter for the JNI signature pass.

Wraps `ghidra.program.model.listing.Function` objects behind the small
`DiscoveredFunction` surface the pass uses. Ghidra classes are imported lazily
so the pass itself can be exercised without a Ghidra install.
"""

from __future__ import annotations

from typing import Any, Iterator

from pipeline.types import ParameterSpec


class GhidraFunction:
    def __init__(self, function: Any, program: Any):
        self._function = function
        self._program = program

    @property
    def name(self) -> str:
        return str(self._function.getName())

    @property
    def comment(self) -> str | None:
        comment = self._function.getComment()
        if comment is None:
            return None
        return str(comment)

    @property
    def parameter_count(self) -> int:
        return int(self._function.getParameterCount())

    def replace_signature(self, parameters: list[ParameterSpec], return_type: Any) -> None:
        from ghidra.program.model.listing import Function, ParameterImpl, ReturnParameterImpl
        from ghidra.program.model.symbol import SourceType

        ghidra_params = [
            ParameterImpl(param.name, param.data_type, self._program, SourceType.USER_DEFINED)
            for param in parameters
        ]
        return_param = ReturnParameterImpl(return_type, self._program)
        # Storage is derived from the new formal parameter types, not kept from before.
        self._function.updateFunction(
            None,
            return_param,
            Function.FunctionUpdateType.DYNAMIC_STORAGE_FORMAL_PARAMS,
            True,
            SourceType.USER_DEFINED,
            ghidra_params,
        )

    def set_parameter(self, index: int, name: str, data_type: Any) -> None:
        from ghidra.program.model.symbol import SourceType

        param = self._function.getParameter(index)
        param.setName(name, SourceType.USER_DEFINED)
        param.setDataType(data_type, SourceType.USER_DEFINED)

    def set_return_type(self, data_type: Any) -> None:
        from ghidra.program.model.symbol import SourceType

        self._function.setReturnType(data_type, SourceType.USER_DEFINED)


class GhidraFunctionStore:
    """Function store over a Ghidra program, iterated in address order."""

    def __init__(self, program: Any):
        self.program = program

    def iter_functions(self) -> Iterator[GhidraFunction]:
        func_manager = self.program.getFunctionManager()
        for function in func_manager.getFunctions(True):
            yield GhidraFunction(function, self.program)
