"""Tests for the Ghidra function adapter against stub ghidra modules."""

import sys
import types

import pytest

from ghidra_program import GhidraFunction, GhidraFunctionStore
from pipeline.types import ParameterSpec

USER_DEFINED = "USER_DEFINED"
DYNAMIC_STORAGE_FORMAL_PARAMS = "DYNAMIC_STORAGE_FORMAL_PARAMS"


class StubParameterImpl:
    def __init__(self, name, data_type, program, source):
        self.name = name
        self.data_type = data_type
        self.program = program
        self.source = source


class StubReturnParameterImpl:
    def __init__(self, data_type, program):
        self.data_type = data_type
        self.program = program


class StubParameter:
    def __init__(self):
        self.calls = []

    def setName(self, name, source):
        self.calls.append(("setName", name, source))

    def setDataType(self, data_type, source):
        self.calls.append(("setDataType", data_type, source))


class StubFunction:
    def __init__(self, name="Java_p_C_m", comment=None, parameters=()):
        self.name = name
        self.comment = comment
        self.parameters = list(parameters)
        self.updates = []
        self.return_calls = []

    def getName(self):
        return self.name

    def getComment(self):
        return self.comment

    def getParameterCount(self):
        return len(self.parameters)

    def getParameter(self, index):
        return self.parameters[index]

    def updateFunction(self, calling_convention, return_param, update_type, force, source, params):
        self.updates.append((calling_convention, return_param, update_type, force, source, params))

    def setReturnType(self, data_type, source):
        self.return_calls.append((data_type, source))


class StubFunctionManager:
    def __init__(self, functions):
        self.functions = functions
        self.forward = None

    def getFunctions(self, forward):
        self.forward = forward
        return iter(self.functions)


class StubProgram:
    def __init__(self, functions=()):
        self.manager = StubFunctionManager(list(functions))

    def getFunctionManager(self):
        return self.manager


@pytest.fixture(autouse=True)
def ghidra_modules(monkeypatch):
    listing = types.ModuleType("ghidra.program.model.listing")
    listing.Function = types.SimpleNamespace(
        FunctionUpdateType=types.SimpleNamespace(
            DYNAMIC_STORAGE_FORMAL_PARAMS=DYNAMIC_STORAGE_FORMAL_PARAMS
        )
    )
    listing.ParameterImpl = StubParameterImpl
    listing.ReturnParameterImpl = StubReturnParameterImpl

    symbol = types.ModuleType("ghidra.program.model.symbol")
    symbol.SourceType = types.SimpleNamespace(USER_DEFINED=USER_DEFINED)

    for name in ("ghidra", "ghidra.program", "ghidra.program.model"):
        monkeypatch.setitem(sys.modules, name, types.ModuleType(name))
    monkeypatch.setitem(sys.modules, "ghidra.program.model.listing", listing)
    monkeypatch.setitem(sys.modules, "ghidra.program.model.symbol", symbol)
    sys.modules["ghidra"].program = sys.modules["ghidra.program"]
    sys.modules["ghidra.program"].model = sys.modules["ghidra.program.model"]
    sys.modules["ghidra.program.model"].listing = listing
    sys.modules["ghidra.program.model"].symbol = symbol


class TestReplaceSignature:
    def test_update_uses_dynamic_storage_and_user_source(self):
        program = StubProgram()
        stub = StubFunction()
        params = [
            ParameterSpec("env", "JNIEnv *"),
            ParameterSpec("thiz", "jobject"),
            ParameterSpec("a0", "jint"),
        ]
        GhidraFunction(stub, program).replace_signature(params, "jboolean")

        assert len(stub.updates) == 1
        convention, return_param, update_type, force, source, ghidra_params = stub.updates[0]
        assert convention is None
        assert update_type == DYNAMIC_STORAGE_FORMAL_PARAMS
        assert force is True
        assert source == USER_DEFINED
        assert isinstance(return_param, StubReturnParameterImpl)
        assert (return_param.data_type, return_param.program) == ("jboolean", program)

        assert [(p.name, p.data_type) for p in ghidra_params] == [
            ("env", "JNIEnv *"),
            ("thiz", "jobject"),
            ("a0", "jint"),
        ]
        assert all(p.source == USER_DEFINED for p in ghidra_params)
        assert all(p.program is program for p in ghidra_params)

    def test_empty_parameter_list(self):
        stub = StubFunction()
        GhidraFunction(stub, StubProgram()).replace_signature([], "void")
        assert stub.updates[0][5] == []


class TestParameterAndReturnSetters:
    def test_set_parameter_renames_and_retypes(self):
        first = StubParameter()
        stub = StubFunction(name="JNI_OnLoad", parameters=[first, StubParameter()])
        GhidraFunction(stub, StubProgram()).set_parameter(0, "vm", "JavaVM *")

        assert first.calls == [
            ("setName", "vm", USER_DEFINED),
            ("setDataType", "JavaVM *", USER_DEFINED),
        ]
        assert stub.parameters[1].calls == []

    def test_set_return_type(self):
        stub = StubFunction(name="JNI_OnLoad")
        GhidraFunction(stub, StubProgram()).set_return_type("jint")
        assert stub.return_calls == [("jint", USER_DEFINED)]


def test_properties_read_through_to_function():
    stub = StubFunction(name="Java_a_B_c", comment="JNIAnalyzer:IGNORE", parameters=[StubParameter()])
    func = GhidraFunction(stub, StubProgram())
    assert func.name == "Java_a_B_c"
    assert func.comment == "JNIAnalyzer:IGNORE"
    assert func.parameter_count == 1
    assert GhidraFunction(StubFunction(), StubProgram()).comment is None


def test_store_iterates_forward_and_wraps_functions():
    functions = [StubFunction("JNI_OnLoad"), StubFunction("Java_a_B_c")]
    program = StubProgram(functions)
    wrapped = list(GhidraFunctionStore(program).iter_functions())

    assert program.manager.forward is True
    assert [func.name for func in wrapped] == ["JNI_OnLoad", "Java_a_B_c"]
    assert all(isinstance(func, GhidraFunction) for func in wrapped)
