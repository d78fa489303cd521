"""JNI signature application pass.

The pass is a single sweep: enumerate functions, rewrite `JNI_OnLoad`, then
mangle each declared method and apply its JNI calling convention to the
matching `Java_...` function. Host objects are only reached through the
`FunctionStore` / `TypeResolver` protocols in `pipeline.types`.
"""

from __future__ import annotations

from typing import Iterable

from collectors.functions import collect_jni_functions
from jni_config import (
    ARG_PARAM_PREFIX,
    CLASS_REF_TYPE,
    DEFAULT_TYPE_ERROR_POLICY,
    ENV_PARAM_NAME,
    ENV_TYPE,
    OBJECT_REF_TYPE,
    ONLOAD_PARAM_NAME,
    RECEIVER_PARAM_NAME,
    STATUS_TYPE,
    TYPE_ERROR_POLICIES,
    VM_TYPE,
)
from jni_errors import TypeResolutionError, UnsupportedMangling
from pipeline.types import (
    METHOD_STATUS_APPLIED,
    METHOD_STATUS_NO_MATCH,
    METHOD_STATUS_TYPE_ERROR,
    METHOD_STATUS_UNSUPPORTED,
    DeclaredMethod,
    DiscoveredFunction,
    FunctionStore,
    MethodOutcome,
    ParameterSpec,
    PassReport,
    TypeResolver,
)
from symbols import find_overloaded_symbols, mangle_native_method_name


def build_parameters(method: DeclaredMethod, types: TypeResolver) -> list[ParameterSpec]:
    receiver_type = CLASS_REF_TYPE if method.is_static else OBJECT_REF_TYPE
    params = [
        ParameterSpec(ENV_PARAM_NAME, types.resolve(ENV_TYPE)),
        ParameterSpec(RECEIVER_PARAM_NAME, types.resolve(receiver_type)),
    ]
    for idx, arg_type in enumerate(method.argument_types):
        params.append(ParameterSpec(f"{ARG_PARAM_PREFIX}{idx}", types.resolve(arg_type)))
    return params


def apply_onload_signature(function: DiscoveredFunction, types: TypeResolver) -> None:
    print("Modified %s" % function.name)
    vm_type = types.resolve(VM_TYPE)
    status_type = types.resolve(STATUS_TYPE)
    if function.parameter_count > 0:
        function.set_parameter(0, ONLOAD_PARAM_NAME, vm_type)
        function.set_return_type(status_type)
    else:
        function.replace_signature([ParameterSpec(ONLOAD_PARAM_NAME, vm_type)], status_type)


def apply_method_signature(
    method: DeclaredMethod,
    function: DiscoveredFunction,
    types: TypeResolver,
) -> int:
    # Resolve everything first so a missing type leaves the function untouched.
    params = build_parameters(method, types)
    return_type = types.resolve(method.return_type)
    function.replace_signature(params, return_type)
    return len(params)


def _match_method(
    method: DeclaredMethod,
    index: dict[str, DiscoveredFunction],
    types: TypeResolver,
    *,
    overloaded: bool,
    on_type_error: str,
) -> MethodOutcome:
    try:
        candidate = mangle_native_method_name(method.qualified_name, overloaded=overloaded)
    except UnsupportedMangling as exc:
        print("[!] %s" % exc)
        return MethodOutcome(
            method.qualified_name, None, METHOD_STATUS_UNSUPPORTED, detail=str(exc)
        )
    print("[-] %s" % candidate)

    function = index.get(candidate)
    if function is None:
        return MethodOutcome(method.qualified_name, candidate, METHOD_STATUS_NO_MATCH)

    try:
        param_count = apply_method_signature(method, function, types)
    except TypeResolutionError as exc:
        if on_type_error != "skip":
            raise
        print("[!] Skipping %s: %s" % (candidate, exc))
        return MethodOutcome(
            method.qualified_name, candidate, METHOD_STATUS_TYPE_ERROR, detail=str(exc)
        )
    return MethodOutcome(
        method.qualified_name,
        candidate,
        METHOD_STATUS_APPLIED,
        parameter_count=param_count,
    )


def apply_jni_signatures(
    methods: Iterable[DeclaredMethod],
    store: FunctionStore,
    types: TypeResolver,
    *,
    on_type_error: str = DEFAULT_TYPE_ERROR_POLICY,
) -> PassReport:
    if on_type_error not in TYPE_ERROR_POLICIES:
        raise ValueError(f"Unsupported on_type_error policy: {on_type_error}")
    methods = list(methods)

    print("[+] Enumerating JNI functions...")
    inventory = collect_jni_functions(store)
    report = PassReport(indexed=list(inventory.index), ignored=list(inventory.ignored))
    for name in inventory.index:
        print(name)
    for function in inventory.onload:
        apply_onload_signature(function, types)
        report.onload_modified.append(function.name)

    print("Total JNI functions found: %d" % len(inventory.index))
    print("Ignored JNI functions:")
    for name in inventory.ignored:
        print(name)
    print()

    print("[+] Applying function signatures...")
    overloaded_symbols = find_overloaded_symbols(methods)
    for method in methods:
        report.outcomes.append(
            _match_method(
                method,
                inventory.index,
                types,
                overloaded=mangle_native_method_name(method.qualified_name) in overloaded_symbols,
                on_type_error=on_type_error,
            )
        )

    summary = report.summary()
    print(
        "Applied %d of %d declared methods (%d unmatched, %d overloaded, %d type errors)"
        % (
            summary["applied_count"],
            summary["method_count"],
            summary["no_match_count"],
            summary["unsupported_count"],
            summary["type_error_count"],
        )
    )
    return report
