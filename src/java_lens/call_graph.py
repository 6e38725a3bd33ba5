# --- Single-file call graph --------------------------------------------------
"""
Callers and callees of the method under the cursor, within one file.

Resolution is purely by (name, argument count): no types, no overloads of
equal arity, no inheritance. Cross-file graphs are left to the caller, who can
run this once per file.
"""
from pathlib import Path
from typing import Iterable, Optional

from java_lens.models.ast_models import (
    FileAnalysis,
    MethodCallGraph,
    MethodDecl,
    MethodInvocation,
    MethodRef,
)


def find_method_at_offset(methods: Iterable[MethodDecl], offset: int) -> Optional[MethodDecl]:
    """First declaration whose [start, end] range contains `offset`."""
    return next((m for m in methods if m.start_offset <= offset <= m.end_offset), None)


def find_enclosing_method(methods: Iterable[MethodDecl], offset: int) -> Optional[MethodDecl]:
    """First declaration whose body (or whole range, for bodiless ones) contains `offset`."""
    for method in methods:
        start, end = method.scope_range
        if start <= offset <= end:
            return method
    return None


def build_method_label(class_name: str, method: MethodDecl) -> str:
    return f"{class_name}.{method.name}({method.params_count})"


def find_callees(class_name: str, method: MethodDecl, invocations: Iterable[MethodInvocation],
                 methods: tuple[MethodDecl, ...], file_path: str) -> list[MethodRef]:
    """
    Calls made inside `method` that match a declaration in this file.
    Calls to anything not declared here are dropped.
    """
    start, end = method.scope_range
    callees = []
    for invocation in invocations:
        if not start <= invocation.start_offset <= end:
            continue
        target = next((d for d in methods
                       if d.name == invocation.name and d.params_count == invocation.args_count), None)
        if target is not None:
            callees.append(MethodRef(class_name, target.name, file_path, target.start_line))
    return callees


def find_callers(class_name: str, method: MethodDecl, invocations: Iterable[MethodInvocation],
                 methods: tuple[MethodDecl, ...], file_path: str) -> list[MethodRef]:
    """Methods in this file calling `method`, each reported once even if it calls several times."""
    callers = []
    seen: set[tuple[str, int]] = set()
    for invocation in invocations:
        if invocation.name != method.name or invocation.args_count != method.params_count:
            continue
        caller = find_enclosing_method(methods, invocation.start_offset)
        if caller is None:
            continue
        key = (caller.name, caller.start_line)
        if key in seen:
            continue
        seen.add(key)
        callers.append(MethodRef(class_name, caller.name, file_path, caller.start_line))
    return callers


def build_call_graph(methods: tuple[MethodDecl, ...], invocations: tuple[MethodInvocation, ...],
                     class_name: str, offset: int, file_path: str) -> Optional[MethodCallGraph]:
    """
    Call graph rooted at the method containing `offset`, or None when the
    cursor isn't inside any method.
    """
    current = find_method_at_offset(methods, offset)
    if current is None:
        return None
    return MethodCallGraph(
        method=build_method_label(class_name, current),
        callers=tuple(find_callers(class_name, current, invocations, methods, file_path)),
        callees=tuple(find_callees(class_name, current, invocations, methods, file_path)),
    )


def build_method_call_graph(analysis: FileAnalysis, offset: int, file_path: str) -> Optional[MethodCallGraph]:
    """Convenience wrapper taking a cached FileAnalysis."""
    return build_call_graph(
        analysis.method_decls,
        analysis.method_invocations,
        analysis.summary.class_name,
        offset,
        file_path,
    )


def format_method_ref(ref: MethodRef) -> str:
    return f"{ref.class_name}.{ref.method_name} · {Path(ref.file_path).name}:{ref.line}"
