import dataclasses
import json
from enum import Enum
from typing import Any

from java_lens.call_graph import format_method_ref
from java_lens.lifecycle import format_timeline_label
from java_lens.models.ast_models import (
    ConcurrencyWarning,
    FileAnalysis,
    LifecycleTimeline,
    MethodCallGraph,
    SystemServiceSummary,
)


# --- Pretty printing & JSON export ------------------------------------------

def print_summary(analysis: FileAnalysis):
    """
    Human-friendly printout of what we found.
    """
    summary = analysis.summary
    title = f"{summary.package_name}.{summary.class_name}" if summary.package_name else summary.class_name
    print(f"\n=== {title} ===")
    if summary.inner_classes:
        print("inner classes:", ", ".join(summary.inner_classes))

    print("\n--- fields ---")
    for f in summary.fields:
        static = " static" if f.is_static else ""
        print(f"  {f.visibility.value}{static} {f.type} {f.name}  @ {f.start_line}")

    print("\n--- methods ---")
    for m in analysis.method_decls:
        static = " static" if m.is_static else ""
        print(f"  {m.visibility.value}{static} {m.signature}  @ {m.start_line}")

    if analysis.system_service is not None:
        print_system_service(analysis.system_service)


def print_system_service(service: SystemServiceSummary):
    on_start = f"@{service.on_start_line}" if service.on_start_line else "-"
    print(f"\n[SystemService {service.service_class}]  onStart {on_start}")
    for line in service.on_boot_phases:
        print(f"  onBootPhase  line {line}")
    for binder in service.binder_services:
        print(f"  binder: {binder.name}  line {binder.line}")


def print_call_graph(graph: MethodCallGraph):
    print(f"\n=== {graph.method} ===")
    print("callers:")
    for ref in graph.callers:
        print("  <-", format_method_ref(ref))
    print("callees:")
    for ref in graph.callees:
        print("  ->", format_method_ref(ref))


def print_timeline(timeline: LifecycleTimeline):
    print(f"\n[{format_timeline_label(timeline)}]")
    for entry in timeline.entries:
        print(f"  {entry.line:>6}  {entry.name}")


def print_warnings(warnings: list[ConcurrencyWarning]):
    for w in warnings:
        print(f"  line {w.line}: {w.message}")


def to_dict(obj: Any) -> Any:
    """Dataclasses/enums/tuples -> plain JSON-friendly structures."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_dict(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {key: to_dict(value) for key, value in obj.items()}
    return obj


def to_json(obj: Any) -> str:
    """
    Serializes any result object (or list of them) to JSON.
    """
    return json.dumps(to_dict(obj), indent=2)
