# --- SystemService / boot lifecycle heuristics -------------------------------
"""
Name-based heuristics for Android system_server code:

- SystemService subclasses: where onStart / onBootPhase live and which binder
  services they publish.
- Boot timeline: the well-known startup methods of ZygoteInit / SystemServer,
  in source order.

Both only look at names and text. A miss is a normal outcome, not an error.
"""
import re
from pathlib import Path
from typing import Optional

from java_lens.config import DEFAULT_LIFECYCLE_TARGETS
from java_lens.models.ast_models import (
    BinderService,
    FileAnalysis,
    LifecycleEntry,
    LifecycleTimeline,
    MethodDecl,
    MethodInvocation,
    SystemServiceSummary,
)

SYSTEM_SERVICE_RE = re.compile(r"extends\s+SystemService")
QUOTED_TEXT_RE = re.compile(r'"([^"]+)"')

ON_START = "onStart"
ON_BOOT_PHASE = "onBootPhase"
BINDER_PUBLISH_CALLS = ("publishBinderService", "addService")
UNKNOWN_SERVICE = "<unknown>"

LIFECYCLE_METHODS = ("main", "startBootstrapServices", "startCoreServices", "startOtherServices")


def is_system_service_header(header: str) -> bool:
    return bool(SYSTEM_SERVICE_RE.search(header))


def extract_system_service_summary(class_name: str, class_header: Optional[str],
                                   methods: tuple[MethodDecl, ...],
                                   invocations: tuple[MethodInvocation, ...],
                                   source: str) -> Optional[SystemServiceSummary]:
    """
    Summary for a class whose header says `extends SystemService`; None for
    anything else (including files with no class at all).
    """
    if not class_header or not is_system_service_header(class_header):
        return None

    on_start = next((m for m in methods if m.name == ON_START), None)
    boot_phases = tuple(m.start_line for m in methods if m.name == ON_BOOT_PHASE)

    lines = source.split("\n")
    binder_services = []
    for invocation in invocations:
        if invocation.name not in BINDER_PUBLISH_CALLS:
            continue
        line_text = lines[invocation.line - 1] if invocation.line <= len(lines) else ""
        match = QUOTED_TEXT_RE.search(line_text)
        binder_services.append(BinderService(
            name=match.group(1) if match else UNKNOWN_SERVICE,
            line=invocation.line,
        ))

    return SystemServiceSummary(
        service_class=class_name,
        on_start_line=on_start.start_line if on_start else None,
        on_boot_phases=boot_phases,
        binder_services=tuple(binder_services),
    )


def is_lifecycle_target(file_path: str, targets: tuple[str, ...] = DEFAULT_LIFECYCLE_TARGETS) -> bool:
    return Path(file_path).name in targets


def build_lifecycle_timeline(file_path: str, analysis: FileAnalysis,
                             targets: tuple[str, ...] = DEFAULT_LIFECYCLE_TARGETS) -> Optional[LifecycleTimeline]:
    """Startup methods of a target file, sorted by line. None for any other file."""
    if not is_lifecycle_target(file_path, targets):
        return None
    entries = sorted(
        (LifecycleEntry(m.name, m.start_line) for m in analysis.method_decls if m.name in LIFECYCLE_METHODS),
        key=lambda entry: entry.line,
    )
    return LifecycleTimeline(
        file_path=file_path,
        class_name=analysis.summary.class_name,
        entries=tuple(entries),
    )


def format_timeline_label(timeline: LifecycleTimeline) -> str:
    return f"{timeline.class_name} ({Path(timeline.file_path).name})"
