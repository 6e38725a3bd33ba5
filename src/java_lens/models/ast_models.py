# --- Data models for analysis results ---------------------------------------
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Visibility(str, Enum):
    """Java access level. PACKAGE is what you get with no modifier at all."""
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"


@dataclass(frozen=True)
class FieldSummary:
    """A single field variable (``int a, b;`` yields two of these)."""
    name: str
    type: str  # raw declared type text, e.g. "List<String>"
    visibility: Visibility
    is_static: bool
    start_line: int  # 1-based


@dataclass(frozen=True)
class MethodSummary:
    name: str
    params_count: int
    visibility: Visibility
    is_static: bool
    start_line: int


@dataclass(frozen=True)
class MethodDecl:
    """A method declaration with the offsets needed for call-graph queries."""
    name: str
    params_count: int
    visibility: Visibility
    is_static: bool
    start_line: int
    signature: str  # e.g. "void onBootPhase(int phase)"
    start_offset: int
    end_offset: int  # exclusive
    body_start_offset: Optional[int] = None
    body_end_offset: Optional[int] = None  # exclusive

    def __post_init__(self):
        if self.start_offset > self.end_offset:
            raise ValueError(f"method {self.name}: start {self.start_offset} > end {self.end_offset}")
        if (self.body_start_offset is None) != (self.body_end_offset is None):
            raise ValueError(f"method {self.name}: body offsets must both be set or both be absent")
        if self.body_start_offset is not None and self.body_start_offset > self.body_end_offset:
            raise ValueError(f"method {self.name}: body start > body end")

    @property
    def has_body(self) -> bool:
        return self.body_start_offset is not None

    @property
    def scope_range(self) -> tuple[int, int]:
        """Body range when there is a body, otherwise the whole declaration."""
        if self.has_body:
            return self.body_start_offset, self.body_end_offset
        return self.start_offset, self.end_offset

    def to_summary(self) -> MethodSummary:
        return MethodSummary(
            name=self.name,
            params_count=self.params_count,
            visibility=self.visibility,
            is_static=self.is_static,
            start_line=self.start_line,
        )


@dataclass(frozen=True)
class MethodInvocation:
    """A call-like site found by text scanning. Not resolved to a declaration."""
    name: str
    args_count: int
    start_offset: int
    line: int


@dataclass(frozen=True)
class MethodRef:
    class_name: str
    method_name: str
    file_path: str
    line: int


@dataclass(frozen=True)
class MethodCallGraph:
    method: str  # "ClassName.methodName(paramCount)"
    callers: tuple[MethodRef, ...] = ()
    callees: tuple[MethodRef, ...] = ()


@dataclass(frozen=True)
class ClassSummary:
    class_name: str
    package_name: str = ""
    fields: tuple[FieldSummary, ...] = ()
    methods: tuple[MethodSummary, ...] = ()
    inner_classes: tuple[str, ...] = ()

    def __post_init__(self):
        if self.class_name in self.inner_classes:
            raise ValueError(f"inner classes must not repeat the primary class {self.class_name}")


@dataclass(frozen=True)
class BinderService:
    name: str  # service name from the string literal, or "<unknown>"
    line: int


@dataclass(frozen=True)
class SystemServiceSummary:
    service_class: str
    on_start_line: Optional[int] = None
    on_boot_phases: tuple[int, ...] = ()
    binder_services: tuple[BinderService, ...] = ()


@dataclass(frozen=True)
class LifecycleEntry:
    name: str
    line: int


@dataclass(frozen=True)
class LifecycleTimeline:
    file_path: str
    class_name: str
    entries: tuple[LifecycleEntry, ...] = ()

    def __post_init__(self):
        lines = [entry.line for entry in self.entries]
        if lines != sorted(lines):
            raise ValueError("lifecycle entries must be sorted by line")


@dataclass(frozen=True)
class SourceRange:
    start_offset: int
    end_offset: int

    def __post_init__(self):
        if self.start_offset > self.end_offset:
            raise ValueError(f"invalid range: {self.start_offset} > {self.end_offset}")


@dataclass(frozen=True)
class ConcurrencyWarning:
    range: SourceRange
    line: int  # line of the `synchronized` keyword
    message: str


@dataclass(frozen=True)
class FileAnalysis:
    """Everything the cache memoizes for a single file."""
    summary: ClassSummary
    method_decls: tuple[MethodDecl, ...] = ()
    method_invocations: tuple[MethodInvocation, ...] = ()
    system_service: Optional[SystemServiceSummary] = None
