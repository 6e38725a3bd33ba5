# --- What the host hands us ---------------------------------------------------
from dataclasses import dataclass
from pathlib import Path

JAVA_LANGUAGE_ID = "java"


@dataclass(frozen=True)
class SourceDocument:
    """A document as the host sees it: identity, text and language marker."""
    uri: str
    text: str
    language_id: str = JAVA_LANGUAGE_ID
    file_name: str = ""

    @property
    def is_java(self) -> bool:
        return self.language_id == JAVA_LANGUAGE_ID

    @property
    def fallback_class_name(self) -> str:
        """File name without ".java"; used when no class declaration is found."""
        name = Path(self.file_name or self.uri).name
        return name[:-len(".java")] if name.endswith(".java") else name

    @classmethod
    def from_path(cls, path: Path) -> "SourceDocument":
        text = path.read_text(encoding="utf-8", errors="replace")
        language_id = JAVA_LANGUAGE_ID if path.suffix == ".java" else path.suffix.lstrip(".")
        return cls(uri=path.resolve().as_uri(), text=text, language_id=language_id, file_name=str(path))


class CancellationToken:
    """Cooperative cancellation flag, polled between files."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled
