# --- Directory scanning convenience -----------------------------------------
import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterator, Optional

from java_lens.cache import AnalysisCache
from java_lens.config import DEFAULT_EXCLUDED_DIRS, DEFAULT_LIFECYCLE_TARGETS
from java_lens.lifecycle import build_lifecycle_timeline
from java_lens.models.ast_models import LifecycleTimeline, SystemServiceSummary
from java_lens.models.host import CancellationToken
from java_lens.navigation import (
    DefinitionKind,
    DefinitionTarget,
    TextLocation,
    find_in_service_contexts,
    find_init_service,
    find_text,
)

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def iter_files(root_dir: Path, pattern: str,
               excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS,
               under: Optional[str] = None) -> Iterator[Path]:
    """
    Recursively yields files under `root_dir` whose path relative to it
    matches `pattern` (fnmatch style, "*" crosses directories). Build output
    directories are pruned. With `under`, only files somewhere below a
    directory named exactly that are kept (`under="jni"` matches
    `jni/a.cpp` and `jni/sub/b.cpp`, not `libjni/c.cpp`).
    """
    root_dir = Path(root_dir)
    for dirpath, dirnames, filenames in os.walk(root_dir):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded_dirs)
        for fn in sorted(filenames):
            full = Path(dirpath) / fn
            relative_path = full.relative_to(root_dir)
            if under is not None and under not in relative_path.parts[:-1]:
                continue
            relative = relative_path.as_posix()
            if fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(fn, pattern):
                yield full


def _cancelled(cancel: Optional[CancellationToken]) -> bool:
    return cancel is not None and cancel.is_cancellation_requested


def scan_system_services(root_dir: Path, cache: AnalysisCache,
                         cancel: Optional[CancellationToken] = None,
                         excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS) -> list[SystemServiceSummary]:
    """
    SystemService summaries for every .java file under `root_dir`.
    Stops at the next file boundary once cancelled and returns what it has.
    """
    summaries = []
    for path in iter_files(root_dir, "*.java", excluded_dirs):
        if _cancelled(cancel):
            break
        analysis = cache.get_analysis_for_path(path, cancel)
        if analysis is not None and analysis.system_service is not None:
            summaries.append(analysis.system_service)
    return summaries


def build_lifecycle_timelines(root_dir: Path, cache: AnalysisCache,
                              cancel: Optional[CancellationToken] = None,
                              targets: tuple[str, ...] = DEFAULT_LIFECYCLE_TARGETS,
                              excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS) -> list[LifecycleTimeline]:
    """Boot timelines for every target file (ZygoteInit.java, SystemServer.java) found."""
    timelines = []
    for file_name in targets:
        for path in iter_files(root_dir, file_name, excluded_dirs):
            if _cancelled(cancel):
                return timelines
            analysis = cache.get_analysis_for_path(path, cancel)
            if analysis is None:
                continue
            timeline = build_lifecycle_timeline(str(path), analysis, targets)
            if timeline is not None:
                timelines.append(timeline)
    return timelines


def resolve_definition(target: DefinitionTarget, root_dir: Path,
                       cancel: Optional[CancellationToken] = None,
                       excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS) -> Optional[tuple[Path, TextLocation]]:
    """Searches the candidate files for `target`; first hit wins."""
    if target.kind is DefinitionKind.SERVICE_CONTEXT:
        pattern, finder, under = "service_contexts", find_in_service_contexts, None
    elif target.kind is DefinitionKind.INIT_SERVICE:
        pattern, finder, under = "*.rc", find_init_service, None
    else:
        pattern, finder, under = "*.cpp", find_text, "jni"

    for path in iter_files(root_dir, pattern, excluded_dirs, under):
        if _cancelled(cancel):
            return None
        try:
            text = read_text(path)
        except OSError as e:
            logger.warning("Failed to read %s: %s", path, e)
            continue
        location = finder(target.symbol, text)
        if location is not None:
            return path, location
    return None
