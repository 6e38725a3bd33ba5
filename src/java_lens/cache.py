# --- Per-document analysis cache ---------------------------------------------
"""
Memoizes JavaIndexer.analyze per document, keyed by a content fingerprint.

Not thread-safe: the check -> analyze -> store path on a miss is a race if two
threads share one cache. Hosts with concurrent callers must serialize access.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from java_lens.config import DEFAULT_MAX_PARSE_BYTES
from java_lens.errors import JavaParseError
from java_lens.indexer import JavaIndexer, empty_analysis
from java_lens.models.ast_models import FileAnalysis
from java_lens.models.host import CancellationToken, SourceDocument

logger = logging.getLogger(__name__)

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def fingerprint(text: str) -> int:
    """32-bit FNV-1a over the text's code points. For cache invalidation only."""
    h = _FNV_OFFSET
    for ch in text:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


@dataclass(frozen=True)
class CacheEntry:
    fingerprint: int
    size: int
    analysis: FileAnalysis


class AnalysisCache:
    """
    Holds the latest analysis for each document URI. Entries are replaced
    wholesale when the content changes and dropped only through clear().
    """

    def __init__(self, indexer: Optional[JavaIndexer] = None, max_parse_bytes: int = DEFAULT_MAX_PARSE_BYTES):
        self.indexer = indexer or JavaIndexer()
        self.max_parse_bytes = max_parse_bytes
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, uri: str) -> bool:
        return uri in self._entries

    def get_analysis(self, document: SourceDocument,
                     cancel: Optional[CancellationToken] = None) -> Optional[FileAnalysis]:
        """
        Analysis for `document`, or None when it isn't Java, the request was
        cancelled, or the text doesn't parse. Files above max_parse_bytes get
        an empty analysis without being parsed.
        """
        if not document.is_java:
            return None

        text = document.text
        size = len(text.encode("utf-8", errors="surrogatepass"))
        if size > self.max_parse_bytes:
            logger.debug("Skipping %s: %d bytes exceeds %d", document.uri, size, self.max_parse_bytes)
            return empty_analysis(document.fallback_class_name)

        text_hash = fingerprint(text)
        cached = self._entries.get(document.uri)
        if cached is not None and cached.fingerprint == text_hash and cached.size == size:
            logger.debug("Cache hit for %s", document.uri)
            return cached.analysis

        if cancel is not None and cancel.is_cancellation_requested:
            return None

        try:
            analysis = self.indexer.analyze(text, document.fallback_class_name)
        except JavaParseError as e:
            logger.warning("Could not analyze %s: %s", document.uri, e)
            return None

        self._entries[document.uri] = CacheEntry(text_hash, size, analysis)
        return analysis

    def get_analysis_for_path(self, path: Path,
                              cancel: Optional[CancellationToken] = None) -> Optional[FileAnalysis]:
        try:
            document = SourceDocument.from_path(Path(path))
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            return None
        if cancel is not None and cancel.is_cancellation_requested:
            return None
        return self.get_analysis(document, cancel)

    def clear(self, uri: Optional[str] = None):
        """Drops one document's entry, or everything when `uri` is None."""
        if uri is None:
            self._entries.clear()
        else:
            self._entries.pop(uri, None)
