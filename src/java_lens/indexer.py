import logging
from typing import Optional

from java_lens.errors import JavaParseError
from java_lens.invocations import extract_method_invocations
from java_lens.lifecycle import extract_system_service_summary
from java_lens.line_index import build_line_index
from java_lens.models.ast_models import ClassSummary, FileAnalysis
from java_lens.parser import JavaParser, SourceParser
from java_lens.summarizer import class_header_text, find_primary_class, summarize_tree

logger = logging.getLogger(__name__)


def empty_analysis(fallback_class_name: str) -> FileAnalysis:
    """The 'known empty' result: no declarations, no calls, no service summary."""
    return FileAnalysis(summary=ClassSummary(class_name=fallback_class_name))


# --- The Indexer -------------------------------------------------------------

class JavaIndexer:
    """
    Runs the per-file pipeline:
    parse -> structural summary -> call sites -> SystemService heuristics.
    """

    def __init__(self, parser: Optional[SourceParser] = None):
        # Builds/loads the tree-sitter Java grammar once unless a parser is supplied
        self.parser = parser or JavaParser()

    def analyze(self, source: str, fallback_class_name: str) -> FileAnalysis:
        """
        Parses & analyzes one Java file.
        Raises JavaParseError when the grammar rejects the text.
        """
        root = self.parser.parse(source)
        line_starts = build_line_index(source)

        summary, method_decls = summarize_tree(root, source, fallback_class_name, line_starts)
        invocations = tuple(extract_method_invocations(method_decls, source, line_starts))

        class_node = find_primary_class(root)
        header = class_header_text(class_node, source) if class_node is not None else None
        system_service = extract_system_service_summary(
            summary.class_name, header, method_decls, invocations, source)

        return FileAnalysis(
            summary=summary,
            method_decls=method_decls,
            method_invocations=invocations,
            system_service=system_service,
        )

    def summarize(self, source: str, fallback_class_name: str) -> ClassSummary:
        """
        Structural summary only. A file that doesn't parse comes back as an
        empty summary named after `fallback_class_name` instead of raising.
        """
        try:
            return self.analyze(source, fallback_class_name).summary
        except JavaParseError as e:
            logger.warning("Could not parse %s: %s", fallback_class_name, e)
            return ClassSummary(class_name=fallback_class_name)
