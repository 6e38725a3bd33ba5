"""Tests for the per-document analysis cache."""

from unittest.mock import Mock

import pytest

from java_lens.cache import AnalysisCache, fingerprint
from java_lens.indexer import JavaIndexer
from java_lens.models.host import CancellationToken, SourceDocument

SOURCE = "class Foo { void a() { b(); } void b() {} }"


@pytest.fixture
def parser_spy(java_parser):
    return Mock(wraps=java_parser)


@pytest.fixture
def cache(parser_spy):
    return AnalysisCache(JavaIndexer(parser=parser_spy))


def _doc(text, uri="file:///src/Foo.java", language_id="java"):
    return SourceDocument(uri=uri, text=text, language_id=language_id, file_name="/src/Foo.java")


class TestFingerprint:
    def test_stable(self):
        assert fingerprint(SOURCE) == fingerprint(SOURCE)

    def test_whitespace_change(self):
        assert fingerprint("class A { int a; }") != fingerprint("class A {\tint a; }")

    def test_identifier_change(self):
        assert fingerprint("class A { int a; }") != fingerprint("class A { int b; }")

    def test_fits_in_32_bits(self):
        assert 0 <= fingerprint("x" * 1000) < 2 ** 32


class TestAnalysisCache:
    def test_same_text_is_not_reanalyzed(self, cache, parser_spy):
        first = cache.get_analysis(_doc(SOURCE))
        second = cache.get_analysis(_doc(SOURCE))
        assert first is second
        assert parser_spy.parse.call_count == 1

    def test_changed_text_is_reanalyzed(self, cache, parser_spy):
        first = cache.get_analysis(_doc("class A { int a; }"))
        second = cache.get_analysis(_doc("class A { int b; }"))
        assert first is not second
        assert second.summary.fields[0].name == "b"
        assert parser_spy.parse.call_count == 2

    def test_documents_are_cached_separately(self, cache, parser_spy):
        cache.get_analysis(_doc(SOURCE, uri="file:///a/Foo.java"))
        cache.get_analysis(_doc(SOURCE, uri="file:///b/Foo.java"))
        assert parser_spy.parse.call_count == 2
        assert len(cache) == 2

    def test_non_java_is_not_applicable(self, cache, parser_spy):
        assert cache.get_analysis(_doc(SOURCE, language_id="kotlin")) is None
        parser_spy.parse.assert_not_called()

    def test_oversized_file_skips_parser(self):
        parser = Mock()
        cache = AnalysisCache(JavaIndexer(parser=parser), max_parse_bytes=16)
        analysis = cache.get_analysis(_doc(SOURCE))
        parser.parse.assert_not_called()
        assert analysis.summary.class_name == "Foo"
        assert analysis.method_decls == ()
        assert analysis.method_invocations == ()
        assert analysis.system_service is None

    def test_size_is_measured_in_utf8_bytes(self):
        parser = Mock()
        cache = AnalysisCache(JavaIndexer(parser=parser), max_parse_bytes=10)
        cache.get_analysis(_doc("é" * 6))  # 6 characters, 12 bytes
        parser.parse.assert_not_called()

    def test_parse_failure_is_unavailable_and_not_cached(self, cache, parser_spy):
        doc = _doc("class Broken { void m( }")
        assert cache.get_analysis(doc) is None
        assert doc.uri not in cache
        assert cache.get_analysis(doc) is None
        assert parser_spy.parse.call_count == 2

    def test_deeply_nested_expression_is_analyzed(self, cache):
        terms = " + ".join(['"x"'] * 1500)
        doc = _doc(f"class Foo {{ String s() {{ return {terms}; }} }}")
        analysis = cache.get_analysis(doc)
        assert analysis is not None
        assert [m.name for m in analysis.method_decls] == ["s"]

    def test_cancelled_request(self, cache, parser_spy):
        token = CancellationToken()
        token.cancel()
        assert cache.get_analysis(_doc(SOURCE), token) is None
        parser_spy.parse.assert_not_called()

    def test_cancellation_does_not_hide_cached_result(self, cache):
        first = cache.get_analysis(_doc(SOURCE))
        token = CancellationToken()
        token.cancel()
        assert cache.get_analysis(_doc(SOURCE), token) is first

    def test_clear_one_and_all(self, cache, parser_spy):
        cache.get_analysis(_doc(SOURCE, uri="file:///a/Foo.java"))
        cache.get_analysis(_doc(SOURCE, uri="file:///b/Foo.java"))

        cache.clear("file:///a/Foo.java")
        assert "file:///a/Foo.java" not in cache
        assert "file:///b/Foo.java" in cache

        cache.clear()
        assert len(cache) == 0

    def test_get_analysis_for_path(self, cache, tmp_path):
        path = tmp_path / "Widget.java"
        path.write_text("class Widget { void spin() {} }", encoding="utf-8")
        analysis = cache.get_analysis_for_path(path)
        assert analysis.summary.class_name == "Widget"
        assert cache.get_analysis_for_path(tmp_path / "Missing.java") is None
