"""Tests for the structural summary of parsed Java files."""

from java_lens.models.ast_models import Visibility

SERVICE_JAVA = """package com.acme.demo;

import java.util.Map;

public class UserService {
    private static final String TAG = "UserService";
    int a, b;
    protected Map<String, Integer> counts;

    public UserService() {
        a = 1;
    }

    public int add(int x, int y) {
        return x + y;
    }

    protected static void log(String fmt, Object... args) {
    }

    void plain() {}

    static class Helper {
        private long value;
    }

    interface Listener {
        void onEvent(String name);
    }
}

class Second {
}
"""


class TestClassSummary:
    def test_class_and_package(self, analyze):
        summary = analyze(SERVICE_JAVA).summary
        assert summary.class_name == "UserService"
        assert summary.package_name == "com.acme.demo"

    def test_inner_classes_exclude_primary(self, analyze):
        summary = analyze(SERVICE_JAVA).summary
        assert summary.inner_classes == ("Helper", "Second")

    def test_fallback_class_name_without_class(self, analyze):
        summary = analyze("interface OnlyInterface { void m(); }", fallback="OnlyInterface").summary
        assert summary.class_name == "OnlyInterface"
        assert summary.package_name == ""
        assert summary.inner_classes == ()


class TestFieldSummaries:
    def test_multi_variable_declaration(self, analyze):
        fields = {f.name: f for f in analyze(SERVICE_JAVA).summary.fields}
        assert fields["a"].type == "int"
        assert fields["b"].type == "int"
        assert fields["a"].start_line == fields["b"].start_line == 7

    def test_visibility_and_static(self, analyze):
        fields = {f.name: f for f in analyze(SERVICE_JAVA).summary.fields}
        assert fields["TAG"].visibility is Visibility.PRIVATE
        assert fields["TAG"].is_static
        assert fields["TAG"].type == "String"
        assert fields["a"].visibility is Visibility.PACKAGE
        assert not fields["a"].is_static

    def test_generic_type_text(self, analyze):
        fields = {f.name: f for f in analyze(SERVICE_JAVA).summary.fields}
        assert fields["counts"].type == "Map<String, Integer>"
        assert fields["counts"].visibility is Visibility.PROTECTED

    def test_nested_class_fields_are_collected(self, analyze):
        names = [f.name for f in analyze(SERVICE_JAVA).summary.fields]
        assert names == ["TAG", "a", "b", "counts", "value"]


class TestMethodDecls:
    def test_constructors_are_excluded(self, analyze):
        names = [m.name for m in analyze(SERVICE_JAVA).method_decls]
        assert "UserService" not in names
        assert names == ["add", "log", "plain", "onEvent"]

    def test_arity_counts_varargs(self, analyze):
        decls = {m.name: m for m in analyze(SERVICE_JAVA).method_decls}
        assert decls["add"].params_count == 2
        assert decls["log"].params_count == 2
        assert decls["plain"].params_count == 0

    def test_generic_parameter_counts_once(self, analyze):
        source = "class A { void put(Map<String, Integer> m, int k) {} }"
        assert analyze(source).method_decls[0].params_count == 2

    def test_visibility_default_and_protected_static(self, analyze):
        decls = {m.name: m for m in analyze(SERVICE_JAVA).method_decls}
        assert decls["plain"].visibility is Visibility.PACKAGE
        assert not decls["plain"].is_static
        assert decls["log"].visibility is Visibility.PROTECTED
        assert decls["log"].is_static
        assert decls["add"].visibility is Visibility.PUBLIC

    def test_signature_and_lines(self, analyze):
        decl = next(m for m in analyze(SERVICE_JAVA).method_decls if m.name == "add")
        assert decl.signature == "int add(int x, int y)"
        assert decl.start_line == 14

    def test_offsets_cover_declaration_and_body(self, analyze):
        decl = next(m for m in analyze(SERVICE_JAVA).method_decls if m.name == "add")
        assert SERVICE_JAVA[decl.start_offset:decl.end_offset].startswith("public int add(")
        assert SERVICE_JAVA[decl.start_offset:decl.end_offset].endswith("}")
        body = SERVICE_JAVA[decl.body_start_offset:decl.body_end_offset]
        assert body.startswith("{") and body.endswith("}")
        assert "return x + y;" in body

    def test_bodiless_method_has_no_body_offsets(self, analyze):
        decl = next(m for m in analyze(SERVICE_JAVA).method_decls if m.name == "onEvent")
        assert decl.body_start_offset is None
        assert decl.body_end_offset is None

    def test_summaries_mirror_decls(self, analyze):
        analysis = analyze(SERVICE_JAVA)
        assert [m.name for m in analysis.summary.methods] == [m.name for m in analysis.method_decls]

    def test_anonymous_class_modifiers_do_not_leak(self, analyze):
        source = (
            "class A {\n"
            "    void schedule() {\n"
            "        Runnable r = new Runnable() { public void run() {} };\n"
            "    }\n"
            "}\n"
        )
        decls = {m.name: m for m in analyze(source).method_decls}
        assert decls["schedule"].visibility is Visibility.PACKAGE
        assert decls["run"].visibility is Visibility.PUBLIC

    def test_non_ascii_source_keeps_str_offsets(self, analyze):
        source = "class A {\n    // café ☕\n    void m() {}\n}\n"
        decl = analyze(source).method_decls[0]
        assert decl.start_line == 3
        assert source[decl.start_offset:decl.end_offset] == "void m() {}"

    def test_annotation_strings_are_not_modifiers(self, analyze):
        source = (
            "class A {\n"
            "    @Deprecated(since = \"private\") public void m() {}\n"
            "    @SuppressWarnings(\"static\") int f;\n"
            "    void p(@Named(\"protected\") String s) {}\n"
            "}\n"
        )
        analysis = analyze(source)
        decls = {m.name: m for m in analysis.method_decls}
        assert decls["m"].visibility is Visibility.PUBLIC
        assert decls["p"].visibility is Visibility.PACKAGE
        field = analysis.summary.fields[0]
        assert field.name == "f"
        assert not field.is_static
        assert field.visibility is Visibility.PACKAGE

    def test_deeply_nested_expression(self, analyze):
        terms = " + ".join(['"x"'] * 1500)
        source = f"class Big {{\n    String s() {{ return {terms}; }}\n}}\n"
        decl = analyze(source).method_decls[0]
        assert decl.name == "s"
        assert decl.signature == "String s()"
        assert source[decl.start_offset:decl.end_offset].endswith("}")


class TestSummarizeFallback:
    def test_parse_failure_yields_fallback_summary(self, indexer):
        summary = indexer.summarize("class Broken { void m( }", "Broken")
        assert summary.class_name == "Broken"
        assert summary.fields == ()
        assert summary.methods == ()
