"""Tests for the AOSP definition lookup helpers."""

from java_lens.navigation import (
    DefinitionKind,
    DefinitionTarget,
    TextLocation,
    classify_definition,
    find_in_service_contexts,
    find_init_service,
    find_text,
    string_literal_at,
)


class TestStringLiteralAt:
    def test_cursor_inside_literal(self):
        line = '    publishBinderService("power", mBinder);'
        literal = string_literal_at(line, line.index("power") + 2)
        assert literal.text == "power"
        assert line[literal.start:literal.end] == "power"

    def test_cursor_outside_literal(self):
        line = 'foo("a"); bar();'
        assert string_literal_at(line, line.index("bar")) is None

    def test_no_quotes(self):
        assert string_literal_at("int x = 1;", 4) is None


class TestClassifyDefinition:
    def test_binder_service_name(self):
        line = 'publishBinderService("power", mBinder);'
        target = classify_definition(line, line.index("power"))
        assert target == DefinitionTarget(DefinitionKind.SERVICE_CONTEXT, "power")

    def test_init_service_name(self):
        line = 'SystemProperties.set("ctl.start", "bootanim");'
        target = classify_definition(line, line.index("bootanim"))
        assert target == DefinitionTarget(DefinitionKind.INIT_SERVICE, "bootanim")

    def test_native_method(self):
        line = "private static native long nativeInit(Object service);"
        target = classify_definition(line, line.index("nativeInit") + 3)
        assert target == DefinitionTarget(DefinitionKind.JNI_METHOD, "nativeInit")

    def test_nothing_to_look_up(self):
        assert classify_definition("int x = compute();", 10) is None


class TestTextSearches:
    def test_service_contexts(self):
        text = "activity u:object_r:activity_service:s0\npower u:object_r:power_service:s0\n"
        assert find_in_service_contexts("power", text) == TextLocation(1, 0)
        assert find_in_service_contexts("missing", text) is None

    def test_init_service_stanza(self):
        text = "on boot\n    start bootanim\n\nservice bootanim /system/bin/bootanimation\n"
        assert find_init_service("bootanim", text) == TextLocation(3, 8)

    def test_find_text(self):
        text = "#include <jni.h>\n\nstatic jlong nativeInit(JNIEnv* env) {\n"
        assert find_text("nativeInit", text) == TextLocation(2, 13)
        assert find_text("nativeOther", text) is None
