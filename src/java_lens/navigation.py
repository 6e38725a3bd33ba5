# --- AOSP go-to-definition helpers -------------------------------------------
"""
Text lookups behind "go to definition" for things Java can't resolve on its
own: binder service names (service_contexts), init services (*.rc files) and
JNI implementations of `native` methods.

Everything here works on text that's already loaded; walking the workspace
for candidate files is done in inputs.directory_scanning.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

SERVICE_PUBLISH_RE = re.compile(r"publishBinderService|addService")
INIT_START_RE = re.compile(r"start|ctl\.start|init")
NATIVE_RE = re.compile(r"\bnative\b")
WORD_RE = re.compile(r"[A-Za-z0-9_]+")


class DefinitionKind(str, Enum):
    SERVICE_CONTEXT = "service_context"
    INIT_SERVICE = "init_service"
    JNI_METHOD = "jni_method"


@dataclass(frozen=True)
class DefinitionTarget:
    kind: DefinitionKind
    symbol: str


@dataclass(frozen=True)
class TextLocation:
    line: int  # 0-based, like editor positions
    character: int


@dataclass(frozen=True)
class StringLiteral:
    text: str
    start: int  # first character inside the quotes
    end: int  # closing quote


def string_literal_at(line_text: str, character: int) -> Optional[StringLiteral]:
    """The double-quoted literal around `character`, if the cursor sits in one."""
    quote = line_text.rfind('"', 0, character + 1)
    if quote == -1:
        return None
    end_quote = line_text.find('"', quote + 1)
    if end_quote == -1 or not quote <= character <= end_quote:
        return None
    return StringLiteral(line_text[quote + 1:end_quote], quote + 1, end_quote)


def word_at(line_text: str, character: int) -> Optional[str]:
    for match in WORD_RE.finditer(line_text):
        if match.start() <= character <= match.end():
            return match.group(0)
    return None


def classify_definition(line_text: str, character: int) -> Optional[DefinitionTarget]:
    """Works out what kind of lookup the cursor position calls for, if any."""
    literal = string_literal_at(line_text, character)
    if literal is not None:
        if SERVICE_PUBLISH_RE.search(line_text):
            return DefinitionTarget(DefinitionKind.SERVICE_CONTEXT, literal.text)
        if INIT_START_RE.search(line_text):
            return DefinitionTarget(DefinitionKind.INIT_SERVICE, literal.text)

    if NATIVE_RE.search(line_text):
        word = word_at(line_text, character)
        if word:
            return DefinitionTarget(DefinitionKind.JNI_METHOD, word)
    return None


def find_in_service_contexts(service_name: str, text: str) -> Optional[TextLocation]:
    """First line of a service_contexts file mentioning `service_name`."""
    for number, line in enumerate(text.split("\n")):
        if service_name in line:
            return TextLocation(number, line.index(service_name))
    return None


def find_init_service(service_name: str, text: str) -> Optional[TextLocation]:
    """`service <name> ...` stanza in an init .rc file."""
    for number, line in enumerate(text.split("\n")):
        if line.startswith("service ") and service_name in line:
            return TextLocation(number, line.index(service_name))
    return None


def find_text(pattern: str, text: str) -> Optional[TextLocation]:
    """First plain-text occurrence of `pattern` (used for JNI sources)."""
    index = text.find(pattern)
    if index == -1:
        return None
    line = text.count("\n", 0, index)
    line_start = text.rfind("\n", 0, index) + 1
    return TextLocation(line, index - line_start)
