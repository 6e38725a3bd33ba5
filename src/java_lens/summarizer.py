# --- Structural summary: package, classes, fields, methods ------------------
"""
Pulls the structural facts out of a parsed Java file: package name, primary
class and inner class names, fields and methods (visibility, static-ness,
arity, offsets).

Node and slot names follow the tree-sitter Java grammar. Constructors are
deliberately left out of every summary.
"""
import logging
import re
from typing import Optional

from java_lens.line_index import build_line_index, offset_to_line
from java_lens.models.ast_models import ClassSummary, FieldSummary, MethodDecl, Visibility
from java_lens.models.syntax import SyntaxNode, SyntaxToken
from java_lens.tree_utils import (
    collect_slot_tokens,
    collect_tokens,
    find_all_nodes,
    find_first_node,
    iter_children,
    node_range,
    tokens_to_text,
)

logger = logging.getLogger(__name__)

ACCESS_KEYWORDS = ("public", "private", "protected")
STATIC_KEYWORD = "static"

CLASS_NODE = "class_declaration"
FIELD_NODE = "field_declaration"
METHOD_NODE = "method_declaration"
PACKAGE_NODE = "package_declaration"
VARIABLE_DECLARATOR_NODE = "variable_declarator"
BODY_NODE = "block"
MODIFIERS_NODE = "modifiers"

# Tried in order when a field has no "type" slot
TYPE_NODE_NAMES = (
    "generic_type",
    "array_type",
    "scoped_type_identifier",
    "integral_type",
    "floating_point_type",
    "boolean_type",
)

# Ordinary, varargs and receiver (`Foo this`) parameters all count toward arity
PARAMETER_NODE_NAMES = ("formal_parameter", "spread_parameter", "receiver_parameter")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")
_PACKAGE_PREFIX_RE = re.compile(r"^package\s+")
_PACKAGE_SUFFIX_RE = re.compile(r";\s*$")


def is_identifier(image: str) -> bool:
    return bool(_IDENTIFIER_RE.match(image))


# --- Modifiers ---------------------------------------------------------------

def get_visibility(tokens: list[SyntaxToken]) -> Visibility:
    """First access modifier in source order; PACKAGE if there is none."""
    for token in sorted(tokens, key=lambda t: t.start_offset):
        if token.image in ACCESS_KEYWORDS:
            return Visibility(token.image)
    return Visibility.PACKAGE


def has_static(tokens: list[SyntaxToken]) -> bool:
    return any(token.image == STATIC_KEYWORD for token in tokens)


def modifier_tokens(node: SyntaxNode) -> list[SyntaxToken]:
    """
    Keyword tokens of a declaration's own `modifiers` node. Annotations are
    skipped, so `@SuppressWarnings("static")` is not a modifier.
    """
    tokens: list[SyntaxToken] = []
    for modifiers in node.slot(MODIFIERS_NODE):
        if isinstance(modifiers, SyntaxNode):
            tokens.extend(e for e in iter_children(modifiers) if isinstance(e, SyntaxToken))
    return tokens


def head_tokens(node: SyntaxNode, exclude: tuple[str, ...]) -> list[SyntaxToken]:
    """
    Tokens of every slot except `exclude`; a class header is everything
    but the body.
    """
    tokens: list[SyntaxToken] = []
    for slot, elements in node.children.items():
        if slot not in exclude:
            tokens.extend(collect_slot_tokens(elements))
    return tokens


# --- Classes & package -------------------------------------------------------

def class_name_of(class_node: SyntaxNode) -> Optional[str]:
    for token in collect_slot_tokens(class_node.slot("name")):
        if is_identifier(token.image):
            return token.image
    return None


def find_primary_class(root: SyntaxNode) -> Optional[SyntaxNode]:
    return find_first_node(root, CLASS_NODE)


def class_header_text(class_node: SyntaxNode, source: str) -> str:
    """Source text of a class declaration without its body, e.g. "public class Foo extends Bar"."""
    return tokens_to_text(head_tokens(class_node, exclude=("body",)), source)


def extract_class_names(root: SyntaxNode) -> list[str]:
    names = []
    for class_node in find_all_nodes(root, CLASS_NODE):
        name = class_name_of(class_node)
        if name:
            names.append(name)
    return names


def extract_package_name(root: SyntaxNode, source: str) -> str:
    package_node = find_first_node(root, PACKAGE_NODE)
    if package_node is None:
        return ""
    text = tokens_to_text(collect_tokens(package_node), source)
    text = _PACKAGE_PREFIX_RE.sub("", text)
    return _PACKAGE_SUFFIX_RE.sub("", text).strip()


# --- Fields ------------------------------------------------------------------

def declared_type_text(field_node: SyntaxNode, source: str) -> str:
    type_slot = field_node.slot("type")
    if type_slot:
        return tokens_to_text(collect_slot_tokens(type_slot), source)
    for name in TYPE_NODE_NAMES:
        type_node = find_first_node(field_node, name)
        if type_node is not None:
            return tokens_to_text(collect_tokens(type_node), source)
    return ""


def extract_field_summaries(field_node: SyntaxNode, source: str, line_starts: list[int]) -> list[FieldSummary]:
    """One FieldSummary per declared variable; `int a, b;` gives two."""
    modifiers = modifier_tokens(field_node)
    visibility = get_visibility(modifiers)
    is_static = has_static(modifiers)
    type_text = declared_type_text(field_node, source)

    fields = []
    for declarator in field_node.slot("declarator"):
        if not isinstance(declarator, SyntaxNode) or declarator.name != VARIABLE_DECLARATOR_NODE:
            continue
        name_token = next(iter(collect_slot_tokens(declarator.slot("name"))), None)
        if name_token is None:
            continue
        fields.append(FieldSummary(
            name=name_token.image,
            type=type_text,
            visibility=visibility,
            is_static=is_static,
            start_line=offset_to_line(name_token.start_offset, line_starts),
        ))
    return fields


# --- Methods -----------------------------------------------------------------

def count_parameters(parameters: SyntaxNode) -> int:
    return sum(len(find_all_nodes(parameters, name)) for name in PARAMETER_NODE_NAMES)


def parameter_text(parameters: SyntaxNode, source: str) -> str:
    """Text between the parentheses of a formal parameter list."""
    tokens = sorted(collect_tokens(parameters), key=lambda t: t.start_offset)
    if tokens and tokens[0].image == "(":
        tokens = tokens[1:]
    if tokens and tokens[-1].image == ")":
        tokens = tokens[:-1]
    return tokens_to_text(tokens, source)


def extract_method_decl(method_node: SyntaxNode, source: str, line_starts: list[int]) -> Optional[MethodDecl]:
    """
    Builds a MethodDecl, or returns None when the declarator (name plus
    parameter list) is missing from the tree.
    """
    name_slot = method_node.slot("name")
    parameters = next((e for e in method_node.slot("parameters") if isinstance(e, SyntaxNode)), None)
    if not name_slot or parameters is None:
        logger.debug("Skipping %s without a declarator", method_node.name)
        return None

    declarator_tokens = sorted(collect_slot_tokens(name_slot) + collect_tokens(parameters),
                               key=lambda t: t.start_offset)
    name_token = next((t for t in declarator_tokens if t.image != "(" and is_identifier(t.image)), None)
    if name_token is None:
        logger.debug("Skipping %s without a method name", method_node.name)
        return None

    decl_range = node_range(method_node)
    if decl_range is None:
        return None

    modifiers = modifier_tokens(method_node)
    params_count = count_parameters(parameters)
    result_text = tokens_to_text(collect_slot_tokens(method_node.slot("type")), source)
    call_shape = f"{name_token.image}({parameter_text(parameters, source)})"
    signature = f"{result_text} {call_shape}" if result_text else call_shape

    body_start = body_end = None
    body = next((e for e in method_node.slot("body") if isinstance(e, SyntaxNode) and e.name == BODY_NODE), None)
    if body is not None:
        body_range = node_range(body)
        if body_range is not None:
            body_start, body_end = body_range

    return MethodDecl(
        name=name_token.image,
        params_count=params_count,
        visibility=get_visibility(modifiers),
        is_static=has_static(modifiers),
        start_line=offset_to_line(name_token.start_offset, line_starts),
        signature=signature,
        start_offset=decl_range[0],
        end_offset=decl_range[1],
        body_start_offset=body_start,
        body_end_offset=body_end,
    )


# --- Whole file ---------------------------------------------------------------

def summarize_tree(root: SyntaxNode, source: str, fallback_class_name: str,
                   line_starts: Optional[list[int]] = None) -> tuple[ClassSummary, tuple[MethodDecl, ...]]:
    """
    Produces the ClassSummary and the full MethodDecl list for one file.
    Never raises for an incomplete tree; broken declarations are just skipped.
    """
    if line_starts is None:
        line_starts = build_line_index(source)

    fields: list[FieldSummary] = []
    for field_node in find_all_nodes(root, FIELD_NODE):
        fields.extend(extract_field_summaries(field_node, source, line_starts))

    methods: list[MethodDecl] = []
    for method_node in find_all_nodes(root, METHOD_NODE):
        decl = extract_method_decl(method_node, source, line_starts)
        if decl is not None:
            methods.append(decl)

    class_names = extract_class_names(root)
    class_name = class_names[0] if class_names else fallback_class_name
    inner_classes = tuple(name for name in class_names[1:] if name != class_name)

    summary = ClassSummary(
        class_name=class_name,
        package_name=extract_package_name(root, source),
        fields=tuple(fields),
        methods=tuple(m.to_summary() for m in methods),
        inner_classes=inner_classes,
    )
    return summary, tuple(methods)
