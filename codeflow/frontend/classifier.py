"""
Grammar-agnostic classification of syntax-tree nodes.

Grammars name equivalent constructs differently (``if_statement`` in C,
``if_expression`` in Rust, ``elif_clause`` in Python), so roles are decided
from a few static tag tables plus substring rules rather than per-language
visitors. New grammars are supported by extending the tables.
"""

from enum import Enum
from typing import Any, Optional


class Role(Enum):
    CONTAINER = "container"
    CONDITIONAL = "conditional"
    LOOP = "loop"
    STATEMENT = "statement"
    OTHER = "other"


CONTAINER_TAGS = frozenset({
    "program",
    "module",
    "translation_unit",
    "source_file",
    "statement_block",
    "compound_statement",
    "block",
    "statement_list",
    "else_clause",
    "class_declaration",
    "class_body",
})

# Only unwrapped to their body, never emitted as flow nodes
FUNCTION_TAGS = frozenset({
    "function_definition",
    "function_declaration",
    "method_declaration",
    "method_definition",
    "function_item",
})

BLOCK_TAGS = frozenset({"block", "compound_statement"})

CONDITIONAL_TAGS = frozenset({"if_expression", "if_statement"})
CONDITIONAL_SUBSTRINGS = ("if_", "elif_")

LOOP_TAGS = frozenset({"loop_expression", "for_statement"})
LOOP_SUBSTRINGS = ("while", "for")

STATEMENT_TAGS = frozenset({
    "declaration",
    "local_variable_declaration",
    "var_declaration",
    "const_declaration",
    "short_var_declaration",
    "call",
    "call_expression",
    "macro_invocation",
    "assignment_expression",
    "augmented_assignment",
    "inc_dec_expression",
})
STATEMENT_SUFFIXES = ("statement", "declaration")
EXPRESSION_SUFFIX = "expression"

EXPRESSION_STATEMENT = "expression_statement"


def classify_tag(tag: str) -> Role:
    """Classify a bare grammar tag, ignoring any wrapper context."""
    if tag in CONTAINER_TAGS:
        return Role.CONTAINER
    if tag in CONDITIONAL_TAGS or any(s in tag for s in CONDITIONAL_SUBSTRINGS):
        return Role.CONDITIONAL
    if tag in LOOP_TAGS or any(s in tag for s in LOOP_SUBSTRINGS):
        return Role.LOOP
    if tag in STATEMENT_TAGS or tag.endswith(STATEMENT_SUFFIXES):
        return Role.STATEMENT
    if tag.endswith(EXPRESSION_SUFFIX):
        return Role.STATEMENT
    return Role.OTHER


def unwrap_expression_statement(node: Any) -> Optional[Any]:
    """
    Return the child an ``expression_statement`` stands in for.

    Languages that express control flow as expressions (Rust's
    ``loop { }``, ``if x { }``) wrap them in a statement node; when the
    wrapped child is a conditional, a loop or a bare block, the wrapper is
    transparent and the child is returned. Otherwise returns ``None``.
    """
    if node.type != EXPRESSION_STATEMENT or not node.named_children:
        return None
    child = node.named_children[0]
    if child.type in BLOCK_TAGS:
        return child
    if classify_tag(child.type) in (Role.CONDITIONAL, Role.LOOP):
        return child
    return None


def classify(node: Any) -> Role:
    """Decide the structural role of a syntax node."""
    if not node.is_named:
        return Role.OTHER
    if node.type == EXPRESSION_STATEMENT:
        child = unwrap_expression_statement(node)
        if child is None:
            return Role.STATEMENT
        return classify_tag(child.type)
    return classify_tag(node.type)


def is_function(node: Any) -> bool:
    return node.type in FUNCTION_TAGS


def is_complex(node: Any) -> bool:
    """True if the node must be walked structurally rather than flattened into a label."""
    if is_function(node):
        return True
    return classify(node) in (Role.CONTAINER, Role.CONDITIONAL, Role.LOOP)


def is_statement(node: Any) -> bool:
    return classify(node) is Role.STATEMENT


def is_block_like(node: Any) -> bool:
    """Structural fallback used when a body/consequence field is missing."""
    tag = node.type
    return "block" in tag or "statement" in tag or tag == "compound_statement"
