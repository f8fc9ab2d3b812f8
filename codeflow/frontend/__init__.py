"""
codeflow frontend modules for building flowcharts from source code.

- classifier: grammar-agnostic structural roles of syntax nodes
- formatter: label cleanup for source text spans
- tree_builder: syntax tree to flowchart translation
- languages: tree-sitter grammar registry and parsing
"""

from .classifier import Role, classify, is_complex, is_statement
from .formatter import TextFormatter
from .tree_builder import TreeFlowBuilder, build_flow_nodes, flowchart_from_tree
from .languages import (
    EXAMPLE_CODES,
    LANGUAGES,
    GrammarNotInstalledError,
    LanguageInfo,
    UnsupportedLanguageError,
    detect_language,
    flowchart_from_source,
    get_parser,
    parse,
)

__all__ = [
    "Role",
    "classify",
    "is_complex",
    "is_statement",
    "TextFormatter",
    "TreeFlowBuilder",
    "build_flow_nodes",
    "flowchart_from_tree",
    "EXAMPLE_CODES",
    "LANGUAGES",
    "GrammarNotInstalledError",
    "LanguageInfo",
    "UnsupportedLanguageError",
    "detect_language",
    "flowchart_from_source",
    "get_parser",
    "parse",
]
