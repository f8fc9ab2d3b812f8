"""
Grammar registry and tree-sitter parsing.

Each supported language maps to a tree-sitter grammar package
(``tree-sitter-python``, ``tree-sitter-c``, ...). Grammars are imported
lazily, so only the ones actually used need to be installed.
"""

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from tree_sitter import Language, Parser, Tree

from codeflow.core.ir import FlowChart
from codeflow.frontend.tree_builder import flowchart_from_tree

logger = logging.getLogger(__name__)


class UnsupportedLanguageError(ValueError):
    """Raised for a language id or file extension with no registered grammar."""


class GrammarNotInstalledError(ImportError):
    """Raised when the grammar package for a registered language is missing."""


@dataclass(frozen=True)
class LanguageInfo:
    id: str
    name: str
    module: str
    extensions: Tuple[str, ...]

    @property
    def package(self) -> str:
        """Distribution name of the grammar on PyPI."""
        return self.module.replace("_", "-")


LANGUAGES: Dict[str, LanguageInfo] = {
    info.id: info
    for info in (
        LanguageInfo("javascript", "JavaScript", "tree_sitter_javascript", (".js", ".mjs", ".cjs", ".jsx")),
        LanguageInfo("python", "Python", "tree_sitter_python", (".py",)),
        LanguageInfo("c", "C", "tree_sitter_c", (".c", ".h")),
        LanguageInfo("go", "Go", "tree_sitter_go", (".go",)),
        LanguageInfo("rust", "Rust", "tree_sitter_rust", (".rs",)),
        LanguageInfo("java", "Java", "tree_sitter_java", (".java",)),
        LanguageInfo("cpp", "C++", "tree_sitter_cpp", (".cpp", ".cc", ".cxx", ".hpp", ".hh")),
    )
}

EXAMPLE_CODES: Dict[str, str] = {
    "c": (
        "#include <stdio.h>\n\n"
        "int main() {\n"
        "    int i;\n"
        "    int sum = 0;\n"
        "    int count = 5;\n"
        "    \n"
        "    for (i = 0; i < count; i++) {\n"
        "        sum += i;\n"
        "        printf(\"%d\", i);\n"
        "    }\n"
        "    \n"
        "    printf(\"Total: %d\", sum);\n"
        "    printf(\"Done\");\n"
        "    return 0;\n"
        "}"
    ),
    "javascript": (
        "let count = 0;\n"
        "while (count < 3) {\n"
        "  console.log(\"Looping...\");\n"
        "  count++;\n"
        "}\n"
        "console.log(\"Done.\");"
    ),
    "python": (
        "x = 0\n"
        "while x < 5:\n"
        "    print(x)\n"
        "    x += 1\n"
        "print(\"Done\")"
    ),
    "go": (
        "package main\n"
        "import \"fmt\"\n\n"
        "func main() {\n"
        "    sum := 0\n"
        "    count := 0\n"
        "    total := 10\n"
        "    \n"
        "    for i := 0; i < 5; i++ {\n"
        "        sum += i\n"
        "        count++\n"
        "        fmt.Println(i)\n"
        "    }\n"
        "    \n"
        "    fmt.Println(sum)\n"
        "    fmt.Println(count)\n"
        "    fmt.Println(\"Done\")\n"
        "}"
    ),
    "rust": (
        "fn main() {\n"
        "    let mut n = 0;\n"
        "    while n < 5 {\n"
        "        println!(\"{}\", n);\n"
        "        n += 1;\n"
        "    }\n"
        "}"
    ),
    "java": (
        "public class Main {\n"
        "    public static void main(String[] args) {\n"
        "        for (int i = 0; i < 5; i++) {\n"
        "            System.out.println(i);\n"
        "        }\n"
        "    }\n"
        "}"
    ),
    "cpp": (
        "#include <iostream>\n"
        "int main() {\n"
        "    int x = 0;\n"
        "    while (x < 5) {\n"
        "        std::cout << x;\n"
        "        x++;\n"
        "    }\n"
        "    return 0;\n"
        "}"
    ),
}


def get_language_info(language: str) -> LanguageInfo:
    try:
        return LANGUAGES[language]
    except KeyError:
        raise UnsupportedLanguageError(
            f"Unknown language: {language}. Use: {', '.join(LANGUAGES)}"
        ) from None


def detect_language(path: Union[str, Path]) -> str:
    """Return the language id registered for a file's extension."""
    suffix = Path(path).suffix.lower()
    for info in LANGUAGES.values():
        if suffix in info.extensions:
            return info.id
    raise UnsupportedLanguageError(f"Cannot detect language from extension '{suffix}' of {path}")


def get_parser(language: str) -> Parser:
    """Create a tree-sitter parser for a registered language."""
    info = get_language_info(language)
    try:
        grammar = importlib.import_module(info.module)
    except ImportError as e:
        raise GrammarNotInstalledError(
            f"Grammar for {info.name} is not installed. Install it with: pip install {info.package}"
        ) from e

    logger.debug("Loaded %s grammar from %s", info.name, info.module)
    parser = Parser()
    parser.language = Language(grammar.language())
    return parser


def parse(source: Union[str, bytes], language: str) -> Tree:
    """Parse source text with the grammar of ``language``."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = get_parser(language).parse(source)
    if tree.root_node.has_error:
        # Best effort: tree-sitter still returns a usable tree
        logger.warning("Syntax errors while parsing %s source", language)
    return tree


def flowchart_from_source(
    source: Union[str, bytes],
    language: str,
    group_sequential: bool = False,
    name: Optional[str] = None,
) -> FlowChart:
    """Parse ``source`` and build its flowchart."""
    tree = parse(source, language)
    chart_name = name or get_language_info(language).name
    return flowchart_from_tree(tree.root_node, group_sequential=group_sequential, name=chart_name)
