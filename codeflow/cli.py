"""
Command-line interface for codeflow.

Usage:
    codeflow ./examples/loop.c -o ./build/
    codeflow ./examples/loop.c -o ./build/ --format graphviz --group
    codeflow script.txt --language python --format json
    codeflow --example go -o ./build/ --format svg
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from codeflow.core.ir import FlowChart
from codeflow.backend.mermaid import MermaidExporter
from codeflow.backend.graphviz import GraphvizExporter
from codeflow.backend.svg import SvgExporter
from codeflow.core.serialization import JsonSerializer
from codeflow.frontend.languages import (
    EXAMPLE_CODES,
    LANGUAGES,
    detect_language,
    flowchart_from_source,
)

logger = logging.getLogger(__name__)

FORMATS = ["mermaid", "graphviz", "dot", "svg", "json"]


def export_flowchart(
    chart: FlowChart,
    output_path: Path,
    format: str
) -> Path:
    """Export a flowchart to the specified format."""

    if format == "mermaid":
        content = MermaidExporter.to_mermaid(chart)
        ext = ".mmd"
    elif format == "graphviz" or format == "dot":
        content = GraphvizExporter.to_dot(chart)
        ext = ".dot"
    elif format == "svg":
        content = SvgExporter.to_svg(chart)
        ext = ".svg"
    elif format == "json":
        content = JsonSerializer.to_json(chart)
        ext = ".json"
    else:
        raise ValueError(f"Unknown format: {format}. Use: {', '.join(FORMATS)}")

    # Sanitize the chart name for use as filename
    safe_name = chart.name.lower().replace(" ", "_").replace("/", "_")
    safe_name = "".join(c for c in safe_name if c.isalnum() or c == "_") or "flowchart"

    output_file = output_path / f"{safe_name}{ext}"
    output_file.write_text(content)

    return output_file


def main(argv: List[str] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="codeflow",
        description="Export flowcharts from source code.",
        epilog="Example: codeflow ./main.c -o ./build/ --group"
    )

    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Source file to convert"
    )

    parser.add_argument(
        "-l", "--language",
        choices=list(LANGUAGES),
        help="Source language (default: detected from the file extension)"
    )

    parser.add_argument(
        "-e", "--example",
        choices=list(EXAMPLE_CODES),
        help="Convert the built-in example snippet for a language instead of a file"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("."),
        help="Output directory (default: current directory)"
    )

    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="mermaid",
        help="Output format (default: mermaid)"
    )

    parser.add_argument(
        "-g", "--group",
        action="store_true",
        help="Merge runs of sequential statements into one process node"
    )

    parser.add_argument(
        "-n", "--name",
        type=str,
        help="Flowchart name (default: input file stem or example language)"
    )

    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_languages:
        print("Supported languages:")
        for info in LANGUAGES.values():
            print(f"  {info.id}: {info.name} ({', '.join(info.extensions)})")
        return 0

    if args.example:
        source = EXAMPLE_CODES[args.example]
        language = args.example
        name = args.name or f"{args.example}_example"
    else:
        if args.input is None:
            print("Error: An input file or --example is required", file=sys.stderr)
            return 1

        if not args.input.exists():
            print(f"Error: File not found: {args.input}", file=sys.stderr)
            return 1

        if not args.input.is_file():
            print(f"Error: Not a file: {args.input}", file=sys.stderr)
            return 1

        try:
            language = args.language or detect_language(args.input)
        except ValueError as e:
            print(f"Error: {e}. Use --language to choose one.", file=sys.stderr)
            return 1

        source = args.input.read_bytes()
        name = args.name or args.input.stem

    try:
        chart = flowchart_from_source(source, language, group_sequential=args.group, name=name)
    except (ImportError, ValueError) as e:
        print(f"Error building flowchart: {e}", file=sys.stderr)
        return 1

    logger.debug("Parsed %s source into %d nodes", language, len(chart.nodes))

    args.output.mkdir(parents=True, exist_ok=True)

    try:
        output_file = export_flowchart(chart, args.output, args.format)
    except Exception as e:
        print(f"Error exporting {chart.name}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Exported '{chart.name}' ({len(chart.nodes)} nodes, {len(chart.edges)} edges) -> {output_file}")
    else:
        print(f"{output_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
