"""
Demo of building flowcharts from source code in several languages.

Run from the repository root:
    python examples/demo.py
"""

from codeflow import GraphvizExporter, MermaidExporter, flowchart_from_source
from codeflow.frontend.languages import EXAMPLE_CODES


if __name__ == "__main__":
    for language, source in EXAMPLE_CODES.items():
        chart = flowchart_from_source(source, language, group_sequential=True)
        print(f"--- {chart.name} ({len(chart.nodes)} nodes) ---")
        print(MermaidExporter.to_mermaid(chart))
        print()

    chart = flowchart_from_source(EXAMPLE_CODES["c"], "c", name="c_example")
    print(GraphvizExporter.to_dot(chart))
