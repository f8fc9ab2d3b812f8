"""Backend exporters for flowcharts."""

from codeflow.backend.graphviz import GraphvizExporter
from codeflow.backend.mermaid import MermaidExporter
from codeflow.backend.svg import SvgExporter

__all__ = [
    "GraphvizExporter",
    "MermaidExporter",
    "SvgExporter",
]
