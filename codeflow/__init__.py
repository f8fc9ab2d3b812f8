"""
codeflow - Turn source code into flowcharts.

Main APIs:
- flowchart_from_source: parse source text with tree-sitter and build its flowchart
- flowchart_from_tree / build_flow_nodes: build from an already parsed syntax tree
- TreeFlowBuilder: the syntax tree walker behind both

Backends:
- MermaidExporter: Mermaid.js diagram syntax
- GraphvizExporter: Graphviz DOT format
- SvgExporter: SVG format (requires Graphviz)
"""

from codeflow.core.ir import FlowChart, Node, Edge, StartNode, EndNode, ProcessNode, DecisionNode, InputNode
from codeflow.core.serialization import JsonSerializer
from codeflow.frontend import TreeFlowBuilder, build_flow_nodes, flowchart_from_tree, flowchart_from_source
from codeflow.backend import MermaidExporter, GraphvizExporter, SvgExporter

__all__ = [
    # Core IR
    "FlowChart",
    "Node",
    "Edge",
    "StartNode",
    "EndNode",
    "ProcessNode",
    "DecisionNode",
    "InputNode",
    # Serialization
    "JsonSerializer",
    # Frontends
    "TreeFlowBuilder",
    "build_flow_nodes",
    "flowchart_from_tree",
    "flowchart_from_source",
    # Backends
    "MermaidExporter",
    "GraphvizExporter",
    "SvgExporter",
]
