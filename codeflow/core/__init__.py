"""Core data structures for codeflow flowcharts."""

from .ir import Node, StartNode, EndNode, ProcessNode, DecisionNode, InputNode, Edge, FlowChart
from .serialization import JsonSerializer

__all__ = [
    "Node",
    "StartNode",
    "EndNode",
    "ProcessNode",
    "DecisionNode",
    "InputNode",
    "Edge",
    "FlowChart",
    "JsonSerializer",
]
