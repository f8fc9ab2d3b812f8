import graphviz
from codeflow.core.ir import FlowChart


class GraphvizExporter:
    """Exports a FlowChart to Graphviz/Dot format or renders it."""

    # Node type to shape mapping
    _SHAPES = {
        "start": "ellipse",
        "end": "ellipse",
        "process": "box",
        "decision": "diamond",
        "input": "parallelogram",
    }

    @staticmethod
    def _label(text: str) -> str:
        """Escape backslashes and turn newlines into left-aligned DOT line breaks."""
        text = text.replace("\\", "\\\\")
        if "\n" not in text:
            return text
        return text.replace("\n", "\\l") + "\\l"

    @staticmethod
    def to_digraph(flowchart: FlowChart) -> graphviz.Digraph:
        """Converts FlowChart to a graphviz.Digraph object."""
        dot = graphviz.Digraph(name=flowchart.name, comment=flowchart.name)
        dot.attr(rankdir='TB')

        for node in flowchart.nodes.values():
            shape = GraphvizExporter._SHAPES.get(node.type, GraphvizExporter._SHAPES["process"])
            dot.node(node.id, label=GraphvizExporter._label(node.text), shape=shape)

        for edge in flowchart.edges:
            dot.edge(edge.source_id, edge.target_id)

        return dot

    @staticmethod
    def to_dot(flowchart: FlowChart) -> str:
        """Returns the DOT source string for the flowchart."""
        return GraphvizExporter.to_digraph(flowchart).source

    @staticmethod
    def render(flowchart: FlowChart, filename: str, format: str = 'png', view: bool = False):
        """Renders the flowchart to a file."""
        dot = GraphvizExporter.to_digraph(flowchart)
        dot.render(filename, format=format, view=view)
