from codeflow.core.ir import FlowChart, Node


class MermaidExporter:
    """Exports a FlowChart to Mermaid.js syntax."""

    # Mermaid shape syntax per node type
    _SHAPES = {
        "start": ('(["', '"])'),   # Stadium shape for Start/End
        "end": ('(["', '"])'),
        "process": ('["', '"]'),    # Rectangle for Process
        "decision": ('{"', '"}'),   # Rhombus for Decision
        "input": ('[/"', '"/]'),    # Parallelogram for Input
    }

    @staticmethod
    def _sanitize(text: str) -> str:
        """Escape special characters for Mermaid syntax."""
        return (
            text.replace('"', '#quot;')
            .replace("(", "#40;")
            .replace(")", "#41;")
            .replace("\n", "<br/>")
        )

    @staticmethod
    def _format_node(node: Node) -> str:
        """Format a node with the shape of its type."""
        left, right = MermaidExporter._SHAPES.get(node.type, MermaidExporter._SHAPES["process"])
        return f'{MermaidExporter._node_key(node.id)}{left}{MermaidExporter._sanitize(node.text)}{right}'

    @staticmethod
    def _node_key(node_id: str) -> str:
        # Hyphens clash with Mermaid link syntax
        return node_id.replace("-", "_")

    @staticmethod
    def to_mermaid(flowchart: FlowChart, direction: str = "TD") -> str:
        """
        Convert flowchart to Mermaid diagram syntax.

        Args:
            flowchart: The flowchart to convert
            direction: Graph direction (TD, LR, etc.)
        """
        lines = [f"graph {direction}"]

        for node in flowchart.nodes.values():
            lines.append("    " + MermaidExporter._format_node(node))

        for edge in flowchart.edges:
            source = MermaidExporter._node_key(edge.source_id)
            target = MermaidExporter._node_key(edge.target_id)
            lines.append(f"    {source} --> {target}")

        return "\n".join(lines)
