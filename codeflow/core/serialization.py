"""
JSON serialization for FlowChart objects.

The serialized format mirrors the flow node list handed to renderers:
each node carries its id, display text, type and the ordered ids of its
successors.
"""

import json
from typing import Dict, Any, Type

from codeflow.core.ir import FlowChart, Node, StartNode, EndNode, ProcessNode, DecisionNode, InputNode

NODE_TYPE_MAP: Dict[str, Type[Node]] = {
    "start": StartNode,
    "end": EndNode,
    "process": ProcessNode,
    "decision": DecisionNode,
    "input": InputNode,
}

class JsonSerializer:
    """Serializes and deserializes FlowChart objects to/from JSON."""

    @staticmethod
    def to_dict(flowchart: FlowChart) -> Dict[str, Any]:
        nodes_data = []
        for node in flowchart.nodes.values():
            nodes_data.append({
                "id": node.id,
                "text": node.text,
                "type": node.type,
                "targets": list(node.targets),
                "metadata": node.metadata
            })

        return {
            "name": flowchart.name,
            "metadata": flowchart.metadata,
            "nodes": nodes_data,
        }

    @staticmethod
    def to_json(flowchart: FlowChart, indent: int = 2) -> str:
        return json.dumps(JsonSerializer.to_dict(flowchart), indent=indent)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> FlowChart:
        chart = FlowChart(name=data.get("name", "LoadedFlowChart"), metadata=data.get("metadata"))
        nodes_data = data.get("nodes", [])

        # Reconstruct nodes first so forward targets resolve
        built = []
        for node_data in nodes_data:
            cls = NODE_TYPE_MAP.get(node_data.get("type"), ProcessNode)
            node = cls(
                node_id=node_data.get("id"),
                text=node_data.get("text", ""),
                metadata=node_data.get("metadata")
            )
            built.append((chart.add_node(node), node_data.get("targets", [])))

        for node, targets in built:
            for target_id in targets:
                chart.connect([node.id], target_id)

        return chart

    @staticmethod
    def from_json(json_str: str) -> FlowChart:
        data = json.loads(json_str)
        return JsonSerializer.from_dict(data)
