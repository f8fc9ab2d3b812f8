import uuid
from typing import Dict, Iterable, List, Optional, Any

class Node:
    """Base class for all nodes in the flow graph."""
    kind = "process"

    def __init__(self, node_id: Optional[str] = None, text: str = "", metadata: Optional[Dict[str, Any]] = None):
        self.id = node_id if node_id else str(uuid.uuid4())
        self.text = text
        self.targets: List[str] = []
        self.metadata = metadata or {}

    @property
    def type(self) -> str:
        return self.kind

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id} text='{self.text}' targets={self.targets}>"

class StartNode(Node):
    """Represents the entry point of the flow."""
    kind = "start"

class EndNode(Node):
    """Represents a termination point of the flow."""
    kind = "end"

class ProcessNode(Node):
    """Represents one statement or a run of grouped statements."""
    kind = "process"

class DecisionNode(Node):
    """Represents a branching point in the flow (conditions and loop tests)."""
    kind = "decision"

class InputNode(Node):
    """Represents an input/output step."""
    kind = "input"

class Edge:
    """Represents a connection between two nodes."""
    def __init__(self, source_id: str, target_id: str):
        self.source_id = source_id
        self.target_id = target_id

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return (self.source_id, self.target_id) == (other.source_id, other.target_id)

    def __hash__(self):
        return hash((self.source_id, self.target_id))

    def __repr__(self):
        return f"<Edge {self.source_id} -> {self.target_id}>"

class FlowChart:
    """Represents the entire flowchart graph.

    Edges are stored on the source node as an ordered list of target ids,
    so a pair of nodes is connected at most once.
    """
    def __init__(self, name: str = "FlowChart", metadata: Optional[Dict[str, Any]] = None):
        self.name = name
        self.nodes: Dict[str, Node] = {}
        self.metadata = metadata or {}

    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ValueError(f"Node with id {node.id} already exists.")
        self.nodes[node.id] = node
        return node

    def connect(self, source_ids: Iterable[str], target_id: str) -> None:
        """Point every known source at ``target_id``, skipping existing edges."""
        for source_id in source_ids:
            source = self.nodes.get(source_id)
            if source is not None and target_id not in source.targets:
                source.targets.append(target_id)

    def add_edge(self, edge: Edge) -> Edge:
        if edge.source_id not in self.nodes:
            raise ValueError(f"Source node {edge.source_id} does not exist.")
        if edge.target_id not in self.nodes:
            raise ValueError(f"Target node {edge.target_id} does not exist.")
        self.connect([edge.source_id], edge.target_id)
        return edge

    @property
    def edges(self) -> List[Edge]:
        return [
            Edge(node.id, target_id)
            for node in self.nodes.values()
            for target_id in node.targets
        ]

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def flow_nodes(self) -> List[Node]:
        """Return the nodes in creation order."""
        return list(self.nodes.values())
