"""
Syntax-tree based flowchart builder.

This module walks a parsed syntax tree (as produced by tree-sitter for any
of the supported grammars) and builds a flowchart of its control flow.
Every structural unit is wired by threading two id lists through the
recursion: the *entry* ids are the nodes whose next edge should point at
whatever is built next, and the returned *exit* ids are the nodes through
which control leaves the subtree just built.

Example:
    from codeflow.frontend.languages import parse
    from codeflow.frontend.tree_builder import build_flow_nodes

    tree = parse("while (x < 5) { x++; }", "c")
    nodes = build_flow_nodes(tree.root_node, group_sequential=True)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type

from codeflow.core.ir import (
    FlowChart, Node, StartNode, EndNode, ProcessNode, DecisionNode
)
from codeflow.frontend.classifier import (
    Role,
    classify,
    is_block_like,
    is_complex,
    is_function,
    unwrap_expression_statement,
)
from codeflow.frontend.formatter import TextFormatter

logger = logging.getLogger(__name__)

LOOP_CLAUSE_TAGS = ("for_clause", "for_range_clause", "range_clause")
RANGE_CLAUSE_TAGS = ("for_range_clause", "range_clause")

# Field names tried in order before any structural fallback
CONDITION_FIELDS = ("condition",)
CONDITIONAL_INIT_FIELDS = ("init", "initializer")
CONSEQUENCE_FIELDS = ("consequence",)
ALTERNATIVE_FIELDS = ("alternative",)
LOOP_INIT_FIELDS = ("initializer", "init")
LOOP_BODY_FIELDS = ("body", "consequence")
LOOP_UPDATE_FIELDS = ("update", "post", "increment")
CLAUSE_UPDATE_FIELDS = ("update", "post")
FUNCTION_BODY_FIELDS = ("body",)


def _dedupe(ids: Iterable[str]) -> List[str]:
    """Order-preserving de-duplication of node ids."""
    seen = set()
    result = []
    for node_id in ids:
        if node_id not in seen:
            seen.add(node_id)
            result.append(node_id)
    return result


def _field(node: Optional[Any], names: Sequence[str]) -> Optional[Any]:
    if node is None:
        return None
    for name in names:
        child = node.child_by_field_name(name)
        if child is not None:
            return child
    return None


def _first_child(node: Any, predicate: Callable[[Any], bool]) -> Optional[Any]:
    for child in node.named_children:
        if predicate(child):
            return child
    return None


def _resolve(*resolvers: Callable[[], Optional[Any]]) -> Optional[Any]:
    """Return the first non-None result of the resolvers, tried in order."""
    for resolver in resolvers:
        found = resolver()
        if found is not None:
            return found
    return None


@dataclass
class TreeFlowBuilder:
    """Builds a FlowChart from a syntax tree.

    One builder owns the id counters and the chart of a single build; calling
    ``build`` again starts from scratch, so repeated builds of the same tree
    produce identical ids.
    """

    name: str = "FlowChart"
    group_sequential: bool = False
    formatter: Type[TextFormatter] = TextFormatter
    flowchart: FlowChart = field(default=None)
    _counters: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        self.flowchart = FlowChart(self.name)

    def _new_id(self, kind: str) -> str:
        n = self._counters.get(kind, 0)
        self._counters[kind] = n + 1
        return f"{kind}-{n}"

    def _emit(self, cls: Type[Node], text: str, entry_ids: Sequence[str]) -> str:
        """Create a node, connect it from ``entry_ids`` and return its id."""
        node = cls(node_id=self._new_id(cls.kind), text=text)
        self.flowchart.add_node(node)
        self.flowchart.connect(entry_ids, node.id)
        return node.id

    def build(self, root: Any) -> FlowChart:
        """Build the flowchart for ``root`` and return it."""
        self.flowchart = FlowChart(self.name)
        self._counters = {}

        start_id = self._emit(StartNode, "Start", [])
        exit_ids = self.walk(root, [start_id])
        self._emit(EndNode, "End", _dedupe(exit_ids))

        logger.debug(
            "Built flowchart %r: %d nodes, %d edges (grouped=%s)",
            self.name, len(self.flowchart.nodes), len(self.flowchart.edges), self.group_sequential,
        )
        return self.flowchart

    def walk(self, node: Any, entry_ids: List[str]) -> List[str]:
        """Emit the flow nodes for ``node`` and return its exit ids."""
        if is_function(node):
            return self._walk_function(node, entry_ids)

        inner = unwrap_expression_statement(node)
        if inner is not None:
            return self.walk(inner, entry_ids)

        role = classify(node)
        if role is Role.CONTAINER:
            return self._walk_container(node, entry_ids)
        if role is Role.CONDITIONAL:
            return self._walk_conditional(node, entry_ids)
        if role is Role.LOOP:
            return self._walk_loop(node, entry_ids)

        if not node.is_named:
            return entry_ids

        if role is Role.STATEMENT and not is_complex(node):
            return [self._emit(ProcessNode, self.formatter.clean_node(node), entry_ids)]

        return self._walk_sequence(node.named_children, entry_ids)

    def _walk_sequence(self, children: Iterable[Any], entry_ids: List[str]) -> List[str]:
        current = entry_ids
        for child in children:
            current = self.walk(child, current)
        return current

    def _walk_container(self, node: Any, entry_ids: List[str]) -> List[str]:
        if not self.group_sequential:
            return self._walk_sequence(node.named_children, entry_ids)

        current = entry_ids
        buffer: List[str] = []

        def flush():
            nonlocal current, buffer
            if buffer:
                current = [self._emit(ProcessNode, "\n".join(buffer), current)]
                buffer = []

        for child in node.named_children:
            if classify(child) is Role.STATEMENT and not is_complex(child):
                buffer.append(self.formatter.clean_node(child, grouped=True))
            else:
                flush()
                current = self.walk(child, current)
        flush()
        return current

    def _walk_function(self, node: Any, entry_ids: List[str]) -> List[str]:
        body = _resolve(
            lambda: _field(node, FUNCTION_BODY_FIELDS),
            lambda: _first_child(node, is_block_like),
        )
        if body is None:
            return entry_ids
        return self.walk(body, entry_ids)

    def _walk_conditional(self, node: Any, entry_ids: List[str]) -> List[str]:
        current = entry_ids
        init = _field(node, CONDITIONAL_INIT_FIELDS)
        if init is not None:
            current = [self._emit(ProcessNode, self.formatter.clean_node(init), current)]

        condition = _field(node, CONDITION_FIELDS)
        label = self.formatter.clean_node(condition) if condition is not None else "?"
        decision_id = self._emit(DecisionNode, label, current)

        consequence = _resolve(
            lambda: _field(node, CONSEQUENCE_FIELDS),
            lambda: _first_child(node, is_block_like),
        )
        alternative = _field(node, ALTERNATIVE_FIELDS)

        # A missing branch means control falls straight out of the decision
        exit_ids: List[str] = []
        for branch in (consequence, alternative):
            if branch is not None:
                exit_ids.extend(self.walk(branch, [decision_id]))
            else:
                exit_ids.append(decision_id)
        return _dedupe(exit_ids)

    def _loop_label(self, node: Any, clause: Optional[Any]) -> str:
        condition = _resolve(
            lambda: _field(node, CONDITION_FIELDS),
            lambda: _field(clause, CONDITION_FIELDS),
        )
        if condition is not None:
            return self.formatter.clean_node(condition)
        right = node.child_by_field_name("right")
        if right is not None:
            return "in " + self.formatter.clean_node(right)
        if node.type == "loop_expression":
            return "true"
        if _first_child(node, lambda c: c.type in RANGE_CLAUSE_TAGS) is not None:
            return "Range Loop"
        return "true"

    def _walk_loop(self, node: Any, entry_ids: List[str]) -> List[str]:
        current = entry_ids
        clause = _first_child(node, lambda c: c.type in LOOP_CLAUSE_TAGS)

        initializer = _resolve(
            lambda: _field(node, LOOP_INIT_FIELDS),
            lambda: _field(clause, LOOP_INIT_FIELDS),
        )
        if initializer is not None:
            current = [self._emit(ProcessNode, self.formatter.clean_node(initializer), current)]

        decision_id = self._emit(DecisionNode, self._loop_label(node, clause), current)

        body = _resolve(
            lambda: _field(node, LOOP_BODY_FIELDS),
            lambda: _first_child(node, is_block_like),
        )
        if body is not None:
            body_exit_ids = self.walk(body, [decision_id])
        else:
            body_exit_ids = [decision_id]

        update = _resolve(
            lambda: _field(node, LOOP_UPDATE_FIELDS),
            lambda: _field(clause, CLAUSE_UPDATE_FIELDS),
        )
        if update is not None:
            update_id = self._emit(ProcessNode, self.formatter.clean_node(update), body_exit_ids)
            self.flowchart.connect([update_id], decision_id)
        else:
            self.flowchart.connect(body_exit_ids, decision_id)

        # Leaving the loop always goes through the failed test
        return [decision_id]


def flowchart_from_tree(root: Any, group_sequential: bool = False, name: str = "FlowChart") -> FlowChart:
    """Build a FlowChart from a syntax tree root node."""
    return TreeFlowBuilder(name=name, group_sequential=group_sequential).build(root)


def build_flow_nodes(root: Any, group_sequential: bool = False) -> List[Node]:
    """Build the ordered flow node list for a syntax tree root node."""
    return flowchart_from_tree(root, group_sequential=group_sequential).flow_nodes()
