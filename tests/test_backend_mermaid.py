"""Tests for the Mermaid backend exporter."""

import pytest
from codeflow.core.ir import FlowChart, StartNode, EndNode, ProcessNode, DecisionNode, InputNode, Edge
from codeflow.backend.mermaid import MermaidExporter


class TestMermaidExporter:
    """Tests for MermaidExporter functionality."""

    @pytest.fixture
    def simple_chart(self):
        """Create a simple chart with all node types."""
        chart = FlowChart("Test")
        s = chart.add_node(StartNode(node_id="start-0", text="Start"))
        p = chart.add_node(ProcessNode(node_id="process-0", text="x = 1"))
        d = chart.add_node(DecisionNode(node_id="decision-0", text="x < 5"))
        e = chart.add_node(EndNode(node_id="end-0", text="End"))

        chart.add_edge(Edge(s.id, p.id))
        chart.add_edge(Edge(p.id, d.id))
        chart.add_edge(Edge(d.id, d.id))
        chart.add_edge(Edge(d.id, e.id))
        return chart

    def test_output_starts_with_graph(self, simple_chart):
        output = MermaidExporter.to_mermaid(simple_chart)

        assert output.startswith("graph TD")

    def test_custom_direction(self, simple_chart):
        output_lr = MermaidExporter.to_mermaid(simple_chart, direction="LR")

        assert output_lr.startswith("graph LR")

    def test_node_shapes(self, simple_chart):
        output = MermaidExporter.to_mermaid(simple_chart)

        assert 'start_0(["Start"])' in output
        assert 'end_0(["End"])' in output
        assert 'process_0["x = 1"]' in output
        assert 'decision_0{"x < 5"}' in output

    def test_input_node_shape(self):
        chart = FlowChart()
        chart.add_node(InputNode(node_id="input-0", text="read n"))

        assert 'input_0[/"read n"/]' in MermaidExporter.to_mermaid(chart)

    def test_edges_follow_targets(self, simple_chart):
        lines = MermaidExporter.to_mermaid(simple_chart).splitlines()

        assert lines[-4:] == [
            "    start_0 --> process_0",
            "    process_0 --> decision_0",
            "    decision_0 --> decision_0",
            "    decision_0 --> end_0",
        ]


def test_mermaid_escapes_special_characters():
    chart = FlowChart()
    chart.add_node(ProcessNode(node_id="p", text='printf("%d", i);'))

    output = MermaidExporter.to_mermaid(chart)

    assert 'p["printf#40;#quot;%d#quot;, i#41;;"]' in output


def test_mermaid_multiline_labels():
    chart = FlowChart()
    chart.add_node(ProcessNode(node_id="p", text="a = 1\nb = 2"))

    assert 'p["a = 1<br/>b = 2"]' in MermaidExporter.to_mermaid(chart)
