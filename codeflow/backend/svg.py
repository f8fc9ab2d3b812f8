"""SVG backend for flowcharts using Graphviz.

Requirements:
    Graphviz must be installed on your system:
    - macOS: brew install graphviz
    - Ubuntu/Debian: sudo apt-get install graphviz
    - Windows: Download from https://graphviz.org/download/

Example:
    >>> from codeflow import SvgExporter, flowchart_from_source
    >>>
    >>> chart = flowchart_from_source("x = 1\\nprint(x)", "python")
    >>> svg_string = SvgExporter.to_svg(chart)
"""

import graphviz

from codeflow.backend.graphviz import GraphvizExporter


__all__ = ["SvgExporter"]


class SvgExporter:
    """Exports a FlowChart to SVG format using Graphviz."""

    @staticmethod
    def to_svg(flowchart) -> str:
        """
        Convert flowchart to SVG string using Graphviz.

        Raises:
            RuntimeError: If Graphviz executable is not available
        """
        digraph = GraphvizExporter.to_digraph(flowchart)
        try:
            svg_bytes = digraph.pipe(format='svg')
        except graphviz.ExecutableNotFound as e:
            raise RuntimeError(
                "Graphviz executable not found. "
                "Please install Graphviz: https://graphviz.org/download/"
            ) from e
        return svg_bytes.decode('utf-8')
