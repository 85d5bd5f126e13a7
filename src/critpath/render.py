"""Text renderings of a graph: ASCII art, Mermaid and Graphviz DOT."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, TypedDict

import wcwidth
from grandalf import graphs as grandalf_graphs
from grandalf import layouts as grandalf_layouts

if TYPE_CHECKING:
    from collections.abc import Sequence

    from critpath.graph import Graph
    from critpath.scc import SCCResult

__all__ = [
    "GraphView",
    "extract_graph_view",
    "component_labels",
    "render_ascii",
    "render_mermaid",
    "render_dot",
]

# Prevent excessive memory usage for very large graphs
_MAX_CANVAS_DIM = 10000
# Components listing more members than this are abbreviated in labels
_MAX_LABEL_MEMBERS = 4


class GraphView(TypedDict):
    """Pre-extracted graph data for rendering.

    Nodes are display labels in vertex index order; edges reference labels
    and keep their weight. Exact duplicate edges are removed.
    """

    nodes: list[str]
    edges: list[tuple[str, str, int]]


def extract_graph_view(graph: Graph, labels: Sequence[str] | None = None) -> GraphView:
    """Build a GraphView, labelling vertex i with labels[i] (default: str(i))."""
    names = list(labels) if labels is not None else [str(v) for v in range(graph.n)]
    edges = list(dict.fromkeys((names[u], names[v], w) for u, v, w in graph.edges()))
    return GraphView(nodes=names, edges=edges)


def component_labels(result: SCCResult) -> list[str]:
    """Label each component as ``C<k> {members}`` for condensation views."""
    labels = list[str]()
    for cid, members in enumerate(result.components):
        ordered = sorted(members)
        shown = ",".join(str(v) for v in ordered[:_MAX_LABEL_MEMBERS])
        if len(ordered) > _MAX_LABEL_MEMBERS:
            shown += f",+{len(ordered) - _MAX_LABEL_MEMBERS}"
        labels.append(f"C{cid} {{{shown}}}")
    return labels


# Rows per box: top border, label, bottom border
_BOX_HEIGHT = 3
# Horizontal space between disconnected parts of the drawing
_PART_GAP = 10
_CANVAS_MARGIN = 2

_MERMAID_ESCAPES = str.maketrans(
    {
        "\\": "&#92;",
        '"': "&quot;",
        "[": "&#91;",
        "]": "&#93;",
        "(": "&#40;",
        ")": "&#41;",
        "<": "&lt;",
        ">": "&gt;",
        "{": "&#123;",
        "}": "&#125;",
        "#": "&#35;",
        "\n": " ",
    }
)
_DOT_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n"})


def _text_width(text: str) -> int:
    """Terminal columns taken by text (wide CJK/emoji characters count twice)."""
    width = wcwidth.wcswidth(text)
    # -1 means a non-printable character; fall back to code points
    return len(text) if width < 0 else width


class _BoxView:
    """Size and position grandalf reads and writes during layout."""

    w: int
    h: int
    xy: tuple[float, float]

    def __init__(self, label: str) -> None:
        self.w = _text_width(label) + 4
        self.h = _BOX_HEIGHT
        self.xy = (0.0, 0.0)


class _Canvas:
    """Character grid that clips everything drawn outside its bounds."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.rows = [[" "] * width for _ in range(height)]

    def put(self, x: int, y: int, ch: str, *, overwrite: bool = True) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            if overwrite or self.rows[y][x] == " ":
                self.rows[y][x] = ch

    def text(self, x: int, y: int, s: str) -> None:
        for i, ch in enumerate(s):
            self.put(x + i, y, ch)

    def box(self, cx: int, cy: int, label: str) -> None:
        inner = _text_width(label) + 2
        left = cx - (inner + 2) // 2
        border = "+" + "-" * inner + "+"
        self.text(left, cy - 1, border)
        self.text(left, cy, f"| {label} |")
        self.text(left, cy + 1, border)

    def line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Bresenham segment, drawn only onto blank cells."""
        dx, dy = abs(x1 - x0), abs(y1 - y0)
        step_x = 1 if x1 > x0 else -1
        step_y = 1 if y1 > y0 else -1
        err = dx - dy
        x, y = x0, y0
        while (x, y) != (x1, y1):
            moved_x = moved_y = False
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += step_x
                moved_x = True
            if e2 < dx:
                err += dx
                y += step_y
                moved_y = True
            if moved_x and moved_y:
                ch = "\\" if step_x == step_y else "/"
            elif moved_y:
                ch = "|"
            else:
                ch = "-"
            self.put(x, y, ch, overwrite=False)

    def render(self) -> str:
        lines = ["".join(row).rstrip() for row in self.rows]
        while lines and not lines[-1]:
            lines.pop()
        while lines and not lines[0]:
            lines.pop(0)
        return "\n".join(lines)


def _single_box(label: str) -> str:
    border = "+" + "-" * (_text_width(label) + 2) + "+"
    return "\n".join([border, f"| {label} |", border])


def _layout(
    nodes: list[str], links: list[tuple[str, str]]
) -> dict[str, grandalf_graphs.Vertex]:
    """Run Sugiyama on each connected part and place the parts left to right."""
    vertices = dict[str, grandalf_graphs.Vertex]()
    for label in nodes:
        vertex = grandalf_graphs.Vertex(label)
        vertex.view = _BoxView(label)
        vertices[label] = vertex

    graph = grandalf_graphs.Graph(
        list(vertices.values()),
        [grandalf_graphs.Edge(vertices[src], vertices[dst]) for src, dst in links],
    )

    next_left = 0.0
    for part in graph.C:
        layout = grandalf_layouts.SugiyamaLayout(part)
        layout.init_all()
        layout.draw()

        part_vertices = list(part.sV)
        left = min(v.view.xy[0] - v.view.w / 2 for v in part_vertices)
        right = max(v.view.xy[0] + v.view.w / 2 for v in part_vertices)
        for v in part_vertices:
            x, y = v.view.xy
            v.view.xy = (x - left + next_left, y)
        next_left += right - left + _PART_GAP

    return vertices


def render_ascii(view: GraphView) -> str:
    """Render graph as ASCII art using grandalf's Sugiyama layout.

    Weights are not drawn; use render_mermaid or render_dot for those.
    Self-loops are left out of the drawing.
    """
    nodes = view["nodes"]
    if not nodes:
        return "(empty graph)"
    if len(nodes) == 1:
        return _single_box(nodes[0])

    links = list(dict.fromkeys((src, dst) for src, dst, _ in view["edges"] if src != dst))
    vertices = _layout(nodes, links)
    placed = list(vertices.values())

    min_x = min(v.view.xy[0] - v.view.w / 2 for v in placed)
    max_x = max(v.view.xy[0] + v.view.w / 2 for v in placed)
    min_y = min(v.view.xy[1] - v.view.h / 2 for v in placed)
    max_y = max(v.view.xy[1] + v.view.h / 2 for v in placed)
    width = math.ceil(max_x - min_x) + 2 * _CANVAS_MARGIN + 2
    height = math.ceil(max_y - min_y) + 2 * _CANVAS_MARGIN + 2
    if width > _MAX_CANVAS_DIM or height > _MAX_CANVAS_DIM:
        return f"(graph too large for ASCII: {width}x{height}, use --mermaid or --dot)"

    canvas = _Canvas(width, height)

    def cell(x: float, y: float) -> tuple[int, int]:
        return int(x - min_x) + _CANVAS_MARGIN, int(y - min_y) + _CANVAS_MARGIN

    # Edges run from the bottom border of the source to the top border of the target
    for src, dst in links:
        a, b = vertices[src].view, vertices[dst].view
        x0, y0 = cell(a.xy[0], a.xy[1] + a.h / 2)
        x1, y1 = cell(b.xy[0], b.xy[1] - b.h / 2)
        canvas.line(x0, y0, x1, y1)

    for v in placed:
        canvas.box(*cell(*v.view.xy), str(v.data))

    return canvas.render()


def render_mermaid(view: GraphView) -> str:
    """Render graph as a Mermaid ``flowchart TD`` with weighted edge labels."""
    ids = {label: f"node{i}" for i, label in enumerate(view["nodes"])}
    lines = ["flowchart TD"]
    lines.extend(f'    {ids[label]}["{label.translate(_MERMAID_ESCAPES)}"]' for label in ids)
    lines.extend(f"    {ids[src]}-->|{w}|{ids[dst]}" for src, dst, w in view["edges"])
    return "\n".join(lines)


def _dot_id(label: str) -> str:
    return '"' + label.translate(_DOT_ESCAPES) + '"'


def render_dot(view: GraphView) -> str:
    """Render graph as Graphviz DOT; edge weights become ``label`` attributes.

    Nodes without edges are listed after the edges so they still appear.
    """
    body = [
        f"    {_dot_id(src)} -> {_dot_id(dst)} [label=\"{w}\"]" for src, dst, w in view["edges"]
    ]
    connected = {label for src, dst, _ in view["edges"] for label in (src, dst)}
    body.extend(f"    {_dot_id(label)}" for label in view["nodes"] if label not in connected)
    return "\n".join(["digraph {", *body, "}"])
