from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

Attributes = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class DotNode:
    node_id: str
    attributes: Attributes = ()


@dataclass(frozen=True)
class DotEdge:
    from_node: str
    to_node: str
    attributes: Attributes = ()


@dataclass(frozen=True)
class GlobalAttributes:
    kind: str  # "graph" | "node" | "edge"
    attributes: Attributes = ()


DotStatement = Union[DotNode, DotEdge, GlobalAttributes]


@dataclass(frozen=True)
class DotGraph:
    strict: bool
    directed: bool
    graph_id: Optional[str]
    statements: Tuple[DotStatement, ...]

    @property
    def nodes(self) -> list[DotNode]:
        return [s for s in self.statements if isinstance(s, DotNode)]

    @property
    def edges(self) -> list[DotEdge]:
        return [s for s in self.statements if isinstance(s, DotEdge)]


def _quote(value: str) -> str:
    s = str(value).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{s}"'


def _attr_list(attributes: Attributes) -> str:
    if not attributes:
        return ""
    inner = ", ".join(f"{k}={_quote(v)}" for k, v in attributes)
    return f" [{inner}]"


def dot_source(graph: DotGraph) -> str:
    """
    Serialize a DotGraph into DOT text for a Graphviz renderer.

    Identifiers and values are always quoted: node ids are built from free text
    and may contain spaces or punctuation.
    """
    arrow = "->" if graph.directed else "--"
    head = ("strict " if graph.strict else "") + ("digraph" if graph.directed else "graph")
    if graph.graph_id:
        head += " " + _quote(graph.graph_id)

    lines = [head + " {"]
    for stmt in graph.statements:
        if isinstance(stmt, GlobalAttributes):
            lines.append(f"    {stmt.kind}{_attr_list(stmt.attributes) or ' []'};")
        elif isinstance(stmt, DotNode):
            lines.append(f"    {_quote(stmt.node_id)}{_attr_list(stmt.attributes)};")
        elif isinstance(stmt, DotEdge):
            lines.append(
                f"    {_quote(stmt.from_node)} {arrow} {_quote(stmt.to_node)}"
                f"{_attr_list(stmt.attributes)};"
            )
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_networkx(graph: DotGraph):
    """
    Convert to a networkx MultiDiGraph (parallel edges kept).

    Global attribute blocks are stored under G.graph["graph"|"node"|"edge"].
    Edges pointing at undeclared node ids are kept; networkx adds the endpoint.
    """
    import networkx as nx

    G = nx.MultiDiGraph() if graph.directed else nx.MultiGraph()
    for stmt in graph.statements:
        if isinstance(stmt, GlobalAttributes):
            G.graph.setdefault(stmt.kind, {}).update(dict(stmt.attributes))
        elif isinstance(stmt, DotNode):
            G.add_node(stmt.node_id, **dict(stmt.attributes))
        elif isinstance(stmt, DotEdge):
            G.add_edge(stmt.from_node, stmt.to_node, **dict(stmt.attributes))
    return G
