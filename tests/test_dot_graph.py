import networkx as nx

from services.dot_graph import DotEdge, DotGraph, DotNode, GlobalAttributes, dot_source, to_networkx
from services.graph_generator import build_graph, sample_graph


def test_dot_source_layout():
    graph = build_graph(
        [
            DotNode("A_counter_0", (("label", "A"),)),
            DotNode("B_counter_1", (("label", "B"),)),
            DotEdge("A_counter_0", "B_counter_1", (("id", "A_counter_0|B_counter_1"),)),
        ]
    )
    text = dot_source(graph)
    lines = text.splitlines()

    assert lines[0] == "digraph {"
    assert lines[1] == '    graph [rankdir="TB", splines="ortho", concentrate="false"];'
    assert lines[2] == '    node [shape="box", fixedsize="false", style="filled"];'
    assert lines[3] == '    edge [arrowhead="normal"];'
    assert lines[4] == '    "A_counter_0" [label="A"];'
    assert lines[6] == '    "A_counter_0" -> "B_counter_1" [id="A_counter_0|B_counter_1"];'
    assert lines[-1] == "}"
    assert text.endswith("}\n")


def test_dot_source_escapes_free_text():
    graph = DotGraph(
        strict=True,
        directed=False,
        graph_id="prereqs",
        statements=(
            GlobalAttributes("node"),
            DotNode('say "hi"_counter_0', (("label", 'say "hi"\nnow'),)),
            DotEdge("x", "y"),
        ),
    )
    lines = dot_source(graph).splitlines()
    assert lines[0] == 'strict graph "prereqs" {'
    assert lines[1] == "    node [];"
    assert lines[2] == '    "say \\"hi\\"_counter_0" [label="say \\"hi\\"\\nnow"];'
    assert lines[3] == '    "x" -- "y";'


def test_to_networkx_keeps_parallel_edges():
    graph = build_graph(
        [
            DotNode("A"),
            DotNode("B"),
            DotEdge("A", "B", (("id", "first"),)),
            DotEdge("A", "B", (("id", "second"),)),
        ]
    )
    G = to_networkx(graph)
    assert isinstance(G, nx.MultiDiGraph)
    assert G.number_of_edges("A", "B") == 2
    assert G.graph["graph"]["rankdir"] == "TB"


def test_to_networkx_sample_graph_is_acyclic():
    G = to_networkx(sample_graph())
    assert G.number_of_nodes() == 10
    assert nx.is_directed_acyclic_graph(G)
