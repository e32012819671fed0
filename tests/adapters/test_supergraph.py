import pytest

from optgraph.adapters import Supergraph
from optgraph.graph.complete import CompleteGraph
from optgraph.graph.custom import CustomGraph
from optgraph.types import Arc, ArcFilter, Directedness, Node

N1, N2, N3 = Node(1), Node(2), Node(3)


def test_new_items_do_not_collide_with_base(mixed_graph):
    sg = Supergraph(mixed_graph)
    node = sg.add_node()
    assert not mixed_graph.has_node(node)
    assert node.id > 0
    arc = sg.add_arc(N1, node)
    assert not mixed_graph.has_arc(arc)


def test_union_of_base_and_overlay(mixed_graph):
    sg = Supergraph(mixed_graph)
    extra = sg.add_node()
    arc = sg.add_arc(N1, extra, Directedness.UNDIRECTED)

    assert sg.node_count() == mixed_graph.node_count() + 1
    assert list(sg.nodes())[-1] == extra
    assert sg.arc_count() == mixed_graph.arc_count() + 1
    assert sg.arc_count(ArcFilter.EDGE) == 2
    assert arc in set(sg.arcs(ArcFilter.EDGE))
    assert arc in set(sg.incident_arcs(N1, ArcFilter.BACKWARD))
    assert list(sg.incident_arcs(extra)) == [arc]
    assert list(sg.arcs_between(extra, N1)) == [arc]
    assert set(sg.arcs_between(N1, N2)) == {Arc(1), Arc(5)}
    assert sg.is_edge(arc)
    assert sg.u(arc) == N1 and sg.v(arc) == extra
    assert sg.u(Arc(3)) == N3


def test_base_graph_is_untouched(mixed_graph):
    arcs_before = list(mixed_graph.arcs())
    sg = Supergraph(mixed_graph)
    node = sg.add_node()
    sg.add_arc(node, N2)
    assert list(mixed_graph.arcs()) == arcs_before
    assert not mixed_graph.has_node(node)


def test_only_overlay_items_can_be_deleted(mixed_graph):
    sg = Supergraph(mixed_graph)
    node = sg.add_node()
    arc = sg.add_arc(node, N3)

    assert not sg.delete_arc(Arc(1))
    assert not sg.delete_node(N1)
    assert sg.has_arc(Arc(1))

    assert sg.delete_node(node)
    assert not sg.has_node(node)
    assert not sg.has_arc(arc)
    assert sg.arc_count() == mixed_graph.arc_count()


def test_overlay_arc_with_removed_base_endpoint_is_hidden(mixed_graph):
    sg = Supergraph(mixed_graph)
    node = sg.add_node()
    arc = sg.add_arc(node, N1)
    mixed_graph.delete_node(N1)

    assert not sg.has_arc(arc)
    assert arc not in set(sg.arcs())
    assert list(sg.incident_arcs(node)) == []
    assert sg.arc_count() == mixed_graph.arc_count()


def test_explicit_ids_are_checked(mixed_graph):
    sg = Supergraph(mixed_graph)
    with pytest.raises(ValueError, match="already exists"):
        sg.add_node(node_id=1)
    node = sg.add_node(node_id=100)
    assert node == Node(100)
    with pytest.raises(ValueError, match="already exists"):
        sg.add_arc(node, N1, arc_id=2)
    assert sg.add_arc(node, N1, arc_id=200) == Arc(200)
    with pytest.raises(ValueError, match="does not exist"):
        sg.add_arc(node, Node(999))


def test_properties_fall_back_to_base(mixed_graph):
    mixed_graph.set_node_properties(N1, {"label": "base"})
    sg = Supergraph(mixed_graph)
    node = sg.add_node(properties={"label": "overlay"})
    assert sg.node_properties(N1) == {"label": "base"}
    assert sg.node_properties(node) == {"label": "overlay"}

    sg.set_node_properties(N1, {"label": "shadow"})
    assert sg.node_properties(N1) == {"label": "shadow"}
    assert mixed_graph.node_properties(N1) == {"label": "base"}


def test_clear_keeps_base(mixed_graph):
    sg = Supergraph(mixed_graph)
    node = sg.add_node()
    sg.add_arc(node, N1)
    sg.clear()
    assert sg.node_count() == mixed_graph.node_count()
    assert sg.arc_count() == mixed_graph.arc_count()


def test_supergraph_over_complete_graph():
    base = CompleteGraph(3, Directedness.DIRECTED)
    sg = Supergraph(base)
    hub = sg.add_node()
    for node in base.nodes():
        sg.add_arc(hub, node)
    assert sg.incident_arc_count(hub, ArcFilter.FORWARD) == 3
    assert sg.incident_arc_count(hub, ArcFilter.BACKWARD) == 0
    # 2 base arcs leave each node, plus nothing from the hub
    assert sg.incident_arc_count(base.get_node(0), ArcFilter.FORWARD) == 2
    assert sg.incident_arc_count(base.get_node(0), ArcFilter.BACKWARD) == 3


def test_stacked_supergraphs():
    base = CustomGraph()
    a = base.add_node()
    inner = Supergraph(base)
    b = inner.add_node()
    outer = Supergraph(inner)
    c = outer.add_node()
    arc = outer.add_arc(a, c)
    outer.add_arc(b, c)
    assert outer.node_count() == 3
    assert outer.arc_count() == 2
    assert inner.arc_count() == 0
    assert list(outer.arcs_between(c, a)) == [arc]
