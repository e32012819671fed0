from optgraph.adapters import UndirectedGraph
from optgraph.types import Arc, ArcFilter, Node

N1, N3 = Node(1), Node(3)
A1, A2, A3 = Arc(1), Arc(2), Arc(3)


def test_every_arc_is_an_edge(mixed_graph):
    view = UndirectedGraph(mixed_graph)
    for arc in mixed_graph.arcs():
        assert view.is_edge(arc)
        assert view.u(arc) == mixed_graph.u(arc)
        assert view.v(arc) == mixed_graph.v(arc)
        assert view.arc_properties(arc) == mixed_graph.arc_properties(arc)


def test_filters_no_longer_hide_arcs(mixed_graph):
    view = UndirectedGraph(mixed_graph)
    assert view.arc_count(ArcFilter.EDGE) == mixed_graph.arc_count()
    assert list(view.arcs(ArcFilter.EDGE)) == list(mixed_graph.arcs())
    assert set(view.incident_arcs(N1, ArcFilter.BACKWARD)) == set(
        mixed_graph.incident_arcs(N1)
    )
    assert view.incident_arc_count(N1, ArcFilter.FORWARD) == 3
    assert set(view.arcs_between(N3, N1, ArcFilter.FORWARD)) == {A3}
    assert view.arc_count_between(N1, Node(2), ArcFilter.EDGE) == 2


def test_base_changes_are_visible(mixed_graph):
    view = UndirectedGraph(mixed_graph)
    new_node = mixed_graph.add_node()
    arc = mixed_graph.add_arc(N1, new_node)
    assert view.has_node(new_node)
    assert view.has_arc(arc)
    assert view.node_count() == mixed_graph.node_count()


def test_own_properties_shadow_base(mixed_graph):
    mixed_graph.set_arc_properties(A1, {"cost": 1})
    mixed_graph.set_node_properties(N1, {"name": "a"})
    view = UndirectedGraph(mixed_graph)

    view.set_arc_properties(A1, {"cost": 9})
    assert view.arc_properties(A1) == {"cost": 9}
    assert mixed_graph.arc_properties(A1) == {"cost": 1}
    assert view.node_properties(N1) == {"name": "a"}

    view.set_arc_properties(A1, None)
    assert view.arc_properties(A1) == {"cost": 1}
    assert view.graph is mixed_graph
