# pylint: disable=protected-access,invalid-name
import pytest

from optgraph.graph.custom import CustomGraph
from optgraph.types import Arc, ArcFilter, Directedness, Node

N1, N2, N3, N4 = Node(1), Node(2), Node(3), Node(4)
A1, A2, A3, A4, A5 = Arc(1), Arc(2), Arc(3), Arc(4), Arc(5)


def test_add_node_allocates_sequential_ids():
    g = CustomGraph()
    assert g.add_node() == Node(1)
    assert g.add_node() == Node(2)
    assert g.node_count() == 2


def test_add_node_explicit_id_and_skip():
    g = CustomGraph()
    assert g.add_node(node_id=2) == Node(2)
    assert g.add_node() == Node(1)
    # Automatic allocation skips ids already taken
    assert g.add_node() == Node(3)


@pytest.mark.parametrize("bad_id", [0, -1, True, 1.5])
def test_add_node_rejects_invalid_ids(bad_id):
    g = CustomGraph()
    with pytest.raises(ValueError):
        g.add_node(node_id=bad_id)


def test_add_node_rejects_duplicate_ids():
    g = CustomGraph()
    g.add_node(node_id=1)
    with pytest.raises(ValueError, match="already exists"):
        g.add_node(node_id=1)


def test_add_arc_requires_existing_nodes():
    g = CustomGraph()
    a = g.add_node()
    with pytest.raises(ValueError, match="Head node"):
        g.add_arc(a, Node(99))
    with pytest.raises(ValueError, match="Tail node"):
        g.add_arc(Node(99), a)


def test_add_arc_rejects_duplicate_arc_id():
    g = CustomGraph()
    a, b = g.add_node(), g.add_node()
    g.add_arc(a, b, arc_id=10)
    with pytest.raises(ValueError, match="already exists"):
        g.add_arc(b, a, arc_id=10)


def test_endpoints_and_directedness(mixed_graph):
    g = mixed_graph
    assert (g.u(A1), g.v(A1)) == (N1, N2)
    assert (g.tail(A3), g.head(A3)) == (N3, N1)
    assert not g.is_edge(A1)
    assert g.is_edge(A2)
    assert g.other(A1, N1) == N2
    assert g.other(A1, N2) == N1
    assert g.other(A4, N3) == N3


def test_unknown_arc_endpoints_are_invalid(mixed_graph):
    assert mixed_graph.u(Arc(99)) == Node.INVALID
    assert mixed_graph.v(Arc(99)) == Node.INVALID
    assert not mixed_graph.has_arc(Arc(99))
    assert not mixed_graph.has_node(Node(99))


def test_graph_wide_enumeration(mixed_graph):
    g = mixed_graph
    assert list(g.nodes()) == [N1, N2, N3, N4]
    assert list(g.arcs()) == [A1, A2, A3, A4, A5]
    assert list(g.arcs(ArcFilter.EDGE)) == [A2]
    # Only EDGE restricts graph-wide enumeration
    assert list(g.arcs(ArcFilter.FORWARD)) == list(g.arcs())
    assert g.arc_count() == 5
    assert g.arc_count(ArcFilter.EDGE) == 1


@pytest.mark.parametrize(
    "node,filter,expected",
    [
        (N1, ArcFilter.ALL, {A1, A3, A5}),
        (N1, ArcFilter.FORWARD, {A1, A5}),
        (N1, ArcFilter.BACKWARD, {A3}),
        (N1, ArcFilter.EDGE, set()),
        (N3, ArcFilter.ALL, {A2, A3, A4}),
        (N3, ArcFilter.FORWARD, {A2, A3, A4}),
        (N3, ArcFilter.BACKWARD, {A2, A4}),
        (N3, ArcFilter.EDGE, {A2}),
        (N2, ArcFilter.FORWARD, {A2}),
        (N4, ArcFilter.ALL, set()),
    ],
)
def test_incident_arcs_filters(mixed_graph, node, filter, expected):
    arcs = list(mixed_graph.incident_arcs(node, filter))
    assert set(arcs) == expected
    assert len(arcs) == len(expected)
    assert mixed_graph.incident_arc_count(node, filter) == len(expected)


def test_loop_is_reported_once(mixed_graph):
    assert list(mixed_graph.incident_arcs(N3)).count(A4) == 1
    assert list(mixed_graph.arcs_between(N3, N3)) == [A4]


def test_arcs_between_filter_is_relative_to_first_node(mixed_graph):
    g = mixed_graph
    assert set(g.arcs_between(N1, N2)) == {A1, A5}
    assert set(g.arcs_between(N1, N2, ArcFilter.FORWARD)) == {A1, A5}
    assert list(g.arcs_between(N1, N2, ArcFilter.BACKWARD)) == []
    assert set(g.arcs_between(N2, N1, ArcFilter.BACKWARD)) == {A1, A5}
    assert list(g.arcs_between(N3, N2, ArcFilter.BACKWARD)) == [A2]
    assert list(g.arcs_between(N2, N3, ArcFilter.EDGE)) == [A2]
    assert g.arc_count_between(N1, N3) == 1
    assert list(g.arcs_between(N1, Node(99))) == []


def test_delete_arc(mixed_graph):
    g = mixed_graph
    assert g.delete_arc(A2)
    assert not g.delete_arc(A2)
    assert not g.has_arc(A2)
    assert g.arc_count(ArcFilter.EDGE) == 0
    assert A2 not in set(g.incident_arcs(N3))


def test_delete_node_removes_incident_arcs(mixed_graph):
    g = mixed_graph
    assert g.delete_node(N1)
    assert not g.delete_node(N1)
    assert g.node_count() == 3
    assert list(g.arcs()) == [A2, A4]
    # Removed ids are not reused
    assert g.add_node() == Node(5)


def test_clear(mixed_graph):
    mixed_graph.clear()
    assert mixed_graph.node_count() == 0
    assert mixed_graph.arc_count() == 0


def test_properties_absent_until_set(mixed_graph):
    g = mixed_graph
    assert g.node_properties(N1) is None
    assert g.arc_properties(A1) is None

    g.set_node_properties(N1, {})
    assert g.node_properties(N1) == {}
    g.set_arc_properties(A1, {"cost": 3})
    assert g.arc_properties(A1) == {"cost": 3}

    g.set_arc_properties(A1, None)
    assert g.arc_properties(A1) is None


def test_properties_of_foreign_items_rejected(mixed_graph):
    with pytest.raises(ValueError):
        mixed_graph.set_node_properties(Node(99), {"x": 1})
    with pytest.raises(ValueError):
        mixed_graph.set_arc_properties(Arc(99), {"x": 1})


def test_properties_removed_with_arc():
    g = CustomGraph()
    a, b = g.add_node(), g.add_node()
    arc = g.add_arc(a, b, properties={"cost": 1})
    g.delete_arc(arc)
    assert g.arc_properties(arc) is None
