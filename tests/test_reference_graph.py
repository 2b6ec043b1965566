"""Tests for ReferenceGraph and graph algorithms."""

from typebind._graph import ReferenceGraph, reachable


class TestReachable:
    """Tests for the reachable algorithm."""

    def test_empty_graph(self) -> None:
        assert reachable({}, "a") == frozenset()

    def test_linear_chain(self) -> None:
        assert reachable({"a": ["b"], "b": ["c"], "c": []}, "a") == frozenset({"b", "c"})

    def test_start_excluded_without_cycle(self) -> None:
        assert "a" not in reachable({"a": ["b"], "b": []}, "a")

    def test_self_loop(self) -> None:
        assert reachable({"a": ["a"]}, "a") == frozenset({"a"})

    def test_longer_cycle(self) -> None:
        assert reachable({"a": ["b"], "b": ["c"], "c": ["a"]}, "b") == frozenset({"a", "b", "c"})


class TestReferenceGraph:
    """Tests for ReferenceGraph construction and queries."""

    def test_empty_graph(self) -> None:
        graph = ReferenceGraph.from_edges([], [])
        assert graph.nodes == frozenset()
        assert len(graph) == 0

    def test_nodes_without_edges(self) -> None:
        graph = ReferenceGraph.from_edges(["User", "Message"], [])
        assert graph.nodes == frozenset({"User", "Message"})
        assert graph.references("User") == frozenset()
        assert "User" in graph
        assert "Missing" not in graph

    def test_references_and_referrers(self) -> None:
        graph = ReferenceGraph.from_edges(
            ["Message", "User", "Address"],
            [("Message", "User"), ("User", "Address"), ("Message", "Address")],
        )
        assert graph.references("Message") == frozenset({"User", "Address"})
        assert graph.referrers("Address") == frozenset({"Message", "User"})
        assert graph.referrers("Message") == frozenset()

    def test_reachable_from(self) -> None:
        graph = ReferenceGraph.from_edges(["A", "B", "C"], [("A", "B"), ("B", "C")])
        assert graph.reachable_from("A") == frozenset({"B", "C"})
        assert graph.reachable_from("C") == frozenset()

    def test_direct_recursion(self) -> None:
        graph = ReferenceGraph.from_edges(["Node"], [("Node", "Node")])
        assert graph.is_recursive("Node") is True

    def test_mutual_recursion(self) -> None:
        graph = ReferenceGraph.from_edges(
            ["Expr", "Call", "Literal"],
            [("Expr", "Call"), ("Call", "Expr"), ("Expr", "Literal")],
        )
        assert graph.recursive_declarations() == frozenset({"Expr", "Call"})
        assert graph.is_recursive("Literal") is False

    def test_unknown_name_queries_are_empty(self) -> None:
        graph = ReferenceGraph.from_edges(["A"], [])
        assert graph.references("Missing") == frozenset()
        assert graph.referrers("Missing") == frozenset()
        assert graph.is_recursive("Missing") is False
