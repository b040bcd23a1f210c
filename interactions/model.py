"""Scenario records consumed by the grid renderer.

A scenario is a small directed graph over the named entities A, B, C and D
together with the two text lines shown above it in its panel. Records are
frozen: the enumerator builds them once and the renderer only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import networkx as nx

ShapeKind = Literal["circle", "rect"]


@dataclass(frozen=True, slots=True)
class Edge:
    """Arrow between two nodes.

    Attributes:
        source: Name of the influencing node.
        target: Name of the influenced node.
        bidirectional: True for mutualism; the arrow gets a head at both ends.
    """

    source: str
    target: str
    bidirectional: bool = False


@dataclass(frozen=True, slots=True)
class Node:
    """Entity drawn in a panel.

    Attributes:
        name: Single-letter label drawn inside the node.
        layer: Explicit vertical row (0 is topmost). ``None`` lets the layout
            infer the row from the incoming edges.
        shape: ``"circle"`` for an instantaneous event, ``"rect"`` for a
            durational process.
    """

    name: str
    layer: int | None = None
    shape: ShapeKind = "circle"


@dataclass(frozen=True, slots=True)
class Scenario:
    """One enumerated combination of relationship settings."""

    title: str
    subtitle: str
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]

    @property
    def node_names(self) -> list[str]:
        return [n.name for n in self.nodes]

    @property
    def has_layers(self) -> bool:
        """Return True when every node carries an explicit layer."""
        return bool(self.nodes) and all(n.layer is not None for n in self.nodes)

    def node(self, name: str) -> Node:
        """Return the node called ``name``.

        Raises:
            KeyError: If the scenario has no such node.
        """
        for n in self.nodes:
            if n.name == name:
                return n
        raise KeyError(name)

    def to_graph(self) -> nx.MultiDiGraph:
        """Return the scenario as a directed multigraph.

        Node insertion order follows ``nodes``. Every edge is kept, parallel
        ones included. A bidirectional edge becomes a pair of opposite directed
        edges flagged with ``bidirectional=True``.
        """
        graph = nx.MultiDiGraph()
        for n in self.nodes:
            graph.add_node(n.name, layer=n.layer, shape=n.shape)
        for e in self.edges:
            graph.add_edge(e.source, e.target, bidirectional=e.bidirectional)
            if e.bidirectional:
                graph.add_edge(e.target, e.source, bidirectional=True)
        return graph

    def incoming_counts(self) -> dict[str, int]:
        """Return the number of incoming arrows per node.

        Every edge counts, including parallel ones; mutualism counts as
        incoming for both endpoints.
        """
        graph = self.to_graph()
        return {name: int(graph.in_degree(name)) for name in self.node_names}
