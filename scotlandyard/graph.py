"""Transport graph for the Scotland Yard engine.

The graph is immutable once built: the engine only ever asks it for the
edges leaving a location. Loaders accept an edge list, a plain mapping or a
YAML file of the form::

    nodes: [1, 2, 3]
    edges:
      - {from: 1, to: 2, transport: taxi}
      - {from: 2, to: 3, transport: bus}

Edges are undirected by default, matching the printed board.
"""
from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, NamedTuple

import yaml

from .errors import ConfigurationError
from .models import HIDDEN_LOCATION, Transport

__all__ = ["Edge", "TransportGraph"]


class Edge(NamedTuple):
    source: int
    destination: int
    transport: Transport


class TransportGraph:
    """Read-only mapping from location to its outgoing typed edges."""

    def __init__(self, nodes: Iterable[int], edges: Iterable[Edge]):
        adjacency: dict[int, list[Edge]] = {int(n): [] for n in nodes}
        for edge in edges:
            for endpoint in (edge.source, edge.destination):
                if endpoint not in adjacency:
                    raise ConfigurationError(
                        "Edge references an unknown location",
                        context={"location": endpoint},
                    )
            adjacency[edge.source].append(edge)
        if HIDDEN_LOCATION in adjacency:
            raise ConfigurationError(
                "Location 0 is reserved for Mr X's hidden location"
            )
        self._adjacency = MappingProxyType(
            {node: tuple(out) for node, out in adjacency.items()}
        )

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[int, int, Transport | str]],
        nodes: Iterable[int] | None = None,
        bidirectional: bool = True,
    ) -> "TransportGraph":
        """Build a graph from ``(source, destination, transport)`` triples.

        When ``nodes`` is omitted every edge endpoint becomes a node.
        """
        typed: list[Edge] = []
        for source, destination, transport in edges:
            transport = Transport(transport)
            typed.append(Edge(int(source), int(destination), transport))
            if bidirectional:
                typed.append(Edge(int(destination), int(source), transport))
        if nodes is None:
            seen: dict[int, None] = {}
            for edge in typed:
                seen.setdefault(edge.source)
                seen.setdefault(edge.destination)
            nodes = seen.keys()
        return cls(nodes, typed)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransportGraph":
        try:
            raw_edges = data.get("edges") or []
            triples = [
                (e["from"], e["to"], e["transport"]) for e in raw_edges
            ]
        except (KeyError, TypeError) as exc:
            raise ConfigurationError(f"Malformed edge entry: {exc}") from exc
        try:
            return cls.from_edges(
                triples,
                nodes=data.get("nodes"),
                bidirectional=data.get("bidirectional", True),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid graph definition: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TransportGraph":
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                "Graph file must contain a mapping", context={"path": str(path)}
            )
        return cls.from_mapping(data)

    @property
    def nodes(self) -> tuple[int, ...]:
        return tuple(self._adjacency)

    def edges_from(self, location: int) -> tuple[Edge, ...]:
        """Edges leaving ``location``; empty for unknown locations."""
        return self._adjacency.get(location, ())

    def is_empty(self) -> bool:
        return not self._adjacency

    def __contains__(self, location: object) -> bool:
        return location in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        edge_count = sum(len(out) for out in self._adjacency.values())
        return f"TransportGraph(nodes={len(self)}, edges={edge_count})"
