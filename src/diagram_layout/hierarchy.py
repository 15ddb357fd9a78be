"""Hierarchy building — restrict to inheritance/implementation and assign levels.

Entities are addressed by their dense index in the diagram's entity list.
The hierarchy graph is a ``networkx.DiGraph`` whose edges run child → parent
(the relationship's source → target), so ``successors`` are parents and
``predecessors`` are children.

Level of a node = longest path (in hierarchy edges) up to a root, computed
with an explicit-stack DFS so deep hierarchies never hit the interpreter's
recursion limit. A node reached again while still on the DFS path closes a
cycle; that node is pinned to level 0 and the walk does not descend into it
again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import networkx as nx

from diagram_layout.model import Entity, Relationship

logger = logging.getLogger(__name__)

_IN_PROGRESS = 1
_DONE = 2


# ─── Graph construction ───────────────────────────────────────────────────────


def build_index(entities: Sequence[Entity]) -> dict[str, int]:
    """Map entity id → index. A repeated id resolves to its last occurrence."""
    return {entity.id: i for i, entity in enumerate(entities)}


def build_hierarchy_graph(
    index: dict[str, int],
    relationships: Sequence[Relationship],
) -> nx.DiGraph:
    """Build the child → parent graph from hierarchical relationships.

    Relationships with an endpoint missing from ``index`` are ignored. Node
    insertion order follows first appearance in ``relationships`` (source
    before target), which later drives the DFS start order. Repeated
    child → parent pairs share one edge whose ``count`` attribute records
    how many relationships it stands for.
    """
    graph: nx.DiGraph = nx.DiGraph()
    for rel in relationships:
        if not rel.is_hierarchical:
            continue
        child = index.get(rel.source_id)
        parent = index.get(rel.target_id)
        if child is None or parent is None:
            continue
        if graph.has_edge(child, parent):
            graph.edges[child, parent]["count"] += 1
        else:
            graph.add_edge(child, parent, count=1)
    return graph


# ─── Level assignment ─────────────────────────────────────────────────────────


class LevelAssignment:
    """Result of level assignment.

    Attributes:
        levels: Maps node → level, in the order levels were finalised
            (parents before their children).
        pinned: Nodes that closed a cycle and were forced to level 0.
    """

    def __init__(self, levels: dict[int, int], pinned: set[int]) -> None:
        self.levels = levels
        self.pinned = pinned

    @property
    def level_count(self) -> int:
        return (max(self.levels.values()) + 1) if self.levels else 0

    def groups(self) -> list[list[int]]:
        """Nodes grouped by level, ascending; within a level, finalisation order."""
        by_level: dict[int, list[int]] = {}
        for node, level in self.levels.items():
            by_level.setdefault(level, []).append(node)
        return [by_level[level] for level in sorted(by_level)]

    @classmethod
    def assign(cls, graph: nx.DiGraph) -> LevelAssignment:
        """Assign ``level(n) = 1 + max(level(parent))`` (roots get 0).

        Every node is finalised exactly once; each edge is followed at most
        once, so the walk is O(V + E) on any input, cyclic or not.
        """
        levels: dict[int, int] = {}
        pinned: set[int] = set()
        state: dict[int, int] = {}

        for start in graph.nodes:
            if start in state:
                continue
            state[start] = _IN_PROGRESS
            stack: list[tuple[int, Iterator[int]]] = [(start, iter(graph.successors(start)))]

            while stack:
                node, parents = stack[-1]
                descended = False
                for parent in parents:
                    tag = state.get(parent)
                    if tag is None:
                        state[parent] = _IN_PROGRESS
                        stack.append((parent, iter(graph.successors(parent))))
                        descended = True
                        break
                    if tag == _IN_PROGRESS and parent not in levels:
                        # Back edge: break the cycle at ``parent``.
                        levels[parent] = 0
                        pinned.add(parent)
                if descended:
                    continue

                stack.pop()
                state[node] = _DONE
                if node not in pinned:
                    levels[node] = 1 + max((levels[p] for p in graph.successors(node)), default=-1)

        if pinned:
            logger.debug("broke %d hierarchy cycle(s) at nodes %s", len(pinned), sorted(pinned))
        return cls(levels=levels, pinned=pinned)


# ─── Hierarchy ────────────────────────────────────────────────────────────────


@dataclass
class Hierarchy:
    """Hierarchical structure of a diagram, in entity-index space.

    ``groups[k]`` lists the nodes of the k-th lowest level. ``disconnected``
    lists, in input order, every entity outside the hierarchy graph.

    ``parents`` and ``children`` repeat a neighbour once per relationship
    linking the two, so barycenters average over every relationship.
    """

    graph: nx.DiGraph
    levels: dict[int, int]
    groups: list[list[int]]
    disconnected: list[int] = field(default_factory=list)

    def parents(self, node: int) -> list[int]:
        edges = self.graph.out_edges(node, data="count", default=1)
        return [parent for _, parent, count in edges for _ in range(count)]

    def children(self, node: int) -> list[int]:
        edges = self.graph.in_edges(node, data="count", default=1)
        return [child for child, _, count in edges for _ in range(count)]


def build_hierarchy(
    entities: Sequence[Entity],
    relationships: Sequence[Relationship],
    index: dict[str, int] | None = None,
) -> Hierarchy:
    """Build the hierarchy graph, assign levels, and split off disconnected entities."""
    if index is None:
        index = build_index(entities)
    graph = build_hierarchy_graph(index, relationships)
    assignment = LevelAssignment.assign(graph)
    disconnected = [i for i in range(len(entities)) if i not in graph]

    logger.debug(
        "hierarchy: %d level(s), %d leveled, %d disconnected",
        assignment.level_count,
        len(assignment.levels),
        len(disconnected),
    )
    return Hierarchy(
        graph=graph,
        levels=assignment.levels,
        groups=assignment.groups(),
        disconnected=disconnected,
    )
