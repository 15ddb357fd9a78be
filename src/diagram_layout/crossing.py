"""Crossing reduction — barycenter heuristic over alternating sweeps.

Each pass produces a fresh ordering (a new list per level) from the previous
pass's ordering; nothing is reordered in place. Within a pass, levels are
visited in sweep order and each one reads the order its neighbour level has
in the ordering being built, so a reorder propagates down (or up) the sweep.
"""

from __future__ import annotations

from collections.abc import Callable

from diagram_layout.config import CROSSING_PASSES
from diagram_layout.hierarchy import Hierarchy


def barycenter(
    node: int,
    neighbours: list[int],
    neighbour_pos: dict[int, int],
    fallback: float,
) -> float:
    """Average index of ``node``'s neighbours in the adjacent level.

    Returns ``fallback`` (the node's current index) when none of its
    neighbours sit in the adjacent level.
    """
    positions = [neighbour_pos[nb] for nb in neighbours if nb in neighbour_pos]
    if not positions:
        return fallback
    return sum(positions) / len(positions)


def _reorder_level(
    level_nodes: list[int],
    adjacent_nodes: list[int],
    neighbours_of: Callable[[int], list[int]],
) -> list[int]:
    adjacent_pos = {node: i for i, node in enumerate(adjacent_nodes)}
    keys = {
        node: barycenter(node, neighbours_of(node), adjacent_pos, float(i))
        for i, node in enumerate(level_nodes)
    }
    # sorted() is stable: equal barycenters keep their current relative order.
    return sorted(level_nodes, key=lambda n: keys[n])


def sweep(ordering: list[list[int]], hierarchy: Hierarchy, top_down: bool) -> list[list[int]]:
    """Run one sweep and return the new ordering.

    Top-down, each level is sorted by its parents' positions in the level
    above; bottom-up, by its children's positions in the level below. The
    first level of the sweep is copied unchanged.
    """
    result = [list(level) for level in ordering]
    if top_down:
        visit = range(1, len(result))
        step = -1
        neighbours_of = hierarchy.parents
    else:
        visit = range(len(result) - 2, -1, -1)
        step = 1
        neighbours_of = hierarchy.children

    for idx in visit:
        result[idx] = _reorder_level(result[idx], result[idx + step], neighbours_of)
    return result


def reduce_crossings(
    groups: list[list[int]],
    hierarchy: Hierarchy,
    passes: int = CROSSING_PASSES,
) -> list[list[int]]:
    """Reorder every level with ``passes`` alternating sweeps.

    Even passes sweep top-down, odd passes bottom-up. The pass count is
    fixed, so the cost is O(passes * E) whatever the graph looks like.
    """
    ordering = [list(level) for level in groups]
    for pass_idx in range(passes):
        ordering = sweep(ordering, hierarchy, top_down=pass_idx % 2 == 0)
    return ordering


def count_crossings(ordering: list[list[int]], hierarchy: Hierarchy) -> int:
    """Count crossings between distinct parent/child edges of consecutive levels."""
    total = 0
    for l_idx in range(len(ordering) - 1):
        lower_pos = {node: i for i, node in enumerate(ordering[l_idx + 1])}
        edges: list[tuple[int, int]] = []
        for up_pos, parent in enumerate(ordering[l_idx]):
            for child in hierarchy.graph.predecessors(parent):
                if child in lower_pos:
                    edges.append((up_pos, lower_pos[child]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total
