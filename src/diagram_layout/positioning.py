"""Coordinate assignment for entity boxes.

Hierarchical levels are stacked top to bottom, each centred under the widest
level. Entities outside the hierarchy are packed into a fixed-column grid
below it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.model import Entity
from diagram_layout.types import EntityLayout, Point, Size


@dataclass
class Placement:
    """Entity layouts in placement order, plus what bounds need to know."""

    layouts: list[EntityLayout]
    by_index: dict[int, EntityLayout]
    max_level_width: float


def level_width(nodes: list[int], sizes: Sequence[Size], margin: float) -> float:
    """Row width: entity widths plus one margin between neighbours."""
    if not nodes:
        return 0
    return sum(sizes[n].width for n in nodes) + margin * (len(nodes) - 1)


def place_levels(
    ordering: list[list[int]],
    entities: Sequence[Entity],
    sizes: Sequence[Size],
    placement: Placement,
    y: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> float:
    """Place hierarchical levels starting at ``y``; return the next free ``y``."""
    margin = config.margin
    widths = [level_width(nodes, sizes, margin) for nodes in ordering]
    max_w = max(widths, default=0)
    placement.max_level_width = max_w

    for nodes, width in zip(ordering, widths):
        x = margin + (max_w - width) / 2
        row_height: float = 0
        for node in nodes:
            size = sizes[node]
            _place(placement, node, entities[node], x, y, size)
            x += size.width + margin
            row_height = max(row_height, size.height)
        y += row_height + margin

    return y


def place_grid(
    nodes: list[int],
    entities: Sequence[Entity],
    sizes: Sequence[Size],
    placement: Placement,
    y: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> float:
    """Pack ``nodes`` into rows of ``config.grid_columns`` starting at ``y``.

    Returns the bottom edge of the last row (``y`` unchanged when empty).
    """
    margin = config.margin
    x: float = margin
    row_height: float = 0
    column = 0

    for node in nodes:
        size = sizes[node]
        if column >= config.grid_columns:
            x = margin
            y += row_height + margin
            row_height = 0
            column = 0
        _place(placement, node, entities[node], x, y, size)
        x += size.width + margin
        row_height = max(row_height, size.height)
        column += 1

    y += row_height
    return y


def position_entities(
    ordering: list[list[int]],
    disconnected: list[int],
    entities: Sequence[Entity],
    sizes: Sequence[Size],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Placement:
    """Place hierarchical levels, then the disconnected grid below them.

    Every entity index appearing in ``ordering`` or ``disconnected`` gets
    exactly one layout.
    """
    placement = Placement(layouts=[], by_index={}, max_level_width=0)
    y = place_levels(ordering, entities, sizes, placement, config.margin + config.title_height, config)
    if disconnected:
        place_grid(disconnected, entities, sizes, placement, y + config.margin, config)
    return placement


def _place(placement: Placement, node: int, entity: Entity, x: float, y: float, size: Size) -> None:
    layout = EntityLayout(entity=entity, position=Point(x=x, y=y), size=size)
    placement.layouts.append(layout)
    placement.by_index[node] = layout
