"""Connection routing (anchor sides, anchor points, curve control points).

A connection leaves the source box and enters the target box on opposite
sides: right/left when the centres are further apart horizontally than
vertically, bottom/top otherwise. Anchors sit at the midpoint of the chosen
edge.
"""

from __future__ import annotations

from collections.abc import Sequence

from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.model import Relationship
from diagram_layout.types import (
    CardinalityAnchor,
    ConnectionPoint,
    EntityLayout,
    Point,
    RelationshipLayout,
    Side,
)


def choose_sides(source: EntityLayout, target: EntityLayout) -> tuple[Side, Side]:
    """Pick the (source side, target side) pair for a connection."""
    src_c = source.center
    tgt_c = target.center
    dx = tgt_c.x - src_c.x
    dy = tgt_c.y - src_c.y

    if abs(dx) > abs(dy):
        return (Side.Right, Side.Left) if dx > 0 else (Side.Left, Side.Right)
    # Ties (including coincident centres) route vertically.
    return (Side.Bottom, Side.Top) if dy > 0 else (Side.Top, Side.Bottom)


def anchor_point(layout: EntityLayout, side: Side) -> ConnectionPoint:
    """Midpoint of ``side`` on the box of ``layout``."""
    x, y = layout.position.x, layout.position.y
    w, h = layout.size.width, layout.size.height
    if side is Side.Top:
        return ConnectionPoint(x=x + w / 2, y=y, side=side)
    if side is Side.Bottom:
        return ConnectionPoint(x=x + w / 2, y=y + h, side=side)
    if side is Side.Left:
        return ConnectionPoint(x=x, y=y + h / 2, side=side)
    return ConnectionPoint(x=x + w, y=y + h / 2, side=side)


def find_connection_points(
    source: EntityLayout,
    target: EntityLayout,
) -> tuple[ConnectionPoint, ConnectionPoint]:
    source_side, target_side = choose_sides(source, target)
    return anchor_point(source, source_side), anchor_point(target, target_side)


def control_point(source: ConnectionPoint, target: ConnectionPoint) -> Point:
    """Quadratic-curve control point: bend out of the source side first."""
    mid_x = (source.x + target.x) / 2
    mid_y = (source.y + target.y) / 2
    if source.side in (Side.Top, Side.Bottom):
        return Point(x=source.x, y=mid_y)
    return Point(x=mid_x, y=source.y)


def cardinality_anchor(point: ConnectionPoint, offset: float) -> CardinalityAnchor:
    """Text position for a cardinality label next to ``point``."""
    if point.side is Side.Top:
        return CardinalityAnchor(x=point.x + offset, y=point.y - 6, anchor="start")
    if point.side is Side.Bottom:
        return CardinalityAnchor(x=point.x + offset, y=point.y + 16, anchor="start")
    if point.side is Side.Left:
        return CardinalityAnchor(x=point.x - 6, y=point.y - offset, anchor="end")
    return CardinalityAnchor(x=point.x + 6, y=point.y - offset, anchor="start")


def route_relationship(
    relationship: Relationship,
    source: EntityLayout,
    target: EntityLayout,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> RelationshipLayout:
    src_pt, tgt_pt = find_connection_points(source, target)
    offset = config.cardinality_offset
    return RelationshipLayout(
        relationship=relationship,
        source=src_pt,
        target=tgt_pt,
        control=control_point(src_pt, tgt_pt),
        source_cardinality=cardinality_anchor(src_pt, offset) if relationship.source_cardinality else None,
        target_cardinality=cardinality_anchor(tgt_pt, offset) if relationship.target_cardinality else None,
    )


def route_relationships(
    relationships: Sequence[Relationship],
    index: dict[str, int],
    by_index: dict[int, EntityLayout],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[RelationshipLayout]:
    """Route every relationship whose two endpoints have a layout.

    Relationships naming an unknown entity are dropped silently.
    """
    routes: list[RelationshipLayout] = []
    for rel in relationships:
        src_idx = index.get(rel.source_id)
        tgt_idx = index.get(rel.target_id)
        if src_idx is None or tgt_idx is None:
            continue
        source = by_index.get(src_idx)
        target = by_index.get(tgt_idx)
        if source is None or target is None:
            continue
        routes.append(route_relationship(rel, source, target, config))
    return routes
