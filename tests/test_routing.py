"""Tests for routing.py — side selection, anchors, control and cardinality points."""

from __future__ import annotations

import pytest

from diagram_layout.model import Entity, Relationship, RelationshipKind
from diagram_layout.routing import (
    anchor_point,
    cardinality_anchor,
    choose_sides,
    control_point,
    find_connection_points,
    route_relationship,
    route_relationships,
)
from diagram_layout.types import ConnectionPoint, EntityLayout, Point, Side, Size

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_box(entity_id: str, x: float, y: float, w: float = 100, h: float = 50) -> EntityLayout:
    return EntityLayout(entity=Entity(id=entity_id, name=entity_id), position=Point(x, y), size=Size(w, h))


def make_rel(source: str, target: str, **kwargs) -> Relationship:
    return Relationship(
        id=f"{source}->{target}",
        kind=kwargs.pop("kind", RelationshipKind.Association),
        source_id=source,
        target_id=target,
        **kwargs,
    )


OPPOSITE_PAIRS = {
    (Side.Right, Side.Left),
    (Side.Left, Side.Right),
    (Side.Top, Side.Bottom),
    (Side.Bottom, Side.Top),
}


# ─── choose_sides ─────────────────────────────────────────────────────────────


class TestChooseSides:
    def test_target_to_the_right(self):
        assert choose_sides(make_box("a", 0, 0), make_box("b", 300, 0)) == (Side.Right, Side.Left)

    def test_target_to_the_left(self):
        assert choose_sides(make_box("a", 300, 0), make_box("b", 0, 0)) == (Side.Left, Side.Right)

    def test_target_below(self):
        assert choose_sides(make_box("a", 0, 0), make_box("b", 0, 200)) == (Side.Bottom, Side.Top)

    def test_target_above(self):
        assert choose_sides(make_box("a", 0, 200), make_box("b", 0, 0)) == (Side.Top, Side.Bottom)

    def test_diagonal_tie_routes_vertically(self):
        """|dx| == |dy| is not horizontal."""
        assert choose_sides(make_box("a", 0, 0), make_box("b", 100, 100)) == (Side.Bottom, Side.Top)

    def test_coincident_boxes(self):
        """Same centre: top of the source, bottom of the target."""
        box = make_box("a", 10, 10)
        assert choose_sides(box, box) == (Side.Top, Side.Bottom)

    @pytest.mark.parametrize(
        "tx,ty",
        [(300, 0), (-300, 0), (0, 300), (0, -300), (250, 240), (-10, 500), (0, 0)],
    )
    def test_always_opposite_pair(self, tx, ty):
        sides = choose_sides(make_box("a", 0, 0), make_box("b", tx, ty))
        assert sides in OPPOSITE_PAIRS
        assert sides[0].opposite is sides[1]


# ─── anchor_point ─────────────────────────────────────────────────────────────


class TestAnchorPoint:
    def test_edge_midpoints(self):
        box = make_box("a", 10, 20, 100, 50)
        assert anchor_point(box, Side.Top) == ConnectionPoint(60, 20, Side.Top)
        assert anchor_point(box, Side.Bottom) == ConnectionPoint(60, 70, Side.Bottom)
        assert anchor_point(box, Side.Left) == ConnectionPoint(10, 45, Side.Left)
        assert anchor_point(box, Side.Right) == ConnectionPoint(110, 45, Side.Right)

    def test_find_connection_points_horizontal(self):
        src, tgt = find_connection_points(make_box("a", 0, 0), make_box("b", 300, 0))
        assert src == ConnectionPoint(100, 25, Side.Right)
        assert tgt == ConnectionPoint(300, 25, Side.Left)


# ─── control / cardinality ────────────────────────────────────────────────────


class TestControlPoint:
    def test_horizontal_source_side(self):
        """Left/right source: control at (mid x, source y)."""
        cp = control_point(ConnectionPoint(100, 25, Side.Right), ConnectionPoint(300, 125, Side.Left))
        assert cp == Point(200, 25)

    def test_vertical_source_side(self):
        """Top/bottom source: control at (source x, mid y)."""
        cp = control_point(ConnectionPoint(50, 50, Side.Bottom), ConnectionPoint(150, 200, Side.Top))
        assert cp == Point(50, 125)


class TestCardinalityAnchor:
    def test_each_side(self):
        assert cardinality_anchor(ConnectionPoint(0, 0, Side.Top), 14).to_dict() == {"x": 14, "y": -6, "anchor": "start"}
        assert cardinality_anchor(ConnectionPoint(0, 0, Side.Bottom), 14).to_dict() == {"x": 14, "y": 16, "anchor": "start"}
        assert cardinality_anchor(ConnectionPoint(0, 0, Side.Left), 14).to_dict() == {"x": -6, "y": -14, "anchor": "end"}
        assert cardinality_anchor(ConnectionPoint(0, 0, Side.Right), 14).to_dict() == {"x": 6, "y": -14, "anchor": "start"}


# ─── route_relationship(s) ────────────────────────────────────────────────────


class TestRouteRelationships:
    def test_cardinality_anchors_only_when_labelled(self):
        rl = route_relationship(
            make_rel("a", "b", source_cardinality="1"),
            make_box("a", 0, 0),
            make_box("b", 300, 0),
        )
        assert rl.source_cardinality is not None
        assert (rl.source_cardinality.x, rl.source_cardinality.y) == (106, 11)
        assert rl.target_cardinality is None

    def test_control_point_attached(self):
        rl = route_relationship(make_rel("a", "b"), make_box("a", 0, 0), make_box("b", 0, 200))
        assert rl.control == Point(50, 125)

    def test_dangling_relationship_dropped(self):
        """A relationship naming an unknown entity is silently skipped."""
        index = {"a": 0, "b": 1}
        by_index = {0: make_box("a", 0, 0), 1: make_box("b", 300, 0)}
        rels = [make_rel("a", "b"), make_rel("a", "ghost"), make_rel("ghost", "b")]
        routes = route_relationships(rels, index, by_index)
        assert [rl.relationship.id for rl in routes] == ["a->b"]

    def test_unplaced_index_dropped(self):
        """An id whose index has no layout is skipped too."""
        routes = route_relationships([make_rel("a", "b")], {"a": 0, "b": 1}, {0: make_box("a", 0, 0)})
        assert routes == []

    def test_input_order_preserved(self):
        index = {"a": 0, "b": 1, "c": 2}
        by_index = {0: make_box("a", 0, 0), 1: make_box("b", 300, 0), 2: make_box("c", 0, 300)}
        rels = [make_rel("c", "a"), make_rel("a", "b"), make_rel("b", "c")]
        routes = route_relationships(rels, index, by_index)
        assert [rl.relationship.id for rl in routes] == ["c->a", "a->b", "b->c"]
