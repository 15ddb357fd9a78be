"""Layout types — the geometry the engine hands to renderers and exporters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from diagram_layout.model import Diagram, Entity, Relationship


class Side(str, Enum):
    """Edge of an entity box that a connection attaches to."""

    Top = "top"
    Bottom = "bottom"
    Left = "left"
    Right = "right"

    @property
    def opposite(self) -> Side:
        return _OPPOSITE[self]


_OPPOSITE: dict[Side, Side] = {
    Side.Top: Side.Bottom,
    Side.Bottom: Side.Top,
    Side.Left: Side.Right,
    Side.Right: Side.Left,
}


@dataclass(frozen=True)
class Point:
    """A 2D point in pixel coordinates."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def to_dict(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class ConnectionPoint:
    """Anchor of a relationship on the box edge ``side``."""

    x: float
    y: float
    side: Side

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "side": self.side.value}


@dataclass(frozen=True)
class CardinalityAnchor:
    """Where a cardinality label is drawn; ``anchor`` is the text anchor."""

    x: float
    y: float
    anchor: str  # "start" | "end"

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "anchor": self.anchor}


@dataclass(frozen=True)
class EntityLayout:
    """A positioned, sized entity box."""

    entity: Entity
    position: Point
    size: Size

    @property
    def center(self) -> Point:
        return Point(
            x=self.position.x + self.size.width / 2,
            y=self.position.y + self.size.height / 2,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entity.id,
            "position": self.position.to_dict(),
            "size": self.size.to_dict(),
        }


@dataclass(frozen=True)
class RelationshipLayout:
    """A routed relationship.

    ``control`` is the quadratic-curve control point between the two anchors.
    Cardinality anchors are ``None`` unless the relationship carries that
    cardinality label.
    """

    relationship: Relationship
    source: ConnectionPoint
    target: ConnectionPoint
    control: Point
    source_cardinality: CardinalityAnchor | None = None
    target_cardinality: CardinalityAnchor | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.relationship.id,
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
            "control": self.control.to_dict(),
            "sourceCardinality": self.source_cardinality.to_dict() if self.source_cardinality else None,
            "targetCardinality": self.target_cardinality.to_dict() if self.target_cardinality else None,
        }


@dataclass(frozen=True)
class LayoutBounds:
    """Canvas extent plus the point the diagram title is centred on."""

    size: Size
    title_position: Point


@dataclass(frozen=True)
class DiagramLayout:
    """Self-contained layout output — everything renderers need."""

    diagram: Diagram
    entities: tuple[EntityLayout, ...]
    relationships: tuple[RelationshipLayout, ...]
    bounds: Size
    title_position: Point

    def entity(self, entity_id: str) -> EntityLayout | None:
        """Return the layout of the first entity with ``entity_id``."""
        for el in self.entities:
            if el.entity.id == entity_id:
                return el
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.diagram.title,
            "entities": [el.to_dict() for el in self.entities],
            "relationships": [rl.to_dict() for rl in self.relationships],
            "bounds": self.bounds.to_dict(),
            "titlePosition": self.title_position.to_dict(),
        }
