"""Diagram layout engine: validated class-diagram model → 2D geometry."""

from __future__ import annotations

from diagram_layout.bounds import calculate_bounds
from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.crossing import reduce_crossings
from diagram_layout.engine import GridLayout, HierarchicalLayout, LayoutEngine, grid_layout, layout
from diagram_layout.hierarchy import Hierarchy, LevelAssignment, build_hierarchy
from diagram_layout.labels import compute_label_positions
from diagram_layout.model import (
    Attribute,
    Diagram,
    Entity,
    EntityKind,
    Function,
    Method,
    Parameter,
    Relationship,
    RelationshipKind,
    TypeDefinition,
    TypeRef,
    Visibility,
)
from diagram_layout.routing import find_connection_points
from diagram_layout.sizing import calculate_entity_size
from diagram_layout.types import (
    CardinalityAnchor,
    ConnectionPoint,
    DiagramLayout,
    EntityLayout,
    LayoutBounds,
    Point,
    RelationshipLayout,
    Side,
    Size,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Attribute",
    "CardinalityAnchor",
    "ConnectionPoint",
    "Diagram",
    "DiagramLayout",
    "Entity",
    "EntityKind",
    "EntityLayout",
    "Function",
    "GridLayout",
    "HierarchicalLayout",
    "Hierarchy",
    "LayoutBounds",
    "LayoutConfig",
    "LayoutEngine",
    "LevelAssignment",
    "Method",
    "Parameter",
    "Point",
    "Relationship",
    "RelationshipKind",
    "RelationshipLayout",
    "Side",
    "Size",
    "TypeDefinition",
    "TypeRef",
    "Visibility",
    "build_hierarchy",
    "calculate_bounds",
    "calculate_entity_size",
    "compute_label_positions",
    "find_connection_points",
    "grid_layout",
    "layout",
    "reduce_crossings",
]
