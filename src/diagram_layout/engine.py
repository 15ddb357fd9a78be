"""Layout engines and the public pipeline entry points.

Pipeline (hierarchical):
  1. Entity sizing
  2. Hierarchy building + level assignment (cycle-safe)
  3. Crossing reduction (barycenter, alternating sweeps)
  4. Coordinate assignment (centred levels, fallback grid)
  5. Connection routing
  6. Bounds + title anchor

Label placement is a separate pass over the routed relationships
(``compute_label_positions``); renderers call it on the returned layout.
"""

from __future__ import annotations

import logging
from typing import Protocol

from diagram_layout.bounds import calculate_bounds
from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.crossing import reduce_crossings
from diagram_layout.hierarchy import build_hierarchy, build_index
from diagram_layout.model import Diagram
from diagram_layout.positioning import Placement, place_grid, position_entities
from diagram_layout.routing import route_relationships
from diagram_layout.sizing import calculate_sizes
from diagram_layout.types import DiagramLayout

logger = logging.getLogger(__name__)


class LayoutEngine(Protocol):
    """Protocol that all layout engines implement."""

    def layout(self, diagram: Diagram) -> DiagramLayout:
        """Turn a validated diagram into positioned geometry."""
        ...


class HierarchicalLayout:
    """Inheritance/implementation hierarchy top to bottom, everything else in a grid below."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def layout(self, diagram: Diagram) -> DiagramLayout:
        config = self.config
        entities = diagram.entities
        index = build_index(entities)

        sizes = calculate_sizes(entities, config)
        hierarchy = build_hierarchy(entities, diagram.relationships, index)
        ordering = reduce_crossings(hierarchy.groups, hierarchy, config.crossing_passes)
        placement = position_entities(ordering, hierarchy.disconnected, entities, sizes, config)
        routes = route_relationships(diagram.relationships, index, placement.by_index, config)
        bounds = calculate_bounds(placement.layouts, placement.max_level_width, config)

        logger.debug(
            "laid out %d entities, %d of %d relationships routed",
            len(placement.layouts),
            len(routes),
            len(diagram.relationships),
        )
        return DiagramLayout(
            diagram=diagram,
            entities=tuple(placement.layouts),
            relationships=tuple(routes),
            bounds=bounds.size,
            title_position=bounds.title_position,
        )


class GridLayout:
    """Every entity packed into the fixed-column grid, in input order."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def layout(self, diagram: Diagram) -> DiagramLayout:
        config = self.config
        entities = diagram.entities
        index = build_index(entities)

        sizes = calculate_sizes(entities, config)
        placement = Placement(layouts=[], by_index={}, max_level_width=0)
        place_grid(list(range(len(entities))), entities, sizes, placement, config.margin + config.title_height, config)
        routes = route_relationships(diagram.relationships, index, placement.by_index, config)
        bounds = calculate_bounds(placement.layouts, 0, config)

        return DiagramLayout(
            diagram=diagram,
            entities=tuple(placement.layouts),
            relationships=tuple(routes),
            bounds=bounds.size,
            title_position=bounds.title_position,
        )


def layout(diagram: Diagram, config: LayoutConfig = DEFAULT_CONFIG) -> DiagramLayout:
    """Run the hierarchical layout pipeline."""
    return HierarchicalLayout(config).layout(diagram)


def grid_layout(diagram: Diagram, config: LayoutConfig = DEFAULT_CONFIG) -> DiagramLayout:
    """Run the grid-only layout pipeline."""
    return GridLayout(config).layout(diagram)
