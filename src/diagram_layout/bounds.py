"""Canvas bounds and title anchor."""

from __future__ import annotations

from collections.abc import Sequence

from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.types import EntityLayout, LayoutBounds, Point, Size


def calculate_bounds(
    layouts: Sequence[EntityLayout],
    max_level_width: float = 0,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutBounds:
    """Smallest canvas holding every box plus a margin on the right and bottom.

    Width is floored at the widest hierarchical level plus a margin on both
    sides. An empty diagram still gets room for a minimum-width box below
    the title.
    """
    margin = config.margin
    max_x: float = config.min_entity_width + margin * 2
    max_y: float = margin * 2 + config.title_height
    for el in layouts:
        max_x = max(max_x, el.position.x + el.size.width + margin)
        max_y = max(max_y, el.position.y + el.size.height + margin)
    max_x = max(max_x, max_level_width + margin * 2)

    return LayoutBounds(
        size=Size(width=max_x, height=max_y),
        title_position=Point(x=max_x / 2, y=margin + config.title_height / 2),
    )
