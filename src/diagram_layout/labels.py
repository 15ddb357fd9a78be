"""Greedy pairwise de-overlap of relationship labels.

Each label starts just above the midpoint of its connection. Then, for a
bounded number of passes, every overlapping pair pushes its later label
sideways (perpendicular to that label's own relationship) by a fixed step.
The result is order-dependent and not guaranteed overlap-free, but costs at
most O(n² * iterations).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.types import Point, RelationshipLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centred(cls, center: Point, width: float, height: float) -> Rect:
        return cls(x=center.x - width / 2, y=center.y - height / 2, width=width, height=height)

    def overlaps(self, other: Rect) -> bool:
        """Axis-aligned overlap test; touching edges count as overlapping."""
        return not (
            self.x + self.width < other.x
            or other.x + other.width < self.x
            or self.y + self.height < other.y
            or other.y + other.height < self.y
        )


def perpendicular(rl: RelationshipLayout) -> tuple[float, float]:
    """Unit vector perpendicular to the relationship's source → target direction.

    A zero-length connection is treated as pointing along +x, so its labels
    move along +y.
    """
    dx = rl.target.x - rl.source.x
    dy = rl.target.y - rl.source.y
    length = math.hypot(dx, dy)
    if length == 0:
        return (0.0, 1.0)
    return (-dy / length, dx / length)


def initial_position(rl: RelationshipLayout, config: LayoutConfig = DEFAULT_CONFIG) -> Point:
    return Point(
        x=(rl.source.x + rl.target.x) / 2,
        y=(rl.source.y + rl.target.y) / 2 - config.label_lift,
    )


def compute_label_positions(
    relationships: Sequence[RelationshipLayout],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> dict[str, Point]:
    """Return relationship id → label centre for every labelled relationship.

    Relationships without a label (``None`` or ``""``) are absent from the
    result. A repeated relationship id keeps its first occurrence.
    """
    entries: list[RelationshipLayout] = []
    seen: set[str] = set()
    for rl in relationships:
        rel = rl.relationship
        if not rel.label or rel.id in seen:
            continue
        seen.add(rel.id)
        entries.append(rl)

    positions = [initial_position(rl, config) for rl in entries]
    widths = [len(rl.relationship.label or "") * config.label_char_width for rl in entries]
    height = config.label_height
    rects = [Rect.centred(pos, w, height) for pos, w in zip(positions, widths)]

    if len(entries) > config.label_overlap_limit:
        logger.warning(
            "%d labels exceed the overlap limit of %d; keeping midpoint positions",
            len(entries),
            config.label_overlap_limit,
        )
        return {rl.relationship.id: pos for rl, pos in zip(entries, positions)}

    step = config.label_displacement
    iterations = 0
    for _ in range(config.label_max_iterations):
        iterations += 1
        has_overlap = False
        for i in range(len(entries)):
            for j in range(i + 1, len(entries)):
                if not rects[i].overlaps(rects[j]):
                    continue
                has_overlap = True
                px, py = perpendicular(entries[j])
                moved = Point(x=positions[j].x + px * step, y=positions[j].y + py * step)
                positions[j] = moved
                rects[j] = Rect.centred(moved, widths[j], height)
        if not has_overlap:
            break

    logger.debug("placed %d label(s) in %d pass(es)", len(entries), iterations)
    return {rl.relationship.id: pos for rl, pos in zip(entries, positions)}
