"""Geometry constants and the LayoutConfig value object.

All distances are in pixels. The module-level constants are the defaults;
callers that need different geometry pass a ``LayoutConfig`` into the
pipeline instead of patching these.
"""

from __future__ import annotations

from dataclasses import dataclass

# ─── Entity box geometry ──────────────────────────────────────────────────────

ENTITY_PADDING: int = 16  # inner padding, left/right and below the last row
ENTITY_HEADER_HEIGHT: int = 32  # name row
MEMBER_HEIGHT: int = 24  # one attribute/method/function/type/value row
CHAR_WIDTH: int = 8  # estimated width of one monospace character
MIN_ENTITY_WIDTH: int = 120

# ─── Canvas geometry ──────────────────────────────────────────────────────────

ENTITY_MARGIN: int = 60  # gap between boxes and around the canvas
TITLE_HEIGHT: int = 40
GRID_COLUMNS: int = 3

# ─── Heuristic bounds ─────────────────────────────────────────────────────────

CROSSING_PASSES: int = 4

# ─── Labels ───────────────────────────────────────────────────────────────────

LABEL_CHAR_WIDTH: int = 7
LABEL_HEIGHT: int = 16
LABEL_LIFT: int = 8  # initial offset above the connection midpoint
LABEL_DISPLACEMENT: int = 20
LABEL_MAX_ITERATIONS: int = 10
# Above this many labels the O(n²) overlap passes are skipped.
LABEL_OVERLAP_LIMIT: int = 500

CARDINALITY_OFFSET: int = 14


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry and iteration limits for one layout computation."""

    entity_padding: int = ENTITY_PADDING
    header_height: int = ENTITY_HEADER_HEIGHT
    member_height: int = MEMBER_HEIGHT
    char_width: int = CHAR_WIDTH
    min_entity_width: int = MIN_ENTITY_WIDTH
    margin: int = ENTITY_MARGIN
    title_height: int = TITLE_HEIGHT
    grid_columns: int = GRID_COLUMNS
    crossing_passes: int = CROSSING_PASSES
    label_char_width: int = LABEL_CHAR_WIDTH
    label_height: int = LABEL_HEIGHT
    label_lift: int = LABEL_LIFT
    label_displacement: int = LABEL_DISPLACEMENT
    label_max_iterations: int = LABEL_MAX_ITERATIONS
    label_overlap_limit: int = LABEL_OVERLAP_LIMIT
    cardinality_offset: int = CARDINALITY_OFFSET


DEFAULT_CONFIG = LayoutConfig()
