"""Grid geometry and per-panel node placement."""

from __future__ import annotations

from dataclasses import dataclass

from interactions.config import LayoutConfig
from interactions.model import Node, Scenario
from interactions.raster import NODE_RADIUS, Shape

# Offsets of the first and last node rows inside a panel
UPPER_ROW_OFFSET = 90
LOWER_ROW_INSET = 50
# Horizontal inset of the outermost nodes
SIDE_INSET = 40

PROCESS_HALF_WIDTH = 24
PROCESS_HALF_HEIGHT = 14


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned box; ``right`` and ``bottom`` are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


def grid_shape(count: int, columns: int) -> tuple[int, int]:
    """Return ``(columns, rows)`` needed to hold ``count`` panels.

    Raises:
        ValueError: If ``columns`` is less than one.
    """
    if columns < 1:
        raise ValueError("columns must be at least 1")
    rows = (count + columns - 1) // columns
    return columns, rows


def image_size(
    count: int, columns: int, layout: LayoutConfig, panel_height: int
) -> tuple[int, int]:
    """Return ``(width, height)`` of the rendered grid in pixels.

    width  = cols * panel_width + (cols + 1) * margin
    height = title_height + legend_height + rows * panel_height + (rows + 2) * margin
    """
    cols, rows = grid_shape(count, columns)
    m = layout.margin
    width = cols * layout.panel_width + (cols + 1) * m
    height = (
        layout.title_height
        + layout.legend_height
        + rows * panel_height
        + (rows + 2) * m
    )
    return width, height


def legend_rect(canvas_width: int, layout: LayoutConfig) -> Rect:
    top = layout.margin + layout.title_height
    return Rect(
        layout.margin, top, canvas_width - 2 * layout.margin, layout.legend_height
    )


def panel_rect(
    index: int, columns: int, layout: LayoutConfig, panel_height: int
) -> Rect:
    """Return the box of the ``index``-th panel (row-major order)."""
    col, row = index % columns, index // columns
    m = layout.margin
    top = m + layout.title_height + layout.legend_height + m
    return Rect(
        m + col * (layout.panel_width + m),
        top + row * (panel_height + m),
        layout.panel_width,
        panel_height,
    )


def node_rows(scenario: Scenario) -> list[list[str]]:
    """Group node names into rows, top to bottom.

    With explicit layers, every distinct layer is a row. Otherwise the
    chronology is inferred from the graph: nodes without incoming arrows are
    earlier (upper row) and influenced nodes are later (lower row). If every
    node has an incoming arrow, as with mutualism on its own, all nodes share
    the upper row.
    """
    if scenario.has_layers:
        layers = sorted({n.layer for n in scenario.nodes})  # type: ignore[type-var]
        return [[n.name for n in scenario.nodes if n.layer == lay] for lay in layers]

    incoming = scenario.incoming_counts()
    early = [name for name in scenario.node_names if incoming[name] == 0]
    late = [name for name in scenario.node_names if incoming[name] > 0]
    if not early:
        return [scenario.node_names] if scenario.nodes else []
    return [early, late] if late else [early]


def spread(names: list[str], left: int, right: int, y: int) -> dict[str, tuple[int, int]]:
    """Place ``names`` on one row: centred if alone, else evenly from left to right."""
    if len(names) == 1:
        return {names[0]: ((left + right) // 2, y)}
    last = len(names) - 1
    return {name: (left + (right - left) * i // last, y) for i, name in enumerate(names)}


def node_positions(
    scenario: Scenario, rect: Rect, text_offset: int = 0
) -> dict[str, tuple[int, int]]:
    """Return the centre of every node in a panel.

    Inferred layouts always use two row slots (upper and lower) so a lone
    upper row stays at the top. Layered layouts spread their rows evenly
    between the upper and lower slots.

    Args:
        scenario: Scenario being drawn.
        rect: Panel box.
        text_offset: Extra height taken by wrapped title lines.
    """
    left = rect.x + SIDE_INSET
    right = rect.right - SIDE_INSET
    top_y = rect.y + UPPER_ROW_OFFSET + text_offset
    bot_y = rect.bottom - LOWER_ROW_INSET + text_offset

    rows = node_rows(scenario)
    slots = max(len(rows), 2) if not scenario.has_layers else len(rows)

    positions: dict[str, tuple[int, int]] = {}
    for i, names in enumerate(rows):
        if slots <= 1:
            y = top_y
        else:
            y = top_y + (bot_y - top_y) * i // (slots - 1)
        positions.update(spread(names, left, right, y))

    # Fallback for any missing position
    for name in scenario.node_names:
        positions.setdefault(name, ((left + right) // 2, (top_y + bot_y) // 2))
    return positions


def node_shape(node: Node) -> Shape:
    if node.shape == "rect":
        return Shape.rect(PROCESS_HALF_WIDTH, PROCESS_HALF_HEIGHT)
    return Shape.circle(NODE_RADIUS)
