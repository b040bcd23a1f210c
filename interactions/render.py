"""Grid rendering of scenario panels into a PNG image."""

from __future__ import annotations

from pathlib import Path

from interactions.config import RenderConfig
from interactions.layout import (
    PROCESS_HALF_HEIGHT,
    PROCESS_HALF_WIDTH,
    Rect,
    image_size,
    legend_rect,
    node_positions,
    node_shape,
    panel_rect,
)
from interactions.log_config import get_logger
from interactions.model import Scenario
from interactions.raster import (
    NODE_RADIUS,
    Canvas,
    draw_arrow,
    draw_bidirectional_arrow,
    draw_circle_node,
    draw_rect_border,
    draw_rect_node,
    write_png,
)
from interactions.scenarios import ScenarioModel, get_model
from interactions.text import (
    LINE_HEIGHT,
    draw_centered_label,
    draw_label,
    draw_wrapped_label,
)

logger = get_logger(__name__)


class RenderError(RuntimeError):
    """Raised when the rendered grid cannot be written to disk."""


def effective_panel_height(config: RenderConfig, model: ScenarioModel) -> int:
    if config.layout.panel_height is not None:
        return config.layout.panel_height
    return model.panel_height


def draw_legend(
    canvas: Canvas, rect: Rect, model: ScenarioModel, config: RenderConfig
) -> None:
    """Draw the legend box in three horizontal sections.

    Sections explain the single arrow, the mutualism double arrow, and how
    rows (and, for models that use them, node shapes) encode chronology.
    """
    pal = config.palette
    canvas.fill_rect(rect.x, rect.y, rect.right, rect.bottom, pal.panel)
    draw_rect_border(canvas, rect.x, rect.y, rect.right, rect.bottom, pal.legend_border)

    padding = 10
    x0 = rect.x + padding
    y0 = rect.y + padding
    section_w = (rect.width - 2 * padding) // 3

    draw_label(canvas, "Legend", x0, y0 + 12, pal.title)

    # Single arrow
    s1x, s1y = x0, y0 + 30
    draw_label(canvas, "Influence", s1x, s1y - 8, pal.heading)
    ax1, ax2 = s1x + 10, s1x + 70
    draw_arrow(canvas, ax1, s1y, ax2, s1y, pal.arrow)
    draw_label(canvas, "Single arrow: influence (e.g. C → A)", ax2 + 10, s1y + 4, pal.text)

    # Mutualism
    s2x, s2y = x0 + section_w, s1y
    draw_label(canvas, "Mutualism", s2x, s2y - 8, pal.heading)
    mx1, mx2 = s2x + 10, s2x + 70
    draw_arrow(canvas, mx1, s2y - 3, mx2, s2y - 3, pal.arrow)
    draw_arrow(canvas, mx2, s2y + 3, mx1, s2y + 3, pal.arrow)
    draw_label(canvas, "Double arrow: mutualism (A ↔ B)", mx2 + 10, s2y + 4, pal.text)

    # Chronology
    s3x, s3y = x0 + 2 * section_w, s1y
    draw_label(canvas, "Chronology", s3x, s3y - 8, pal.heading)
    for i, line in enumerate(model.chronology_lines):
        color = pal.text if i == 0 else pal.attribution
        draw_label(canvas, line, s3x + 10, s3y + 10 + i * 16, color)

    if model.shape_legend:
        shapes_y = s3y + 10 + len(model.chronology_lines) * 16 + 12
        draw_circle_node(canvas, s3x + 20, shapes_y, 8, pal.node_fill, pal.node_border)
        draw_label(canvas, "event", s3x + 34, shapes_y + 4, pal.text)
        draw_rect_node(
            canvas, s3x + 110, shapes_y, 12, 7, pal.node_fill, pal.node_border
        )
        draw_label(canvas, "process", s3x + 128, shapes_y + 4, pal.text)


def draw_scenario(
    canvas: Canvas, rect: Rect, scenario: Scenario, config: RenderConfig
) -> None:
    """Draw one scenario panel: text, arrows, then nodes on top."""
    pal = config.palette
    canvas.fill_rect(rect.x, rect.y, rect.right, rect.bottom, pal.panel)
    draw_rect_border(canvas, rect.x, rect.y, rect.right, rect.bottom, pal.panel_border)

    text_x = rect.x + 10
    max_text_width = rect.width - 20
    title_h = draw_wrapped_label(
        canvas, scenario.title, text_x, rect.y + 22, max_text_width, pal.title
    )
    subtitle_y = rect.y + 22 + title_h + 6
    subtitle_h = draw_wrapped_label(
        canvas, scenario.subtitle, text_x, subtitle_y, max_text_width, pal.subtitle
    )
    extra = max(0, (title_h - LINE_HEIGHT) + (subtitle_h - LINE_HEIGHT))

    positions = node_positions(scenario, rect, extra)
    shapes = {n.name: node_shape(n) for n in scenario.nodes}

    for e in scenario.edges:
        fx, fy = positions[e.source]
        tx, ty = positions[e.target]
        draw = draw_bidirectional_arrow if e.bidirectional else draw_arrow
        draw(canvas, fx, fy, tx, ty, pal.arrow, start=shapes[e.source], end=shapes[e.target])

    for n in scenario.nodes:
        cx, cy = positions[n.name]
        if n.shape == "rect":
            draw_rect_node(
                canvas,
                cx,
                cy,
                PROCESS_HALF_WIDTH,
                PROCESS_HALF_HEIGHT,
                pal.node_fill,
                pal.node_border,
            )
        else:
            draw_circle_node(canvas, cx, cy, NODE_RADIUS, pal.node_fill, pal.node_border)
        draw_centered_label(canvas, n.name, cx, cy + 5, pal.text)


def render_grid(
    scenarios: list[Scenario],
    columns: int,
    config: RenderConfig | None = None,
    model: ScenarioModel | str = "basic",
) -> Canvas:
    """Lay out and draw every scenario panel onto a new canvas.

    Args:
        scenarios: Panels to draw, in order.
        columns: Number of grid columns.
        config: Renderer configuration; defaults apply when omitted.
        model: Scenario model (or its name) supplying headline and legend text.

    Returns:
        The finished canvas.

    Raises:
        ValueError: If ``columns`` is less than one or the model is unknown.
    """
    cfg = config or RenderConfig()
    mdl = get_model(model) if isinstance(model, str) else model
    lay = cfg.layout
    panel_h = effective_panel_height(cfg, mdl)

    width, height = image_size(len(scenarios), columns, lay, panel_h)
    logger.debug(
        f"Rendering {len(scenarios)} panels in {columns} columns ({width}x{height})"
    )
    canvas = Canvas(width, height, cfg.palette.canvas)

    draw_centered_label(canvas, mdl.headline, width // 2, lay.margin + 18, cfg.palette.headline)
    if cfg.attribution:
        draw_centered_label(
            canvas, cfg.attribution, width // 2, lay.margin + 36, cfg.palette.attribution
        )

    draw_legend(canvas, legend_rect(width, lay), mdl, cfg)

    for i, s in enumerate(scenarios):
        draw_scenario(canvas, panel_rect(i, columns, lay, panel_h), s, cfg)
    return canvas


def render_to_file(
    path: Path,
    scenarios: list[Scenario],
    columns: int,
    config: RenderConfig | None = None,
    model: ScenarioModel | str = "basic",
) -> Path:
    """Render the grid and write it as a PNG file.

    Raises:
        ValueError: If ``columns`` is less than one or the model is unknown.
        RenderError: If the output file cannot be created or encoded.
    """
    path = Path(path)
    canvas = render_grid(scenarios, columns, config, model)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_png(canvas, path)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to write {path}: {e}")
        raise RenderError(f"Failed to write PNG to {path}: {e}") from e

    logger.info(f"Generated: {path}")
    return path
