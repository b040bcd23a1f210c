"""Tests for grid rendering."""

from __future__ import annotations

from pathlib import Path

import matplotlib.image as mpimg
import numpy as np
import pytest

from interactions.config import LayoutConfig, RenderConfig
from interactions.layout import LOWER_ROW_INSET, UPPER_ROW_OFFSET, image_size, panel_rect
from interactions.render import RenderError, render_grid, render_to_file
from interactions.scenarios import get_model
from interactions.text import LINE_HEIGHT, wrap_text


def _text_offset(scenario, width: int = 340) -> int:
    title = len(wrap_text(scenario.title, width))
    subtitle = len(wrap_text(scenario.subtitle, width))
    return max(0, (title - 1) * LINE_HEIGHT + (subtitle - 1) * LINE_HEIGHT)


def test_basic_grid_dimensions(basic_scenarios) -> None:
    canvas = render_grid(basic_scenarios, 8)
    assert (canvas.width, canvas.height) == (3060, 2130)


def test_long_form_grid_dimensions(basic_scenarios) -> None:
    canvas = render_grid(basic_scenarios, 3)
    assert (canvas.width, canvas.height) == (1160, 5490)


def test_chronology_uses_taller_panels(chronology_scenarios) -> None:
    canvas = render_grid(chronology_scenarios[:4], 2, model="chronology")
    assert canvas.height == 50 + 120 + 2 * 280 + 4 * 20
    assert canvas.width == 2 * 360 + 3 * 20


def test_config_overrides_geometry(basic_scenarios) -> None:
    cfg = RenderConfig(
        layout=LayoutConfig(
            panel_width=300, panel_height=200, margin=10, title_height=40, legend_height=100
        )
    )
    canvas = render_grid(basic_scenarios[:5], 2, cfg)
    assert (canvas.width, canvas.height) == image_size(5, 2, cfg.layout, 200)
    assert (canvas.width, canvas.height) == (630, 40 + 100 + 3 * 200 + 5 * 10)


def test_panels_and_background_colours(basic_scenarios) -> None:
    cfg = RenderConfig()
    pal = cfg.palette
    canvas = render_grid(basic_scenarios[:3], 2, cfg)

    assert canvas.get(0, 0) == pal.canvas
    rect = panel_rect(0, 2, cfg.layout, 220)
    assert canvas.get(rect.x, rect.y) == pal.panel_border
    assert canvas.get(rect.right - 2, rect.bottom - 2) == pal.panel
    # Empty slot of the last row stays canvas-coloured
    empty = panel_rect(3, 2, cfg.layout, 220)
    assert canvas.get(empty.x + 5, empty.y + 5) == pal.canvas


def test_nodes_drawn_at_layout_positions(basic_scenarios) -> None:
    cfg = RenderConfig()
    pal = cfg.palette
    scenario = basic_scenarios[16]  # A -> B, no C or D
    canvas = render_grid([scenario], 1, cfg)
    rect = panel_rect(0, 1, cfg.layout, 220)

    offset = _text_offset(scenario)
    cx = (rect.x + 40 + rect.right - 40) // 2
    top = rect.y + UPPER_ROW_OFFSET + offset
    bottom = rect.bottom - LOWER_ROW_INSET + offset

    # Right side of each node is fill (label sits in the middle)
    assert canvas.get(cx + 12, top) == pal.node_fill
    assert canvas.get(cx + 12, bottom) == pal.node_fill
    assert canvas.get(cx + 20, top) == pal.node_border
    # Arrow shaft between the two nodes
    assert canvas.get(cx, (top + bottom) // 2) == pal.arrow


def test_process_nodes_drawn_as_boxes(chronology_scenarios) -> None:
    cfg = RenderConfig()
    pal = cfg.palette
    # No links, no C/D, simultaneous, both processes
    scenario = chronology_scenarios[1 * 4 + 3]
    canvas = render_grid([scenario], 1, cfg, model="chronology")
    rect = panel_rect(0, 1, cfg.layout, 280)
    offset = _text_offset(scenario)
    y = rect.y + UPPER_ROW_OFFSET + offset
    x = rect.x + 40

    # Box corners are border pixels; a circle would leave them blank
    assert canvas.get(x + 24, y + 14) == pal.node_border
    assert canvas.get(x + 20, y + 10) == pal.node_fill


def test_render_to_file_writes_png(tmp_path: Path, basic_scenarios) -> None:
    out = tmp_path / "out" / "grid.png"
    result = render_to_file(out, basic_scenarios[:6], 4)
    assert result == out
    img = mpimg.imread(out)
    assert img.shape[:2] == (50 + 120 + 2 * 220 + 4 * 20, 4 * 360 + 5 * 20)
    assert np.allclose(img[0, 0, :3], np.array([240, 240, 240]) / 255)


@pytest.mark.parametrize("columns", [0, -2])
def test_render_to_file_rejects_bad_columns(tmp_path: Path, basic_scenarios, columns) -> None:
    out = tmp_path / "grid.png"
    with pytest.raises(ValueError, match="columns must be at least 1"):
        render_to_file(out, basic_scenarios, columns)
    assert not out.exists()


def test_render_to_file_wraps_io_errors(tmp_path: Path, basic_scenarios) -> None:
    target = tmp_path / "taken"
    target.mkdir()
    with pytest.raises(RenderError) as exc:
        render_to_file(target, basic_scenarios[:1], 1)
    assert isinstance(exc.value.__cause__, OSError)


def test_unknown_model_rejected(basic_scenarios) -> None:
    with pytest.raises(ValueError, match="Unknown scenario model"):
        render_grid(basic_scenarios, 2, model="fancy")


def test_model_object_accepted(basic_scenarios) -> None:
    canvas = render_grid(basic_scenarios[:2], 2, model=get_model("basic"))
    assert canvas.width == 2 * 360 + 3 * 20
