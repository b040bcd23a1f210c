"""Interaction pattern grids.

Enumerates every combination of a small relationship model between the
entities A, B, C and D and renders the result as a labeled grid image.
"""

__version__ = "0.1.0"

from .api import list_lines, render
from .config import RenderConfig
from .model import Edge, Node, Scenario
from .render import RenderError, render_grid
from .scenarios import (
    MODELS,
    generate_chronology_scenarios,
    generate_scenarios,
    get_model,
)

__all__ = [
    "Edge",
    "MODELS",
    "Node",
    "RenderConfig",
    "RenderError",
    "Scenario",
    "generate_chronology_scenarios",
    "generate_scenarios",
    "get_model",
    "list_lines",
    "render",
    "render_grid",
]
