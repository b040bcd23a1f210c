"""Scenario enumeration: every combination of the A/B/C/D relationship model.

Pattern codes used throughout this module:

A-B pattern:
    0 = no direct link
    1 = A -> B
    2 = B -> A
    3 = A <-> B (mutualism)

External pattern for C and D:
    0 = no edges
    1 = -> A only
    2 = -> B only
    3 = -> A and B

Timing (chronology model):
    0 = A happens before B
    1 = A and B are simultaneous
    2 = B happens before A

Kinds (chronology model):
    0 = A event, B event
    1 = A event, B process
    2 = A process, B event
    3 = A process, B process

Enumeration order is the cartesian product of the axes in the order listed,
with the last axis varying fastest. Listing indices and panel positions rely
on that order staying fixed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from typing import Callable

from interactions.log_config import get_logger
from interactions.model import Edge, Node, Scenario, ShapeKind

logger = get_logger(__name__)

AB_PATTERNS = range(4)
EXTERNAL_PATTERNS = range(4)
TIMINGS = range(3)
KINDS = range(4)

# Stable ordering for nicer layouts
NODE_ORDER = ("C", "D", "A", "B")


def ab_title(ab: int) -> str:
    """Return the panel title for an A-B pattern code."""
    titles = {
        0: "A & B: no direct link",
        1: "A → B",
        2: "B → A",
        3: "A ↔ B (mutualism)",
    }
    return titles.get(ab, "A/B pattern ?")


def external_fragment(pattern: int) -> str:
    """Return the sentence fragment describing an external influence."""
    fragments = {
        0: "has no effect on A or B",
        1: "influences A only",
        2: "influences B only",
        3: "influences both A and B",
    }
    return fragments.get(pattern, "?")


def external_subtitle(c_pattern: int, d_pattern: int) -> str:
    """Return the subtitle describing what C and D influence."""
    return (
        f"C {external_fragment(c_pattern)}; D {external_fragment(d_pattern)}"
    )


def timing_phrase(timing: int) -> str:
    phrases = {
        0: "A before B",
        1: "A and B simultaneous",
        2: "B before A",
    }
    return phrases.get(timing, "timing ?")


def _kinds_shapes(kinds: int) -> tuple[ShapeKind, ShapeKind]:
    a_process = kinds in (2, 3)
    b_process = kinds in (1, 3)
    return ("rect" if a_process else "circle", "rect" if b_process else "circle")


def kinds_phrase(kinds: int) -> str:
    """Return the phrase stating whether A and B are events or processes."""
    if kinds not in KINDS:
        return "kinds ?"
    a_shape, b_shape = _kinds_shapes(kinds)

    def word(shape: ShapeKind) -> str:
        return "a process" if shape == "rect" else "an event"

    return f"A is {word(a_shape)}, B is {word(b_shape)}"


def _external_edges(source: str, pattern: int) -> list[Edge]:
    edges: list[Edge] = []
    if pattern in (1, 3):
        edges.append(Edge(source, "A"))
    if pattern in (2, 3):
        edges.append(Edge(source, "B"))
    return edges


def build_edges(ab: int, c_pattern: int, d_pattern: int) -> list[Edge]:
    """Return the edges for one combination of A-B, C and D patterns.

    The A-B edge comes first, then C's edges, then D's edges; external
    sources list A before B.
    """
    edges: list[Edge] = []
    if ab == 1:
        edges.append(Edge("A", "B"))
    elif ab == 2:
        edges.append(Edge("B", "A"))
    elif ab == 3:
        edges.append(Edge("A", "B", bidirectional=True))

    edges.extend(_external_edges("C", c_pattern))
    edges.extend(_external_edges("D", d_pattern))
    return edges


def _present_names(c_pattern: int, d_pattern: int) -> list[str]:
    present = {"A", "B"}
    if c_pattern != 0:
        present.add("C")
    if d_pattern != 0:
        present.add("D")
    return [name for name in NODE_ORDER if name in present]


def generate_scenarios() -> list[Scenario]:
    """Enumerate the basic model: A-B pattern × C pattern × D pattern.

    Returns:
        64 scenarios in nested-loop order (A-B outermost, D innermost). Nodes
        carry no explicit layer, so rows are inferred at render time.
    """
    scenarios: list[Scenario] = []
    for ab, c_pat, d_pat in product(AB_PATTERNS, EXTERNAL_PATTERNS, EXTERNAL_PATTERNS):
        nodes = tuple(Node(name) for name in _present_names(c_pat, d_pat))
        scenarios.append(
            Scenario(
                title=ab_title(ab),
                subtitle=external_subtitle(c_pat, d_pat),
                nodes=nodes,
                edges=tuple(build_edges(ab, c_pat, d_pat)),
            )
        )
    logger.debug(f"Generated {len(scenarios)} basic scenarios")
    return scenarios


def _chronology_layers(timing: int) -> dict[str, int]:
    if timing == 0:
        return {"A": 1, "B": 2}
    if timing == 2:
        return {"A": 2, "B": 1}
    return {"A": 1, "B": 1}


def generate_chronology_scenarios() -> list[Scenario]:
    """Enumerate the chronology model.

    Extends the basic model with the relative timing of A and B and with
    whether each of them is an instantaneous event or a durational process.
    C and D are external causes and always sit on the top layer.

    Returns:
        768 scenarios in nested-loop order: A-B, C, D, timing, kinds (fastest).
    """
    scenarios: list[Scenario] = []
    for ab, c_pat, d_pat, timing, kinds in product(
        AB_PATTERNS, EXTERNAL_PATTERNS, EXTERNAL_PATTERNS, TIMINGS, KINDS
    ):
        layers = _chronology_layers(timing)
        a_shape, b_shape = _kinds_shapes(kinds)
        shapes: dict[str, ShapeKind] = {"A": a_shape, "B": b_shape}

        nodes = tuple(
            Node(name, layer=layers.get(name, 0), shape=shapes.get(name, "circle"))
            for name in _present_names(c_pat, d_pat)
        )
        scenarios.append(
            Scenario(
                title=f"{ab_title(ab)}, {timing_phrase(timing)}",
                subtitle=f"{external_subtitle(c_pat, d_pat)}; {kinds_phrase(kinds)}",
                nodes=nodes,
                edges=tuple(build_edges(ab, c_pat, d_pat)),
            )
        )
    logger.debug(f"Generated {len(scenarios)} chronology scenarios")
    return scenarios


@dataclass(frozen=True)
class ScenarioModel:
    """A named scenario enumeration plus what the renderer needs to draw it.

    Attributes:
        name: Key used on the command line (``--model``).
        description: One-line summary for help text.
        generate: Callable producing the ordered scenario list.
        headline: Main title drawn at the top of the grid.
        chronology_lines: Lines for the chronology section of the legend.
        panel_height: Panel height used unless the configuration overrides it.
        shape_legend: Whether the legend explains event/process shapes.
    """

    name: str
    description: str
    generate: Callable[[], list[Scenario]]
    headline: str
    chronology_lines: tuple[str, ...] = field(default_factory=tuple)
    panel_height: int = 220
    shape_legend: bool = False


MODELS: dict[str, ScenarioModel] = {
    "basic": ScenarioModel(
        name="basic",
        description="A-B relation × C influence × D influence (64 scenarios)",
        generate=generate_scenarios,
        headline=(
            "Interaction patterns of A and B with C and D (all basic combinations)"
        ),
        chronology_lines=(
            "Within each panel:",
            "Upper row = earlier (no incoming arrows)",
            "Lower row = later (influenced by others)",
        ),
        panel_height=220,
    ),
    "chronology": ScenarioModel(
        name="chronology",
        description=(
            "basic model × relative timing × event/process kinds (768 scenarios)"
        ),
        generate=generate_chronology_scenarios,
        headline=(
            "Interaction patterns of A and B with C and D "
            "(timing and event/process combinations)"
        ),
        chronology_lines=(
            "Rows run top to bottom in time:",
            "C and D first, then A and B by timing",
        ),
        panel_height=280,
        shape_legend=True,
    ),
}


def get_model(name: str) -> ScenarioModel:
    """Return the registered scenario model called ``name``.

    Raises:
        ValueError: If no model with that name exists.
    """
    try:
        return MODELS[name]
    except KeyError:
        known = ", ".join(sorted(MODELS))
        raise ValueError(f"Unknown scenario model '{name}' (known: {known})") from None
