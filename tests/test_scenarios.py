"""Tests for scenario enumeration."""

from __future__ import annotations

import pytest

from interactions.model import Edge, Node
from interactions.scenarios import (
    MODELS,
    ab_title,
    build_edges,
    external_fragment,
    external_subtitle,
    get_model,
    kinds_phrase,
    timing_phrase,
)


def _basic_index(ab: int, c: int, d: int) -> int:
    return ab * 16 + c * 4 + d


def _chronology_index(ab: int, c: int, d: int, timing: int, kinds: int) -> int:
    return (((ab * 4 + c) * 4 + d) * 3 + timing) * 4 + kinds


def test_basic_count_and_uniqueness(basic_scenarios) -> None:
    assert len(basic_scenarios) == 64
    assert len(set(basic_scenarios)) == 64
    assert len({(s.title, s.subtitle) for s in basic_scenarios}) == 64


def test_chronology_count_and_uniqueness(chronology_scenarios) -> None:
    assert len(chronology_scenarios) == 768
    assert len(set(chronology_scenarios)) == 768
    assert len({(s.title, s.subtitle) for s in chronology_scenarios}) == 768


def test_generation_is_deterministic(basic_scenarios, chronology_scenarios) -> None:
    assert get_model("basic").generate() == basic_scenarios
    assert get_model("chronology").generate() == chronology_scenarios


def test_first_and_last_basic_scenarios(basic_scenarios) -> None:
    first = basic_scenarios[0]
    assert first.title == "A & B: no direct link"
    assert first.subtitle == "C has no effect on A or B; D has no effect on A or B"
    assert first.node_names == ["A", "B"]
    assert first.edges == ()

    last = basic_scenarios[-1]
    assert last.title == "A ↔ B (mutualism)"
    assert last.subtitle == "C influences both A and B; D influences both A and B"
    assert last.node_names == ["C", "D", "A", "B"]
    assert last.edges == (
        Edge("A", "B", bidirectional=True),
        Edge("C", "A"),
        Edge("C", "B"),
        Edge("D", "A"),
        Edge("D", "B"),
    )


def test_basic_order_is_nested_loop_order(basic_scenarios) -> None:
    for ab in range(4):
        for c in range(4):
            for d in range(4):
                s = basic_scenarios[_basic_index(ab, c, d)]
                assert s.title == ab_title(ab)
                assert s.subtitle == external_subtitle(c, d)


def test_node_presence_follows_external_patterns(basic_scenarios) -> None:
    assert basic_scenarios[_basic_index(1, 2, 0)].node_names == ["C", "A", "B"]
    assert basic_scenarios[_basic_index(1, 0, 3)].node_names == ["D", "A", "B"]
    assert all(n.layer is None for s in basic_scenarios for n in s.nodes)
    assert all(n.shape == "circle" for s in basic_scenarios for n in s.nodes)


@pytest.mark.parametrize(
    "ab,c,d,expected",
    [
        (0, 0, 0, []),
        (1, 0, 0, [Edge("A", "B")]),
        (2, 0, 0, [Edge("B", "A")]),
        (3, 0, 0, [Edge("A", "B", True)]),
        (0, 1, 2, [Edge("C", "A"), Edge("D", "B")]),
        (2, 3, 1, [Edge("B", "A"), Edge("C", "A"), Edge("C", "B"), Edge("D", "A")]),
    ],
)
def test_build_edges(ab, c, d, expected) -> None:
    assert build_edges(ab, c, d) == expected


def test_text_helpers() -> None:
    assert ab_title(1) == "A → B"
    assert ab_title(2) == "B → A"
    assert ab_title(9) == "A/B pattern ?"
    assert external_fragment(2) == "influences B only"
    assert external_fragment(-1) == "?"
    assert external_subtitle(1, 3) == "C influences A only; D influences both A and B"
    assert timing_phrase(1) == "A and B simultaneous"
    assert kinds_phrase(0) == "A is an event, B is an event"
    assert kinds_phrase(1) == "A is an event, B is a process"
    assert kinds_phrase(2) == "A is a process, B is an event"
    assert kinds_phrase(3) == "A is a process, B is a process"
    assert kinds_phrase(7) == "kinds ?"


def test_chronology_first_scenario(chronology_scenarios) -> None:
    s = chronology_scenarios[0]
    assert s.title == "A & B: no direct link, A before B"
    assert s.subtitle == (
        "C has no effect on A or B; D has no effect on A or B; "
        "A is an event, B is an event"
    )
    assert s.nodes == (Node("A", 1, "circle"), Node("B", 2, "circle"))


def test_chronology_layers_and_shapes(chronology_scenarios) -> None:
    s = chronology_scenarios[_chronology_index(3, 1, 2, 2, 2)]
    assert s.title == "A ↔ B (mutualism), B before A"
    assert s.node("C").layer == 0
    assert s.node("D").layer == 0
    assert s.node("A") == Node("A", 2, "rect")
    assert s.node("B") == Node("B", 1, "circle")

    simultaneous = chronology_scenarios[_chronology_index(0, 0, 0, 1, 3)]
    assert {n.layer for n in simultaneous.nodes} == {1}
    assert {n.shape for n in simultaneous.nodes} == {"rect"}
    assert all(s.has_layers for s in chronology_scenarios)


def test_chronology_extends_basic_edges(basic_scenarios, chronology_scenarios) -> None:
    for i, s in enumerate(chronology_scenarios):
        base = basic_scenarios[i // 12]
        assert s.edges == base.edges
        assert s.node_names == base.node_names
        assert s.title.startswith(base.title + ", ")
        assert s.subtitle.startswith(base.subtitle + "; ")


def test_model_registry() -> None:
    assert set(MODELS) == {"basic", "chronology"}
    assert get_model("basic").panel_height == 220
    assert get_model("chronology").shape_legend is True
    with pytest.raises(ValueError, match="Unknown scenario model 'fancy'"):
        get_model("fancy")
