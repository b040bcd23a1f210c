"""Pytest configuration and shared fixtures for interactions tests."""

import pytest

from interactions.config import RenderConfig
from interactions.scenarios import generate_chronology_scenarios, generate_scenarios


@pytest.fixture
def basic_scenarios():
    """The 64 scenarios of the basic model."""
    return generate_scenarios()


@pytest.fixture
def chronology_scenarios():
    """The 768 scenarios of the chronology model."""
    return generate_chronology_scenarios()


@pytest.fixture
def sample_config():
    """Sample configuration dictionary for testing."""
    return {
        "layout": {
            "panel_width": 300,
            "panel_height": 200,
            "margin": 10,
            "title_height": 40,
            "legend_height": 100,
        },
        "palette": {
            "canvas": [250, 250, 250],
            "node_fill": [200, 220, 240],
        },
        "attribution": "Test attribution",
    }


@pytest.fixture
def default_config():
    return RenderConfig()
