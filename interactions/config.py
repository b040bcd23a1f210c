"""Configuration management for grid rendering."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from interactions.log_config import get_logger

logger = get_logger(__name__)

RGB = tuple[int, int, int]


@dataclass
class LayoutConfig:
    """Pixel geometry of the grid.

    ``panel_height`` of ``None`` defers to the scenario model, which knows how
    many node rows its panels need.
    """

    panel_width: int = 360
    panel_height: int | None = None
    margin: int = 20
    title_height: int = 50  # Headline and attribution block
    legend_height: int = 120


@dataclass
class PaletteConfig:
    """Colours used by the renderer, as RGB triples."""

    canvas: RGB = (240, 240, 240)
    panel: RGB = (255, 255, 255)
    panel_border: RGB = (180, 180, 180)
    legend_border: RGB = (120, 120, 120)
    headline: RGB = (10, 10, 10)
    attribution: RGB = (60, 60, 60)
    heading: RGB = (40, 40, 40)
    title: RGB = (20, 20, 20)
    subtitle: RGB = (80, 80, 80)
    text: RGB = (0, 0, 0)
    node_fill: RGB = (220, 235, 250)
    node_border: RGB = (20, 40, 120)
    arrow: RGB = (0, 0, 0)

    def __post_init__(self) -> None:
        """Convert YAML lists to tuples."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                setattr(self, f.name, tuple(value))


@dataclass
class RenderConfig:
    """Complete renderer configuration.

    Every section is optional in YAML; missing sections keep their defaults.
    """

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    palette: PaletteConfig = field(default_factory=PaletteConfig)
    attribution: str = "Source: github.com/arran4/interactions"
    _source_path: Path | None = None

    @classmethod
    def from_yaml(cls, config_path: Path) -> RenderConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file.

        Returns:
            Parsed and validated configuration object.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            ValueError: If configuration is invalid.
        """
        logger.info(f"Loading configuration from: {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in configuration: {e}")
            raise

        cfg = cls._from_dict(raw_config or {})
        cfg._source_path = Path(config_path)
        cfg.validate()
        return cfg

    @classmethod
    def _from_dict(cls, config_dict: dict[str, Any]) -> RenderConfig:
        """Create configuration from dictionary.

        Args:
            config_dict: Raw configuration dictionary.

        Returns:
            Parsed configuration object.

        Raises:
            ValueError: If the mapping has unknown keys or wrong section types.
        """
        if not isinstance(config_dict, dict):
            raise ValueError("Configuration root must be a mapping")

        allowed = {"layout", "palette", "attribution"}
        unknown = sorted(set(config_dict) - allowed)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        layout_dict = config_dict.get("layout") or {}
        palette_dict = config_dict.get("palette") or {}
        if not isinstance(layout_dict, dict):
            raise ValueError("'layout' must be a mapping")
        if not isinstance(palette_dict, dict):
            raise ValueError("'palette' must be a mapping")

        try:
            layout = LayoutConfig(**layout_dict)
            palette = PaletteConfig(**palette_dict)
        except TypeError as e:
            raise ValueError(f"Invalid configuration section: {e}") from e

        cfg = cls(layout=layout, palette=palette)
        if "attribution" in config_dict:
            cfg.attribution = str(config_dict["attribution"] or "")
        return cfg

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If configuration is invalid.
        """
        lay = self.layout
        for name in ("panel_width", "margin", "title_height", "legend_height"):
            value = getattr(lay, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"layout.{name} must be a positive integer")
        if lay.panel_height is not None and (
            not isinstance(lay.panel_height, int) or lay.panel_height <= 0
        ):
            raise ValueError("layout.panel_height must be a positive integer")

        for f in fields(self.palette):
            value = getattr(self.palette, f.name)
            if (
                not isinstance(value, tuple)
                or len(value) != 3
                or not all(isinstance(c, int) and 0 <= c <= 255 for c in value)
            ):
                raise ValueError(
                    f"palette.{f.name} must be three integers between 0 and 255"
                )

    def summary(self) -> str:
        """Generate configuration summary string.

        Returns:
            Human-readable configuration summary.
        """
        lay = self.layout
        height = lay.panel_height if lay.panel_height is not None else "model default"
        lines = [
            "RENDER CONFIGURATION",
            "=" * 40,
            f"   Panel: {lay.panel_width} x {height}",
            f"   Margin: {lay.margin}",
            f"   Title/Legend: {lay.title_height}/{lay.legend_height}",
            f"   Attribution: {self.attribution}",
            f"   Config file: {self._source_path or 'built-in defaults'}",
            "=" * 40,
        ]
        return "\n".join(lines)
