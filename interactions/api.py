"""Library entry points mirroring the ``render`` and ``list`` commands."""

from __future__ import annotations

from pathlib import Path

from interactions.config import RenderConfig
from interactions.log_config import get_logger
from interactions.render import render_to_file
from interactions.scenarios import get_model

logger = get_logger(__name__)


def render(
    output: str | Path = "interactions.png",
    columns: int = 8,
    model: str = "basic",
    config: RenderConfig | None = None,
) -> Path:
    """Enumerate the scenarios of ``model`` and write the grid PNG to ``output``.

    Raises:
        ValueError: If ``columns`` is less than one or the model is unknown.
        RenderError: If the output file cannot be written.
    """
    if columns < 1:
        raise ValueError("columns must be at least 1")
    mdl = get_model(model)
    scenarios = mdl.generate()
    logger.info(f"Rendering {len(scenarios)} '{mdl.name}' scenarios")
    return render_to_file(Path(output), scenarios, columns, config, mdl)


def list_lines(long: bool = False, model: str = "basic") -> list[str]:
    """Return one listing line per scenario.

    Lines read ``"NN. <title>"``, or ``"NN. <title> — <subtitle>"`` when
    ``long`` is set, with NN the 1-based index padded to two digits.
    """
    scenarios = get_model(model).generate()
    lines = []
    for i, s in enumerate(scenarios, start=1):
        if long:
            lines.append(f"{i:02d}. {s.title} — {s.subtitle}")
        else:
            lines.append(f"{i:02d}. {s.title}")
    return lines
