"""Command line interface for interaction pattern grids."""

from __future__ import annotations

import argparse
import sys
import time
from contextlib import contextmanager
from pathlib import Path

from interactions.config import RenderConfig
from interactions.log_config import get_logger
from interactions.scenarios import MODELS

logger = get_logger(__name__)

EXAMPLES = """\
Examples:
  python -m interactions render --output interactions.png
  python -m interactions render --columns 3 --output interactions-long.png
  python -m interactions render --model chronology -o chronology.png
  python -m interactions list --long
"""


@contextmanager
def Timer(description: str):
    """Context manager for timing operations with both print and log output.

    Args:
        description: Operation description for timing messages.

    Yields:
        None: Context manager yields nothing.
    """
    print(f"🔄 {description}...")
    logger.info(f"Starting {description}")
    start = time.time()
    try:
        yield
        elapsed = time.time() - start
        print(f"✅ {description} (completed in {elapsed:.1f}s)")
        logger.info(f"Completed {description} in {elapsed:.1f}s")
    except Exception as e:
        elapsed = time.time() - start
        print(f"❌ {description} (failed after {elapsed:.1f}s)")
        logger.error(f"Failed {description} after {elapsed:.1f}s: {e}")
        raise


def _load_config(config_path: Path | None) -> RenderConfig:
    """Load and validate configuration, or return defaults when no path is given.

    Args:
        config_path: Optional path to YAML configuration file.

    Returns:
        Loaded and validated configuration object.

    Raises:
        SystemExit: If configuration loading or validation fails.
    """
    if config_path is None:
        return RenderConfig()
    try:
        config = RenderConfig.from_yaml(config_path)
        logger.info(f"Loaded configuration from {config_path}")
        return config
    except FileNotFoundError:
        print(f"❌ Configuration file not found: {config_path}")
        logger.error(f"Configuration file not found: {config_path}")
        sys.exit(2)  # Config problem
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"❌ Configuration error: {e}")
        print(f"💡 Check YAML syntax in: {config_path}")
        sys.exit(2)  # Config problem


def render_command(args: argparse.Namespace) -> None:
    """Render the scenario grid to a PNG file.

    Args:
        args: Parsed command line arguments with output, columns, model and
            optional config path.
    """
    if args.columns < 1:
        print("❌ columns must be at least 1")
        logger.error(f"Rejected column count {args.columns}")
        sys.exit(2)

    config_obj = _load_config(Path(args.config) if args.config else None)
    logger.debug(config_obj.summary())
    output_path = Path(args.output)

    from interactions.api import render
    from interactions.render import RenderError

    try:
        with Timer(f"Render {args.model} grid"):
            render(output_path, columns=args.columns, model=args.model, config=config_obj)
        print(f"🎉 SUCCESS! Generated: {output_path}")
    except RenderError as e:
        print(f"❌ {e}")
        sys.exit(1)  # Output failure is fatal
    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        print(f"❌ {e}")
        sys.exit(2)


def list_command(args: argparse.Namespace) -> None:
    """Print scenario titles, with subtitles when ``--long`` is set.

    Args:
        args: Parsed command line arguments with long and model.
    """
    from interactions.api import list_lines

    for line in list_lines(long=args.long, model=args.model):
        print(line)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interactions",
        description=(
            "Generate a grid of all basic interaction patterns between A and B, "
            "with external influences from C and D."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress console output (logs only)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    model_help = "Scenario model: " + "; ".join(
        f"{m.name} = {m.description}" for m in MODELS.values()
    )

    # Render command
    render_parser = subparsers.add_parser(
        "render", help="Generate the interactions grid PNG"
    )
    render_parser.add_argument(
        "-o",
        "--output",
        default="interactions.png",
        help="Path to write the generated PNG (default: interactions.png)",
    )
    render_parser.add_argument(
        "--columns",
        type=int,
        default=8,
        help="Number of columns in the grid (use 3 for README-friendly long form)",
    )
    render_parser.add_argument(
        "--model",
        choices=sorted(MODELS),
        default="basic",
        help=model_help,
    )
    render_parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Optional YAML file overriding layout, palette and attribution",
    )
    render_parser.set_defaults(func=render_command)

    # List command
    list_parser = subparsers.add_parser("list", help="List scenario titles")
    list_parser.add_argument(
        "--long",
        action="store_true",
        help="Print subtitles along with scenario titles",
    )
    list_parser.add_argument(
        "--model",
        choices=sorted(MODELS),
        default="basic",
        help=model_help,
    )
    list_parser.set_defaults(func=list_command)

    # Help command
    help_parser = subparsers.add_parser("help", help="Show this help text")
    help_parser.set_defaults(func=None)

    return parser


def main() -> None:
    """Parse command line arguments and execute the appropriate subcommand.

    Configures logging, parses CLI arguments, and dispatches to the correct
    command function (render or list). With no command, or with ``help``,
    prints usage and returns.
    """
    parser = _build_parser()
    args = parser.parse_args()

    # Configure logging based on arguments
    import logging

    from interactions.log_config import set_global_log_level

    if args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    set_global_log_level(log_level)

    # Suppress print output if --quiet is set
    if args.quiet:
        import builtins

        builtins.print = lambda *args, **kwargs: None

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
