"""
Entry point: generate a p5.js sketch from a JSON scene file.

Usage:
    python main.py <scene_file> [--output OUTPUT] [--config CONFIG]

Examples:
    python main.py scene.json                       # sketch on stdout
    python main.py scene.json -o sketch.js --grid   # 2D grid helper
    python main.py scene.json --size 1024 768 --line-scale 40 --render-scale 20
    python main.py scene.json --config .p5printer.json -v --log-json run.log.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from p5_printer.io.scene_loader import SceneLoadError, load_scene
from p5_printer.logging_config import LogContext, setup_logging
from p5_printer.project_config import ProjectConfig, load_config
from p5_printer.sketch import SketchPrinter

logger = logging.getLogger("p5_printer.cli")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def run_pipeline(scene_path: str, config: ProjectConfig) -> str:
    """Load the scene, print the sketch and write it out.

    Writes to ``config.output.output_path`` when set, otherwise stdout.

    Returns:
        The sketch text

    Raises:
        SceneLoadError: if the scene cannot be loaded
        OSError: if the output file cannot be written
    """
    scene = load_scene(scene_path)

    output_path = config.output.output_path
    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            printer = SketchPrinter.from_config(config, output=f)
            scene.apply(printer)
            text = printer.print_all(clear_buffer_after=config.output.clear_buffer)
        logger.info("Sketch written to %s", output_path,
                    extra={"draws": len(printer.draws), "is_3d": printer.is_3d})
    else:
        printer = SketchPrinter.from_config(config, output=sys.stdout)
        scene.apply(printer)
        text = printer.print_all(clear_buffer_after=config.output.clear_buffer)

    return text


def apply_cli_overrides(config: ProjectConfig, args: argparse.Namespace) -> ProjectConfig:
    """Apply command-line options on top of the loaded configuration."""
    if args.output:
        config.output.output_path = args.output
    if args.grid:
        config.features.draw_grid = True
    if args.no_origin:
        config.features.draw_origin = False
    if args.line_scale is not None:
        config.canvas.line_scale = args.line_scale
    if args.render_scale is not None:
        config.canvas.render_scale = args.render_scale
    if args.size is not None:
        config.canvas.width, config.canvas.height = args.size
    return config


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a p5.js sketch from a JSON scene file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scene_file",
        help="Path to the input JSON scene file.",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Path of the output .js file (default: stdout).",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a .p5printer.json configuration file.",
    )
    parser.add_argument(
        "--grid",
        action="store_true",
        help="Draw the 2D background grid.",
    )
    parser.add_argument(
        "--no-origin",
        action="store_true",
        dest="no_origin",
        help="Do not draw the origin axes.",
    )
    parser.add_argument(
        "--line-scale",
        type=float,
        default=None,
        dest="line_scale",
        help="Divisor applied to stroke weights.",
    )
    parser.add_argument(
        "--render-scale",
        type=float,
        default=None,
        dest="render_scale",
        help="Zoom applied to the sketch contents.",
    )
    parser.add_argument(
        "--size",
        type=int,
        nargs=2,
        default=None,
        metavar=("WIDTH", "HEIGHT"),
        help="Canvas size in pixels.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug messages.",
    )
    parser.add_argument(
        "--log-json",
        default=None,
        dest="log_json",
        help="Also write JSON-lines logs to this file.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        json_file=args.log_json,
        use_colors=sys.stderr.isatty(),
    )

    config = load_config(
        scene_path=args.scene_file,
        explicit_config=args.config,
    )
    config = apply_cli_overrides(config, args)

    with LogContext(scene=Path(args.scene_file).name):
        try:
            run_pipeline(args.scene_file, config)
        except SceneLoadError as exc:
            logger.critical("Scene load failed: %s", exc)
            return 1
        except OSError as exc:
            logger.critical("Cannot write sketch: %s", exc)
            return 1
        except ValueError as exc:
            logger.critical("Configuration error: %s", exc)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
