"""
Pytest configuration and fixtures for the p5.js sketch printer.

Provides:
- Printer fixtures (the 2D golden scenario, a 3D printer)
- Captured output streams
- Temporary scene and config file factories
- Golden file support (--update-golden)
"""

import json
import logging
from io import StringIO
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from p5_printer.geometry import Vector2i
from p5_printer.logging_config import PACKAGE_LOGGER
from p5_printer.sketch import SketchPrinter

GOLDEN_DIR = Path(__file__).parent / "golden"


# ============================================================================
# Pytest Configuration Hooks
# ============================================================================

def pytest_addoption(parser):
    """Add custom pytest command line options."""
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Rewrite golden sketch files instead of comparing",
    )


@pytest.fixture
def update_golden(request) -> bool:
    """Whether to rewrite golden files instead of comparing."""
    return request.config.getoption("--update-golden", default=False)


@pytest.fixture
def golden_dir() -> Path:
    return GOLDEN_DIR


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so every test starts with a propagating package logger."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ============================================================================
# Printer Fixtures
# ============================================================================

@pytest.fixture
def output() -> StringIO:
    """Stream that receives print_buffer() output."""
    return StringIO()


@pytest.fixture
def printer(output: StringIO) -> SketchPrinter:
    """2D printer with the golden scenario's size and scales."""
    return SketchPrinter(
        size=Vector2i(800, 600),
        line_scale=40.0,
        render_scale=20.0,
        output=output,
    )


@pytest.fixture
def printer_3d(output: StringIO) -> SketchPrinter:
    """Printer that already has 3D mode switched on."""
    p = SketchPrinter(size=Vector2i(800, 600), output=output)
    p.is_3d = True
    return p


# ============================================================================
# Temporary File Fixtures
# ============================================================================

@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Factory writing a JSON document under tmp_path and returning its path."""
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch) -> Path:
    """Working and home directory without any config file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def scene_data() -> Dict[str, Any]:
    """The golden 2D scene: one point and one line."""
    return {
        "points": [[5, 10]],
        "lines": [[[-3, -1], [10, 5]]],
    }


@pytest.fixture
def scene_path(write_json, scene_data) -> Path:
    return write_json("scene.json", scene_data)


@pytest.fixture
def config_path(write_json) -> Path:
    """Config file matching the golden scenario."""
    return write_json(".p5printer.json", {
        "canvas": {"width": 800, "height": 600, "line_scale": 40.0, "render_scale": 20.0},
        "features": {"draw_grid": True},
    })


# ============================================================================
# Assertion Helpers
# ============================================================================

def assert_in_order(text: str, *fragments: str) -> None:
    """Assert that every fragment occurs in `text`, in the given order."""
    position = 0
    for fragment in fragments:
        found = text.find(fragment, position)
        assert found != -1, f"{fragment!r} not found after offset {position}"
        position = found + len(fragment)
