"""
Unit tests for p5_printer.project_config module.

Tests:
- Configuration dataclasses
- JSON serialization/deserialization
- Config file discovery and loading
- Config merging
"""

import json

import pytest

from p5_printer.printing.styles import BLUE, RED, Color, Styles
from p5_printer.project_config import (
    CONFIG_FILENAME,
    CanvasConfig,
    FeaturesConfig,
    OutputConfig,
    ProjectConfig,
    StylesConfig,
    create_sample_config,
    find_config_file,
    load_config,
    merge_configs,
)


class TestSections:
    """Tests for the section dataclasses."""

    def test_canvas_defaults(self):
        """800x600 canvas, line scale 2, render scale 1."""
        canvas = CanvasConfig()
        assert (canvas.width, canvas.height) == (800, 600)
        assert canvas.line_scale == 2.0
        assert canvas.render_scale == 1.0
        assert canvas.indent_width == 2

    def test_feature_defaults(self):
        """Origin and source comments on, everything else off."""
        features = FeaturesConfig()
        assert features.draw_origin is True
        assert features.source_comments is True
        assert features.draw_grid is False
        assert features.camera_look_at is None

    def test_output_defaults(self):
        """Empty output path means stdout."""
        assert OutputConfig().output_path == ""

    def test_styles_default_to_builtin(self):
        """The default style sections build the built-in Styles."""
        assert StylesConfig().to_styles() == Styles()

    def test_partial_style_section(self):
        """Keys missing from a style section keep the built-in value."""
        styles = StylesConfig(line={'stroke_color': 'blue'}).to_styles()
        assert styles.line.stroke_color == BLUE
        assert styles.line.stroke_weight == 2.0

    def test_invalid_color(self):
        """Unparseable colors raise ValueError."""
        with pytest.raises(ValueError):
            StylesConfig(geometry={'stroke_color': [300, 0, 0]}).to_styles()


class TestProjectConfig:
    """Tests for ProjectConfig dataclass."""

    def test_to_json(self):
        """JSON output contains every section."""
        data = json.loads(ProjectConfig().to_json())
        assert set(data) == {'canvas', 'features', 'styles', 'output'}
        assert data['styles']['normal_line']['stroke_color'] == [255, 0, 0, 100]

    def test_from_dict(self):
        """Known keys are applied, the rest keeps defaults."""
        config = ProjectConfig.from_dict({
            'canvas': {'line_scale': 40.0, 'render_scale': 20.0},
            'features': {'draw_grid': True},
        })
        assert config.canvas.line_scale == 40.0
        assert config.canvas.render_scale == 20.0
        assert config.canvas.width == 800
        assert config.features.draw_grid is True

    def test_unknown_keys_ignored(self):
        """Unknown sections and keys are skipped."""
        config = ProjectConfig.from_dict({
            'canvas': {'depth': 3},
            'plugins': {'x': 1},
            'output': 'not a section',
        })
        assert not hasattr(config.canvas, 'depth')
        assert config == ProjectConfig()

    def test_style_section_merged(self):
        """A partial style object is merged over the defaults."""
        config = ProjectConfig.from_dict({'styles': {'geometry': {'fill_color': 'red'}}})
        assert config.styles.geometry['fill_color'] == 'red'
        assert config.styles.geometry['stroke_weight'] == 2.0
        assert config.styles.to_styles().geometry.fill_color == RED

    def test_save_and_load(self, tmp_path):
        """Saved configuration loads back unchanged."""
        config = ProjectConfig()
        config.canvas.width = 1024
        config.features.camera_look_at = [0.0, -200.0, 100.0]
        config.styles.line = {'stroke_color': [1, 2, 3, 4], 'fill_color': None, 'stroke_weight': 1.5}
        config.output.output_path = "out.js"

        path = tmp_path / "config.json"
        config.save(path)
        loaded = ProjectConfig.load(path)

        assert loaded == config
        assert loaded.styles.to_styles().line.stroke_color == Color(1, 2, 3, 4)


class TestFindConfigFile:
    """Tests for find_config_file function."""

    def test_explicit_config(self, tmp_path):
        """An existing explicit path wins."""
        path = tmp_path / "custom.json"
        path.write_text("{}")
        assert find_config_file(explicit_config=path) == path

    def test_missing_explicit_falls_back(self, isolated):
        """A missing explicit path continues the search."""
        assert find_config_file(explicit_config=isolated / "missing.json") is None

    def test_next_to_scene(self, isolated):
        """A config beside the scene file is found."""
        scene_dir = isolated / "scenes"
        scene_dir.mkdir()
        config = scene_dir / CONFIG_FILENAME
        config.write_text("{}")
        assert find_config_file(scene_path=scene_dir / "scene.json") == config

    def test_working_directory(self, isolated):
        """The working directory is searched after the scene directory."""
        config = isolated / CONFIG_FILENAME
        config.write_text("{}")
        assert find_config_file() == config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_when_no_file(self, isolated):
        """No config file gives the defaults."""
        assert load_config() == ProjectConfig()

    def test_explicit_file(self, config_path):
        """Values from an explicit file are loaded."""
        config = load_config(explicit_config=config_path)
        assert config.canvas.line_scale == 40.0
        assert config.features.draw_grid is True

    def test_invalid_json_returns_defaults(self, isolated, caplog):
        """Broken files are logged and ignored."""
        path = isolated / "broken.json"
        path.write_text("not valid json {{{")
        assert load_config(explicit_config=path) == ProjectConfig()
        assert "Failed to load config" in caplog.text


class TestMergeConfigs:
    """Tests for merge_configs function."""

    def test_non_default_values_override(self):
        """Values of the override that differ from the defaults win."""
        base = ProjectConfig()
        base.canvas.width = 640
        override = ProjectConfig()
        override.features.draw_grid = True

        merged = merge_configs(base, override)

        assert merged.canvas.width == 640
        assert merged.features.draw_grid is True

    def test_inputs_unchanged(self):
        """Merging does not modify its inputs."""
        base = ProjectConfig()
        override = ProjectConfig()
        override.canvas.line_scale = 10.0
        merge_configs(base, override)
        assert base.canvas.line_scale == 2.0


class TestCreateSampleConfig:
    """Tests for create_sample_config function."""

    def test_sample_is_loadable(self, tmp_path):
        """The sample loads as the default configuration."""
        path = tmp_path / CONFIG_FILENAME
        create_sample_config(path)

        data = json.loads(path.read_text(encoding='utf-8'))
        assert '_comment' in data
        assert '_comment' in data['styles']
        assert ProjectConfig.load(path) == ProjectConfig()
