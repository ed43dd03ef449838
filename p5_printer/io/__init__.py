"""Scene file input."""

from p5_printer.io.scene_loader import Scene, SceneItem, SceneLoadError, load_scene, parse_scene

__all__ = [
    "Scene",
    "SceneItem",
    "SceneLoadError",
    "load_scene",
    "parse_scene",
]
