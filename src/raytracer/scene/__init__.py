"""Scene module: light, world and scene construction.

Components:
    light: Point light source
    world: Shapes plus light, and the recursive shading pipeline
    config: Dictionary/JSON scene descriptions
    demo: Sample scene factory
"""

from .config import (
    SceneConfig,
    build_camera,
    build_material,
    build_pattern,
    build_shape,
    build_transform,
    build_world,
    load_scene_config,
)
from .demo import DemoSceneParams, create_demo_scene
from .light import PointLight
from .world import DEFAULT_MAX_DEPTH, World, default_world

__all__ = [
    "PointLight",
    "World",
    "default_world",
    "DEFAULT_MAX_DEPTH",
    "SceneConfig",
    "load_scene_config",
    "build_world",
    "build_camera",
    "build_shape",
    "build_material",
    "build_pattern",
    "build_transform",
    "DemoSceneParams",
    "create_demo_scene",
]
