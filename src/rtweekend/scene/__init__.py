"""Scene module.

Components:
    hittable_list: The sphere collection and its material table
    presets: Built-in scenes with their default cameras
    config: JSON scene descriptions
"""

from .config import SceneConfig, load_scene, save_scene
from .hittable_list import HittableList, SphereInfo
from .presets import (
    PRESETS,
    SHOWCASE_CAMERA,
    TWO_SPHERE_CAMERA,
    material_showcase_scene,
    two_sphere_scene,
)

__all__ = [
    "HittableList",
    "SphereInfo",
    "SceneConfig",
    "load_scene",
    "save_scene",
    "PRESETS",
    "SHOWCASE_CAMERA",
    "TWO_SPHERE_CAMERA",
    "material_showcase_scene",
    "two_sphere_scene",
]
