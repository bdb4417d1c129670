"""JSON scene descriptions.

A scene file names its materials once and lets spheres refer to them by
name, so a material shared by several spheres stays shared after loading:

    {
        "materials": {
            "ground": {"type": "lambertian", "albedo": [0.8, 0.8, 0.0]},
            "glass": {"type": "dielectric", "ref_idx": 1.5}
        },
        "spheres": [
            {"center": [0, -100.5, -1], "radius": 100, "material": "ground"},
            {"center": [-1, 0, -1], "radius": 0.5, "material": "glass"},
            {"center": [-1, 0, -1], "radius": -0.45, "material": "glass"}
        ],
        "camera": {"look_from": [-2, 2, 1], "look_at": [0, 0, -1], "vfov": 90}
    }

The "camera" entry is optional; its keys are those of CameraConfig.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from rtweekend.camera.camera import CameraConfig
from rtweekend.materials import Material, material_from_dict
from rtweekend.scene.hittable_list import HittableList


@dataclass
class SceneConfig:
    """Serializable scene description.

    Attributes:
        materials: Material parameter dictionaries keyed by name.
        spheres: Sphere dictionaries with "center", "radius" and "material"
            (a key of materials).
        camera: Optional camera settings.
    """

    materials: dict[str, dict[str, Any]] = field(default_factory=dict)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    camera: CameraConfig | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "materials": {name: dict(params) for name, params in self.materials.items()},
            "spheres": [dict(sphere) for sphere in self.spheres],
        }
        if self.camera is not None:
            data["camera"] = {key: _to_list(value) for key, value in asdict(self.camera).items()}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SceneConfig":
        """Create a SceneConfig from a dictionary.

        Raises:
            ValueError: If a required key is missing or the camera entry has
                unknown keys.
        """
        if "spheres" not in data:
            raise ValueError("Scene description has no 'spheres' list")

        camera = None
        if data.get("camera") is not None:
            camera_data = data["camera"]
            unknown = set(camera_data) - set(CameraConfig.__dataclass_fields__)
            if unknown:
                raise ValueError(f"Unknown camera settings: {sorted(unknown)}")
            camera = CameraConfig(
                **{key: _to_tuple(value) for key, value in camera_data.items()}
            )

        return cls(
            materials={name: dict(params) for name, params in data.get("materials", {}).items()},
            spheres=[dict(sphere) for sphere in data["spheres"]],
            camera=camera,
        )

    def build(self) -> HittableList:
        """Create the HittableList described by this config.

        Each named material is instantiated once and shared by every sphere
        naming it.

        Raises:
            ValueError: If a material type is unknown, a parameter is invalid
                or a sphere names a material that is not defined.
        """
        materials = {}
        for name, params in self.materials.items():
            try:
                materials[name] = material_from_dict(params)
            except KeyError as e:
                raise ValueError(f"Material {name!r} is missing {e.args[0]!r}") from e
            except TypeError as e:
                raise ValueError(f"Material {name!r} has an invalid parameter: {e}") from e

        world = HittableList()
        for idx, sphere in enumerate(self.spheres):
            name = sphere.get("material")
            if name is None:
                material = None
            elif name in materials:
                material = materials[name]
            else:
                raise ValueError(f"Sphere {idx} uses unknown material: {name}")
            try:
                center = sphere["center"]
                radius = sphere["radius"]
            except KeyError as e:
                raise ValueError(f"Sphere {idx} is missing {e.args[0]!r}") from e
            try:
                if len(center) != 3:
                    raise ValueError(f"Sphere {idx} center must have 3 components")
                world.add_sphere(tuple(center), radius, material)
            except TypeError as e:
                raise ValueError(f"Sphere {idx} has an invalid parameter: {e}") from e
        return world

    @classmethod
    def from_world(cls, world: HittableList, camera: CameraConfig | None = None) -> "SceneConfig":
        """Describe an existing scene, naming its materials by table index."""
        names: dict[Material, str] = {}
        materials: dict[str, dict[str, Any]] = {}
        for idx, material in enumerate(world.materials):
            name = f"material_{idx}"
            names[material] = name
            materials[name] = material.to_dict()

        spheres = [
            {
                "center": list(sphere.center),
                "radius": sphere.radius,
                "material": names[sphere.material],
            }
            for sphere in world.spheres
        ]
        return cls(materials=materials, spheres=spheres, camera=camera)


def _to_list(value: Any) -> Any:
    return list(value) if isinstance(value, tuple) else value


def _to_tuple(value: Any) -> Any:
    return tuple(float(x) for x in value) if isinstance(value, list) else value


def load_scene(path: str | Path) -> SceneConfig:
    """Read a scene description from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or not a scene description.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid scene file {path}: expected a JSON object")

    config = SceneConfig.from_dict(data)
    logger.info(
        "Loaded scene {} ({} spheres, {} materials)", path, len(config.spheres), len(config.materials)
    )
    return config


def save_scene(config: SceneConfig, path: str | Path) -> None:
    """Write a scene description as JSON."""
    path = Path(path)
    path.write_text(json.dumps(config.to_dict(), indent=2))
    logger.info("Saved scene to {}", path)
