#!/usr/bin/env python3
"""
Scene Data Module
In-memory scene representation shared by the JSON reader and exporter.

Colors are stored linear; the reader and exporter convert to and from sRGB.
Texture paths are stored absolute (or as given); the exporter writes them
relative to the JSON file.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, IntFlag
from typing import List, Optional, Tuple, Union

import numpy as np

from .binary_mesh import BinaryMesh
from .errors import InvalidMaterialId
from .path import Path


Vec3 = Tuple[float, float, float]


class CameraType(Enum):
    """Camera projection models"""
    PINHOLE = "Pinhole"


@dataclass
class CameraData:
    """Camera optical and placement properties

    Attributes:
        type: Projection model
        position: [x, y, z] camera position
        direction: [x, y, z] view direction
        fov: Vertical field of view in radians
        near: Near plane distance
        far: Far plane distance
        up: [x, y, z] up vector
    """
    type: CameraType = CameraType.PINHOLE
    position: Vec3 = (0.0, 0.0, 0.0)
    direction: Vec3 = (0.0, 0.0, 1.0)
    fov: float = 1.5708
    near: float = 0.01
    far: float = 10000.0
    up: Vec3 = (0.0, 1.0, 0.0)


DEFAULT_CAMERA_DATA = CameraData()


@dataclass
class Camera:
    """Scene camera with optional position and look-at animation"""
    data: CameraData = field(default_factory=lambda: replace(DEFAULT_CAMERA_DATA))
    position_path: Path = field(default_factory=Path)
    look_at_path: Path = field(default_factory=Path)

    def paths(self) -> List[Path]:
        return [self.position_path, self.look_at_path]

    def update(self, dt: float):
        """Advance both camera paths by dt seconds"""
        self.position_path.update(dt)
        self.look_at_path.update(dt)

    def current_position(self) -> np.ndarray:
        if self.position_path.is_static():
            return np.asarray(self.data.position, dtype=np.float64)
        return self.position_path.get_position()

    def current_look_at(self) -> np.ndarray:
        if self.look_at_path.is_static():
            return self.current_position() + np.asarray(self.data.direction, dtype=np.float64)
        return self.look_at_path.get_look_at()


class LightType(Enum):
    """Light source types"""
    POINT = "Point"
    DIRECTIONAL = "Directional"


@dataclass
class PointLight:
    """Light emitted from a position

    Attributes:
        position: [x, y, z] light position
        radius: Light source radius
    """
    position: Vec3 = (0.0, 0.0, 0.0)
    radius: float = 0.0


@dataclass
class DirectionalLight:
    """Light arriving from a fixed direction"""
    direction: Vec3 = (0.0, -1.0, 0.0)


LightGeometry = Union[PointLight, DirectionalLight]


@dataclass
class Light:
    """Scene light

    Attributes:
        geometry: PointLight or DirectionalLight
        color: Linear [r, g, b] intensity
        path: Position animation (point lights)
    """
    geometry: LightGeometry
    color: Vec3 = (1.0, 1.0, 1.0)
    path: Path = field(default_factory=Path)

    @property
    def type(self) -> LightType:
        if isinstance(self.geometry, PointLight):
            return LightType.POINT
        return LightType.DIRECTIONAL

    def paths(self) -> List[Path]:
        return [self.path]

    def update(self, dt: float):
        self.path.update(dt)

    def current_position(self) -> Optional[np.ndarray]:
        """Animated light position, None for directional lights"""
        if not isinstance(self.geometry, PointLight):
            return None
        if self.path.is_static():
            return np.asarray(self.geometry.position, dtype=np.float64)
        return self.path.get_position()


class MaterialFlags(IntFlag):
    NONE = 0
    REFLECTION = 1
    TRANSPARENT = 2


@dataclass
class MaterialTextures:
    """Texture file paths of a material, empty string if unused"""
    ambient: str = ""
    diffuse: str = ""
    specular: str = ""
    occlusion: str = ""


@dataclass
class MaterialData:
    """Shading parameters of a material (linear colors)

    Attributes:
        ambient: [r, g, b] ambient color
        diffuse: [r, g, b] diffuse color
        specular: [r, g, b] specular color
        emission: [r, g, b] emitted color
        roughness: Surface roughness
        occlusion: Ambient occlusion factor
        gloss: Glossiness for specular reflection
        flags: MaterialFlags bit set
    """
    ambient: Vec3 = (0.0, 0.0, 0.0)
    diffuse: Vec3 = (1.0, 1.0, 1.0)
    specular: Vec3 = (0.0, 0.0, 0.0)
    emission: Vec3 = (0.0, 0.0, 0.0)
    roughness: float = 1.0
    occlusion: float = 1.0
    gloss: float = 0.0
    flags: MaterialFlags = MaterialFlags.NONE


DEFAULT_MATERIAL_DATA = MaterialData()


@dataclass
class Material:
    name: str
    textures: MaterialTextures = field(default_factory=MaterialTextures)
    data: MaterialData = field(default_factory=lambda: replace(DEFAULT_MATERIAL_DATA))


@dataclass
class Environment:
    """Background and ambient lighting

    Attributes:
        color: Background color, or multiplier for the environment map
        ambient_up: Ambient color from above
        ambient_down: Ambient color from below
        map: Environment map path
        ambient: Ambient environment map path
    """
    color: Vec3 = (0.0, 0.0, 0.0)
    ambient_up: Vec3 = (0.0, 0.0, 0.0)
    ambient_down: Vec3 = (0.0, 0.0, 0.0)
    map: str = ""
    ambient: str = ""


DEFAULT_ENVIRONMENT = Environment()


class MeshType(Enum):
    TRIANGLE = "Triangle"
    BILLBOARD = "Billboard"


@dataclass
class Mesh:
    """Binary mesh with placement animation

    Attributes:
        mesh: Geometry and material shapes
        type: TRIANGLE or BILLBOARD
        position_path: Translation animation
        look_at_path: Orientation target animation
    """
    mesh: BinaryMesh
    type: MeshType = MeshType.TRIANGLE
    position_path: Path = field(default_factory=Path)
    look_at_path: Path = field(default_factory=Path)

    def paths(self) -> List[Path]:
        return [self.position_path, self.look_at_path]

    def update(self, dt: float):
        self.position_path.update(dt)
        self.look_at_path.update(dt)

    def current_position(self) -> np.ndarray:
        """Animated translation, the origin when the mesh is not moved"""
        return self.position_path.get_position()

    def current_look_at(self) -> Optional[np.ndarray]:
        """Animated orientation target, None when the mesh is not turned"""
        if self.look_at_path.is_static():
            return None
        return self.look_at_path.get_look_at()


class SceneFormat:
    """Complete scene: meshes, camera, lights, materials and environment"""

    def __init__(self, meshes: Optional[List[Mesh]] = None, camera: Optional[Camera] = None,
                 lights: Optional[List[Light]] = None, materials: Optional[List[Material]] = None,
                 environment: Optional[Environment] = None):
        self._meshes = list(meshes) if meshes else []
        self._camera = camera if camera is not None else Camera()
        self._lights = list(lights) if lights else []
        self._materials = list(materials) if materials else []
        self._environment = environment if environment is not None else replace(DEFAULT_ENVIRONMENT)

    def get_meshes(self) -> List[Mesh]:
        return self._meshes

    def get_camera(self) -> Camera:
        return self._camera

    def get_lights(self) -> List[Light]:
        return self._lights

    def get_materials(self) -> List[Material]:
        return self._materials

    def get_environment(self) -> Environment:
        return self._environment

    def get_materials_data(self) -> List[MaterialData]:
        """Shading data of all materials, in material id order"""
        return [m.data for m in self._materials]

    def _shapes(self):
        for mesh in self._meshes:
            yield from mesh.mesh.get_shapes()

    def remove_unused_materials(self):
        """Drop materials no shape refers to and remap shape material ids

        The relative order of the remaining materials is preserved.
        """
        used = [False] * len(self._materials)
        for shape in self._shapes():
            used[shape.material_id] = True

        if all(used):
            return

        # lookup[old_id] = new_id
        lookup = {}
        for old_id, is_used in enumerate(used):
            if is_used:
                lookup[old_id] = len(lookup)

        for shape in self._shapes():
            shape.material_id = lookup[shape.material_id]

        self._materials = [m for m, is_used in zip(self._materials, used) if is_used]

    def verify(self):
        """Validate meshes, material references and animation paths

        Raises:
            InvalidMesh: If a binary mesh is inconsistent
            InvalidMaterialId: If a shape refers to a missing material
            InvalidPathSection: If any path has a section with time <= 0
        """
        for mesh in self._meshes:
            mesh.mesh.verify()

        for shape in self._shapes():
            if shape.material_id >= len(self._materials):
                raise InvalidMaterialId(shape.material_id)

        for light in self._lights:
            light.path.verify()

        self._camera.look_at_path.verify()
        self._camera.position_path.verify()

        for mesh in self._meshes:
            for path in mesh.paths():
                path.verify()

    def update(self, dt: float):
        """Advance every animation path in the scene by one tick"""
        self._camera.update(dt)
        for light in self._lights:
            light.update(dt)
        for mesh in self._meshes:
            mesh.update(dt)
