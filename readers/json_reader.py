#!/usr/bin/env python3
"""
JSON Reader Module
Reads scenes stored as JSON sidecar files plus binary mesh blobs.

Camera, lights, materials, environment and paths may each be stored inline
or as a string naming another JSON file. Every such field is first turned
into an InlineData or a FileReference node, and FileReference nodes are
resolved in one step before the data is parsed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Union

from core.binary_mesh import BinaryMesh
from core.errors import SceneFormatError
from core.json_utils import (
    SCENE_FORMAT_VERSION,
    open_file,
    get_vec3,
    get_absolute_path,
)
from core.path import Path as AnimationPath, PathSection
from core.scene_data import (
    SceneFormat, Camera, CameraData, CameraType, Light, LightType, PointLight,
    DirectionalLight, Material, MaterialData, MaterialFlags, MaterialTextures,
    Environment, Mesh, MeshType,
    DEFAULT_CAMERA_DATA, DEFAULT_MATERIAL_DATA, DEFAULT_ENVIRONMENT,
)
from core.srgb import from_srgb

from .base_reader import BaseReader


# chained references (a file that only names another file) are followed this deep
MAX_REFERENCE_DEPTH = 16


@dataclass
class InlineData:
    """JSON data together with the directory its relative paths refer to"""
    data: Any
    root: Path


@dataclass
class FileReference:
    """JSON field naming another JSON file"""
    path: Path


Node = Union[InlineData, FileReference]


def make_node(value, root) -> Node:
    """Classify a JSON field as inline data or a file reference"""
    if isinstance(value, str):
        return FileReference(Path(get_absolute_path(root, value)))
    return InlineData(value, Path(root))


def resolve(node: Node) -> InlineData:
    """Follow file references until inline data is reached

    Raises:
        SceneFormatError: If a file cannot be read or references nest too deep
    """
    for _ in range(MAX_REFERENCE_DEPTH):
        if isinstance(node, InlineData):
            return node
        filename = node.path.absolute()
        node = make_node(open_file(filename), filename.parent)

    raise SceneFormatError(f"file references nested deeper than {MAX_REFERENCE_DEPTH}")


def _require(j, key):
    if not isinstance(j, dict):
        raise SceneFormatError(f"expected object with field '{key}' but got {type(j).__name__}")
    if key not in j:
        raise SceneFormatError(f"missing field '{key}'")
    return j[key]


def _color(value):
    return tuple(float(v) for v in from_srgb(get_vec3(value)))


def _get_vec3_or_default(j, key, default):
    if key not in j:
        return tuple(default)
    return get_vec3(j[key])


def _get_color_or_default(j, key, default):
    if key not in j:
        return tuple(default)
    return _color(j[key])


def _get_filename(j, key, root) -> str:
    if key not in j:
        return ""
    return get_absolute_path(root, j[key])


class JsonSceneReader(BaseReader):
    """Reader for the JSON scene format"""

    def get_format_name(self):
        return "HRSF JSON"

    def _root_node(self) -> InlineData:
        return resolve(FileReference(self.file_path))

    def load_scene(self) -> SceneFormat:
        """Load the root JSON file and everything it references

        Returns:
            SceneFormat: Loaded scene

        Raises:
            SceneFormatError: On version mismatch, missing files or malformed data
        """
        node = self._root_node()
        j = node.data

        version = _require(j, "version")
        if version != SCENE_FORMAT_VERSION:
            raise SceneFormatError(f"{self.file_path} invalid version")

        meshes = self._parse_meshes(j, node.root)
        camera = self._parse_camera(make_node(_require(j, "camera"), node.root))
        environment = self._parse_environment(make_node(_require(j, "environment"), node.root))
        materials = self._parse_materials(make_node(_require(j, "materials"), node.root))
        lights = self._parse_lights(make_node(_require(j, "lights"), node.root))

        self.log(f"  Loaded {len(meshes)} mesh(es), {len(lights)} light(s), {len(materials)} material(s)")

        return SceneFormat(
            meshes=meshes,
            camera=camera,
            lights=lights,
            materials=materials,
            environment=environment,
        )

    def load_camera(self) -> Camera:
        return self._parse_camera(self._root_node())

    def load_lights(self) -> List[Light]:
        return self._parse_lights(self._root_node())

    def load_materials(self) -> List[Material]:
        return self._parse_materials(self._root_node())

    def load_environment(self) -> Environment:
        return self._parse_environment(self._root_node())

    def load_path(self) -> AnimationPath:
        return self._parse_path(self._root_node())

    def _parse_meshes(self, j, root) -> List[Mesh]:
        if "meshes" not in j:
            # single binary blob referenced by "scene"
            return [Mesh(self._load_binary(_require(j, "scene"), root))]

        entries = j["meshes"]
        if not isinstance(entries, list):
            raise SceneFormatError("meshes must be an array")

        meshes = []
        for entry in entries:
            if isinstance(entry, str):
                meshes.append(Mesh(self._load_binary(entry, root)))
                continue

            if not isinstance(entry, dict):
                raise SceneFormatError("mesh entries must be objects or filenames")

            type_name = entry.get("type", MeshType.TRIANGLE.value)
            try:
                mesh_type = MeshType(type_name)
            except ValueError:
                raise SceneFormatError(f"invalid mesh type {type_name}") from None

            meshes.append(Mesh(
                mesh=self._load_binary(_require(entry, "file"), root),
                type=mesh_type,
                position_path=self._get_path_or_default(entry, "positionPath", root),
                look_at_path=self._get_path_or_default(entry, "lookAtPath", root),
            ))
        return meshes

    def _load_binary(self, filename, root) -> BinaryMesh:
        path = get_absolute_path(root, filename)
        try:
            return BinaryMesh.load_from_file(path)
        except OSError as e:
            raise SceneFormatError(f"could not open {path}: {e}") from e

    def _parse_camera(self, node: Node) -> Camera:
        node = resolve(node)
        j, root = node.data, node.root

        type_name = _require(j, "type")
        try:
            camera_type = CameraType(type_name)
        except ValueError:
            raise SceneFormatError(f"unknown camera type {type_name}") from None

        data = CameraData(
            type=camera_type,
            position=get_vec3(_require(j, "position")),
            direction=get_vec3(_require(j, "direction")),
            fov=float(_require(j, "fov")),
            near=float(j.get("near", DEFAULT_CAMERA_DATA.near)),
            far=float(j.get("far", DEFAULT_CAMERA_DATA.far)),
            up=_get_vec3_or_default(j, "up", DEFAULT_CAMERA_DATA.up),
        )

        return Camera(
            data=data,
            position_path=self._get_path_or_default(j, "positionPath", root),
            look_at_path=self._get_path_or_default(j, "lookAtPath", root),
        )

    def _parse_lights(self, node: Node) -> List[Light]:
        node = resolve(node)
        if not isinstance(node.data, list):
            raise SceneFormatError("lights must be an array")
        return [self._parse_light(j, node.root) for j in node.data]

    def _parse_light(self, j, root) -> Light:
        type_name = _require(j, "type")
        if type_name == LightType.POINT.value:
            geometry = PointLight(
                position=get_vec3(_require(j, "position")),
                radius=float(_require(j, "radius")),
            )
        elif type_name == LightType.DIRECTIONAL.value:
            geometry = DirectionalLight(direction=get_vec3(_require(j, "direction")))
        else:
            raise SceneFormatError(f"invalid light type {type_name}")

        return Light(
            geometry=geometry,
            color=_color(_require(j, "color")),
            path=self._get_path_or_default(j, "path", root),
        )

    def _parse_materials(self, node: Node) -> List[Material]:
        node = resolve(node)
        if not isinstance(node.data, list):
            raise SceneFormatError("materials must be an array")
        return [self._parse_material(j, node.root) for j in node.data]

    def _parse_material(self, j, root) -> Material:
        default = DEFAULT_MATERIAL_DATA
        name = _require(j, "name")

        textures = MaterialTextures(
            ambient=_get_filename(j, "ambientTex", root),
            diffuse=_get_filename(j, "diffuseTex", root),
            specular=_get_filename(j, "specularTex", root),
            occlusion=_get_filename(j, "occlusionTex", root),
        )

        flags = MaterialFlags.NONE
        if j.get("reflection", bool(default.flags & MaterialFlags.REFLECTION)):
            flags |= MaterialFlags.REFLECTION
        if j.get("transparent", bool(default.flags & MaterialFlags.TRANSPARENT)):
            flags |= MaterialFlags.TRANSPARENT

        data = MaterialData(
            ambient=_get_color_or_default(j, "ambient", default.ambient),
            diffuse=_color(_require(j, "diffuse")),
            specular=_get_color_or_default(j, "specular", default.specular),
            emission=_get_color_or_default(j, "emission", default.emission),
            roughness=float(j.get("roughness", default.roughness)),
            occlusion=float(j.get("occlusion", default.occlusion)),
            gloss=float(j.get("gloss", default.gloss)),
            flags=flags,
        )

        return Material(name=name, textures=textures, data=data)

    def _parse_environment(self, node: Node) -> Environment:
        node = resolve(node)
        j, root = node.data, node.root

        return Environment(
            color=_color(_require(j, "color")),
            ambient_up=_get_color_or_default(j, "ambientUp", DEFAULT_ENVIRONMENT.ambient_up),
            ambient_down=_get_color_or_default(j, "ambientDown", DEFAULT_ENVIRONMENT.ambient_down),
            map=_get_filename(j, "map", root),
            ambient=_get_filename(j, "ambient", root),
        )

    def _get_path_or_default(self, j, key, root) -> AnimationPath:
        if key not in j:
            return AnimationPath()
        return self._parse_path(make_node(j[key], root))

    def _parse_path(self, node: Node) -> AnimationPath:
        node = resolve(node)
        j = node.data
        if not isinstance(j, dict):
            raise SceneFormatError("path must be an object")

        scale = float(j.get("scale", 1.0))
        sections = []
        if "sections" in j:
            if not isinstance(j["sections"], list):
                raise SceneFormatError("sections must be an array")
            for s in j["sections"]:
                sections.append(PathSection(
                    time=float(_require(s, "time")),
                    position=get_vec3(_require(s, "pos")),
                ))

        return AnimationPath(sections, scale)
