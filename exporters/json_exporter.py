#!/usr/bin/env python3
"""
JSON Exporter Module
Writes a SceneFormat as JSON sidecar files plus one binary mesh blob per mesh.

Output for scene name "test" (split mode):
    test.json           root file, references the files below
    test_0.bmf ...      one binary blob per mesh
    test_material.json  materials
    test_light.json     lights
    test_camera.json    camera
    test_env.json       environment

In single-file mode the components are stored inline in test.json.
"""

from pathlib import Path
from typing import List

from core.errors import SceneFormatError
from core.json_utils import (
    SCENE_FORMAT_VERSION,
    save_file,
    write_vec3,
    vec3_equal,
    get_relative_path,
)
from core.path import Path as AnimationPath
from core.scene_data import (
    SceneFormat, Camera, Light, PointLight, DirectionalLight, Material, MaterialFlags,
    Environment, DEFAULT_CAMERA_DATA, DEFAULT_MATERIAL_DATA, DEFAULT_ENVIRONMENT,
)
from core.srgb import to_srgb

from .base_exporter import BaseExporter


def _base_name(filename) -> Path:
    path = Path(filename)
    if path.suffix.lower() == '.json':
        path = path.with_suffix('')
    return path


class JsonSceneExporter(BaseExporter):
    """Exporter for the JSON scene format"""

    def get_format_name(self):
        return "HRSF JSON"

    def get_file_extension(self):
        return "json"

    def export(self, scene: SceneFormat, output_path, scene_name, single_file=False):
        """Export scene to a directory

        Args:
            scene: Scene to write
            output_path: Output directory path
            scene_name: Base name for all created files
            single_file: Store camera, lights, materials and environment inline

        Returns:
            dict: Export results with keys:
                - 'success': bool
                - 'json_file': Path to the root JSON file
                - 'files': All created files
                - 'message': Status message
        """
        try:
            output_dir = self.validate_output_path(output_path)
            self.log(f"Writing scene: {output_dir / scene_name}.json")

            files = self.save(scene, output_dir / scene_name, single_file=single_file)

            return {
                'success': True,
                'json_file': str(files[0]),
                'files': [str(f) for f in files],
                'message': f"Exported {len(scene.get_meshes())} mesh(es) to {len(files)} file(s)",
            }

        except Exception as e:
            self.log(f"✗ JSON export failed: {e}")
            return {
                'success': False,
                'files': [],
                'message': f"JSON export failed: {e}",
            }

    def save(self, scene: SceneFormat, filename, single_file=False) -> List[Path]:
        """Write the scene, creating the target directory if needed

        Args:
            scene: Scene to write
            filename: Root file name, with or without .json extension
            single_file: Store components inline instead of in separate files

        Returns:
            list: Written files, root JSON file first

        Raises:
            SceneFormatError: If a file cannot be written
        """
        base = _base_name(filename)
        root = base.absolute().parent
        name = base.name
        written = []

        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SceneFormatError(f"could not create directory {root}: {e}") from e

        meshes = []
        for i, mesh in enumerate(scene.get_meshes()):
            binary_name = f"{name}_{i}.bmf"
            try:
                mesh.mesh.save_to_file(root / binary_name)
            except OSError as e:
                raise SceneFormatError(f"could not open {root / binary_name}: {e}") from e
            written.append(root / binary_name)

            entry = {"file": binary_name, "type": mesh.type.value}
            if not mesh.position_path.is_static():
                entry["positionPath"] = self.get_path_json(mesh.position_path)
            if not mesh.look_at_path.is_static():
                entry["lookAtPath"] = self.get_path_json(mesh.look_at_path)
            meshes.append(entry)

        components = {
            "materials": ("material", self.get_materials_json(scene.get_materials(), root)),
            "lights": ("light", self.get_lights_json(scene.get_lights())),
            "camera": ("camera", self.get_camera_json(scene.get_camera())),
            "environment": ("env", self.get_environment_json(scene.get_environment(), root)),
        }

        j = {
            "version": SCENE_FORMAT_VERSION,
            "meshes": meshes,
        }
        for key, (suffix, data) in components.items():
            if single_file:
                j[key] = data
            else:
                component_file = f"{name}_{suffix}.json"
                written.append(save_file(data, root / component_file))
                j[key] = component_file

        written.insert(0, save_file(j, root / f"{name}.json"))
        return written

    def save_camera(self, filename, camera: Camera) -> Path:
        return save_file(self.get_camera_json(camera), filename)

    def save_materials(self, filename, materials: List[Material]) -> Path:
        root = Path(filename).absolute().parent
        return save_file(self.get_materials_json(materials, root), filename)

    def save_lights(self, filename, lights: List[Light]) -> Path:
        return save_file(self.get_lights_json(lights), filename)

    def save_environment(self, filename, environment: Environment) -> Path:
        root = Path(filename).absolute().parent
        return save_file(self.get_environment_json(environment, root), filename)

    def save_path(self, filename, path: AnimationPath) -> Path:
        return save_file(self.get_path_json(path), filename)

    def get_materials_json(self, materials: List[Material], root) -> list:
        """Material list as JSON, textures relative to root

        Only diffuse is always written; other values are written when they
        differ from the default material.
        """
        default = DEFAULT_MATERIAL_DATA
        result = []
        for m in materials:
            j = {"name": m.name}

            for key, texture in (
                ("diffuseTex", m.textures.diffuse),
                ("ambientTex", m.textures.ambient),
                ("specularTex", m.textures.specular),
                ("occlusionTex", m.textures.occlusion),
            ):
                if texture:
                    j[key] = get_relative_path(root, texture)

            data = m.data
            j["diffuse"] = write_vec3(to_srgb(data.diffuse))
            if not vec3_equal(data.ambient, default.ambient):
                j["ambient"] = write_vec3(to_srgb(data.ambient))
            if data.roughness != default.roughness:
                j["roughness"] = float(data.roughness)
            if data.occlusion != default.occlusion:
                j["occlusion"] = float(data.occlusion)
            if not vec3_equal(data.specular, default.specular):
                j["specular"] = write_vec3(to_srgb(data.specular))
            if data.gloss != default.gloss:
                j["gloss"] = float(data.gloss)
            if not vec3_equal(data.emission, default.emission):
                j["emission"] = write_vec3(to_srgb(data.emission))

            # flags as booleans
            for key, flag in (("reflection", MaterialFlags.REFLECTION), ("transparent", MaterialFlags.TRANSPARENT)):
                enabled = bool(data.flags & flag)
                if enabled != bool(default.flags & flag):
                    j[key] = enabled

            result.append(j)
        return result

    def get_lights_json(self, lights: List[Light]) -> list:
        result = []
        for light in lights:
            j = {"type": light.type.value}
            geometry = light.geometry
            if isinstance(geometry, PointLight):
                j["position"] = write_vec3(geometry.position)
                j["radius"] = float(geometry.radius)
            elif isinstance(geometry, DirectionalLight):
                j["direction"] = write_vec3(geometry.direction)
            else:
                raise ValueError(f"invalid light geometry {geometry!r}")

            j["color"] = write_vec3(to_srgb(light.color))
            if not light.path.is_static():
                j["path"] = self.get_path_json(light.path)

            result.append(j)
        return result

    def get_camera_json(self, camera: Camera) -> dict:
        default = DEFAULT_CAMERA_DATA
        data = camera.data

        j = {
            "type": data.type.value,
            "position": write_vec3(data.position),
            "direction": write_vec3(data.direction),
            "fov": float(data.fov),
        }
        if data.near != default.near:
            j["near"] = float(data.near)
        if data.far != default.far:
            j["far"] = float(data.far)
        if not vec3_equal(data.up, default.up):
            j["up"] = write_vec3(data.up)

        if not camera.position_path.is_static():
            j["positionPath"] = self.get_path_json(camera.position_path)
        if not camera.look_at_path.is_static():
            j["lookAtPath"] = self.get_path_json(camera.look_at_path)

        return j

    def get_environment_json(self, environment: Environment, root) -> dict:
        j = {"color": write_vec3(to_srgb(environment.color))}

        if not vec3_equal(environment.ambient_up, DEFAULT_ENVIRONMENT.ambient_up):
            j["ambientUp"] = write_vec3(to_srgb(environment.ambient_up))
        if not vec3_equal(environment.ambient_down, DEFAULT_ENVIRONMENT.ambient_down):
            j["ambientDown"] = write_vec3(to_srgb(environment.ambient_down))

        if environment.map:
            j["map"] = get_relative_path(root, environment.map)
        if environment.ambient:
            j["ambient"] = get_relative_path(root, environment.ambient)

        return j

    def get_path_json(self, path: AnimationPath) -> dict:
        j = {}
        if path.get_scale() != 1.0:
            j["scale"] = float(path.get_scale())
        j["sections"] = [
            {"time": float(s.time), "pos": write_vec3(s.position)}
            for s in path.get_sections()
        ]
        return j
