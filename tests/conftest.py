"""Shared test fixtures for the scene format test suite."""

import shutil
import tempfile
from pathlib import Path

import pytest

from core.binary_mesh import Attribute, BinaryMesh, Shape
from core.path import Path as AnimationPath, PathSection
from core.scene_data import (
    SceneFormat, Camera, CameraData, Light, PointLight, DirectionalLight,
    Material, MaterialData, MaterialFlags, MaterialTextures, Environment, Mesh,
)


@pytest.fixture
def tmp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def two_sections():
    """Open (non-circular) path: 2s to (1,0,0), then 3s to (0,1,0)."""
    return [
        PathSection(time=2.0, position=(1.0, 0.0, 0.0)),
        PathSection(time=3.0, position=(0.0, 1.0, 0.0)),
    ]


@pytest.fixture
def textured_mesh():
    """Two triangles with position + texcoord vertices and two shapes."""
    vertices = [
        0.0, 0.0, 0.0, 0.0, 0.0,
        1.0, 0.0, 1.0, 0.1, 0.2,
        0.0, 1.0, 0.0, 0.5, 0.6,
        1.0, 0.0, 2.0, 0.7, 0.9,
    ]
    indices = [0, 1, 2, 1, 2, 3]
    shapes = [Shape(0, 3, 0), Shape(3, 3, 1)]
    return BinaryMesh(Attribute.POSITION | Attribute.TEXCOORD0, vertices, indices, shapes)


@pytest.fixture
def make_triangle_mesh():
    """Factory: one triangle, one shape per material id."""
    def _make(material_ids):
        vertices = [
            0.0, 0.0, 0.0,
            1.0, 0.0, 1.0,
            0.0, 1.0, 0.0,
        ]
        shapes = [Shape(0, 3, m) for m in material_ids]
        return BinaryMesh(Attribute.POSITION, vertices, [0, 1, 2], shapes)
    return _make


@pytest.fixture
def sample_scene(textured_mesh, two_sections):
    """A small scene using every component type."""
    camera = Camera(
        data=CameraData(position=(10.0, 20.0, 30.0), fov=1.4, far=1.0),
        position_path=AnimationPath(two_sections, 2.0),
    )

    lights = [
        Light(PointLight(position=(0.0, 30.0, 0.0), radius=1.0), color=(1.0, 0.0, 0.0)),
        Light(DirectionalLight(direction=(0.1, -1.0, 0.0)), color=(1.0, 0.8, 1.0)),
    ]

    materials = [
        Material("default"),
        Material(
            "spec",
            textures=MaterialTextures(diffuse="myTexture"),
            data=MaterialData(specular=(1.0, 0.0, 1.0), flags=MaterialFlags.REFLECTION),
        ),
    ]

    environment = Environment(color=(0.4, 0.6, 1.0), map="envmap.hdr")

    return SceneFormat(
        meshes=[Mesh(textured_mesh)],
        camera=camera,
        lights=lights,
        materials=materials,
        environment=environment,
    )
