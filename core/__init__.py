#!/usr/bin/env python3
"""
Core Module
Scene data structures, animation paths and binary meshes.
"""

from .errors import SceneFormatError, InvalidPathSection, InvalidMaterialId, InvalidMesh
from .path import Path, PathSection
from .binary_mesh import Attribute, BinaryMesh, Shape
from .animation_detector import AnimationDetector, AnimationCategories, Keyframe
from .scene_data import (
    SceneFormat,
    Camera,
    CameraData,
    CameraType,
    Light,
    LightType,
    PointLight,
    DirectionalLight,
    Material,
    MaterialData,
    MaterialFlags,
    MaterialTextures,
    Environment,
    Mesh,
    MeshType,
)

__all__ = [
    'SceneFormatError',
    'InvalidPathSection',
    'InvalidMaterialId',
    'InvalidMesh',
    'Path',
    'PathSection',
    'Attribute',
    'BinaryMesh',
    'Shape',
    'AnimationDetector',
    'AnimationCategories',
    'Keyframe',
    'SceneFormat',
    'Camera',
    'CameraData',
    'CameraType',
    'Light',
    'LightType',
    'PointLight',
    'DirectionalLight',
    'Material',
    'MaterialData',
    'MaterialFlags',
    'MaterialTextures',
    'Environment',
    'Mesh',
    'MeshType',
]
