#!/usr/bin/env python3
"""
JSON Utilities Module
Helpers shared by the JSON scene reader and exporter: file access,
vec3 encoding and texture path resolution.
"""

import json
import os
from pathlib import Path

import numpy as np

from .errors import SceneFormatError


SCENE_FORMAT_VERSION = 1
JSON_INDENT = 3


def json_filename(filename) -> Path:
    """Filename with its extension replaced by .json"""
    return Path(filename).with_suffix('.json')


def open_file(filename):
    """Load a JSON document

    Args:
        filename: Path with or without extension (.json is used either way)

    Returns:
        Parsed JSON value

    Raises:
        SceneFormatError: If the file cannot be opened or parsed
    """
    path = json_filename(filename).absolute()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except OSError as e:
        raise SceneFormatError(f"could not open {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SceneFormatError(f"{path} is not valid JSON: {e}") from e


def save_file(data, filename) -> Path:
    """Write a JSON document

    Args:
        data: JSON-serializable value
        filename: Path with or without extension (.json is used either way)

    Returns:
        Path: The file written

    Raises:
        SceneFormatError: If the file cannot be written
    """
    path = json_filename(filename)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=JSON_INDENT)
    except OSError as e:
        raise SceneFormatError(f"could not open {path}: {e}") from e
    return path


def get_vec3(value):
    """Decode a vec3 field

    A single number (or one-element array) sets all three components.

    Args:
        value: JSON number or array

    Returns:
        tuple: (x, y, z)

    Raises:
        SceneFormatError: For arrays that do not have 1 or 3 elements
    """
    if isinstance(value, list):
        if len(value) == 1:
            return (float(value[0]),) * 3
        if len(value) == 3:
            return tuple(float(v) for v in value)
        raise SceneFormatError(f"expected array with 3 or 1 element but got {len(value)}")

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"expected number or array but got {value!r}")
    return (float(value),) * 3


def write_vec3(vec):
    """Encode a vec3, collapsing equal components to one number"""
    x, y, z = (float(v) for v in vec)
    if x == y == z:
        return x
    return [x, y, z]


def vec3_equal(a, b) -> bool:
    return np.array_equal(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64))


def get_absolute_path(root, path) -> str:
    """Resolve a path stored in a JSON file against the file's directory"""
    if os.path.isabs(path):
        return str(path)
    return str(Path(root) / path)


def get_relative_path(root, path) -> str:
    """Path to store in a JSON file located in root

    Relative paths are assumed to be relative to root already.

    Raises:
        SceneFormatError: If no relative path can be formed (e.g. other drive)
    """
    if not os.path.isabs(path):
        return str(path)
    try:
        return os.path.relpath(path, root)
    except ValueError as e:
        raise SceneFormatError(f"could not form relative path: {e}") from e
