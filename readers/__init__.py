#!/usr/bin/env python3
"""
Readers Module
Scene file readers
"""

from pathlib import Path

from .base_reader import BaseReader
from .json_reader import JsonSceneReader, InlineData, FileReference

# Supported file extensions. A name without extension refers to the .json file.
JSON_EXTENSIONS = {'.json', ''}
SUPPORTED_EXTENSIONS = JSON_EXTENSIONS


def create_reader(input_file, progress_callback=None):
    """Factory function to create appropriate reader based on file extension

    Args:
        input_file: Path to input scene file
        progress_callback: Optional progress callback passed to the reader

    Returns:
        BaseReader: Reader instance

    Raises:
        ValueError: If file extension is not supported
    """
    ext = Path(input_file).suffix.lower()

    if ext in JSON_EXTENSIONS:
        return JsonSceneReader(input_file, progress_callback)
    raise ValueError(
        f"Unsupported file format: {ext}\n"
        f"Supported formats: .json"
    )


def get_file_type(input_file):
    """Get the file type string for a given file

    Returns:
        str: 'json' or 'unknown'
    """
    if is_supported_format(input_file):
        return 'json'
    return 'unknown'


def is_supported_format(input_file):
    return Path(input_file).suffix.lower() in SUPPORTED_EXTENSIONS


def load_scene(input_file, progress_callback=None):
    """Load a complete scene with the matching reader"""
    return create_reader(input_file, progress_callback).load_scene()


__all__ = [
    'BaseReader',
    'JsonSceneReader',
    'InlineData',
    'FileReference',
    'create_reader',
    'get_file_type',
    'is_supported_format',
    'load_scene',
    'JSON_EXTENSIONS',
    'SUPPORTED_EXTENSIONS',
]
