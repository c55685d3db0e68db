#!/usr/bin/env python3
"""
Base Reader Module
Abstract interface for reading scene description files
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from core.scene_data import SceneFormat, Camera, Light, Material, Environment
    from core.path import Path as AnimationPath


class BaseReader(ABC):
    """Abstract base class for scene file readers

    A reader is bound to one file. load_scene() reads a complete scene root
    file; the load_<component>() methods read a file holding only that
    component (as written by the matching exporter save_<component>()).
    """

    def __init__(self, file_path, progress_callback=None):
        """Initialize reader with file path

        Args:
            file_path: Path to the scene file
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.file_path = Path(file_path)
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress/status message"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name (e.g., 'HRSF JSON')"""
        pass

    @abstractmethod
    def load_scene(self) -> 'SceneFormat':
        """Load the complete scene

        Returns:
            SceneFormat: Scene with meshes, camera, lights, materials and environment
        """
        pass

    @abstractmethod
    def load_camera(self) -> 'Camera':
        pass

    @abstractmethod
    def load_lights(self) -> List['Light']:
        pass

    @abstractmethod
    def load_materials(self) -> List['Material']:
        pass

    @abstractmethod
    def load_environment(self) -> 'Environment':
        pass

    @abstractmethod
    def load_path(self) -> 'AnimationPath':
        pass
