#!/usr/bin/env python3
"""
Base Exporter Module
Abstract base class ensuring consistent interface across all exporters
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.scene_data import SceneFormat


class BaseExporter(ABC):
    """Abstract base class for all format exporters

    Provides consistent interface and common utilities for all exporters.
    """

    def __init__(self, progress_callback=None):
        """Initialize exporter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress/status message

        Args:
            message: Message to log
        """
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    @abstractmethod
    def export(self, scene: 'SceneFormat', output_path, scene_name, **options):
        """Export a scene

        Args:
            scene: SceneFormat to write
            output_path: Output directory path (Path object or string)
            scene_name: Base name for the created files
            **options: Format-specific options

        Returns:
            dict: Export results with format-specific keys
                  Should include at least:
                  - 'success': bool
                  - 'files': list of created file paths
                  - 'message': str status message
        """
        pass

    @abstractmethod
    def get_format_name(self):
        """Return human-readable format name"""
        pass

    @abstractmethod
    def get_file_extension(self):
        """Return primary file extension for this format, without dot"""
        pass

    def validate_output_path(self, output_path):
        """Validate and create output directory if needed

        Args:
            output_path: Directory path to validate

        Returns:
            Path: Validated Path object

        Raises:
            ValueError: If path is invalid
        """
        path = Path(output_path)

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create output directory {path}: {e}")

        if not path.is_dir():
            raise ValueError(f"Output path is not a directory: {path}")

        return path

    def get_export_summary(self, result):
        """Generate human-readable summary of export results

        Args:
            result: Export result dict from export() method

        Returns:
            str: Formatted summary text
        """
        lines = []
        lines.append(f"✓ {self.get_format_name()} Export Complete")

        if 'files' in result:
            files = result['files']
            lines.append(f"  Files created: {len(files)}")
            for file_path in files:
                lines.append(f"    - {Path(file_path).name}")

        if 'message' in result:
            lines.append(f"  {result['message']}")

        return "\n".join(lines)
