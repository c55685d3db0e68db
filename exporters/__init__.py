#!/usr/bin/env python3
"""
Exporters Module
Scene file writers
"""

from .base_exporter import BaseExporter
from .json_exporter import JsonSceneExporter

__all__ = [
    'BaseExporter',
    'JsonSceneExporter',
]
