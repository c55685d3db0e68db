#!/usr/bin/env python3
"""
Errors Module
Exception types raised while loading, saving or verifying a scene
"""


class SceneFormatError(ValueError):
    """Base class for all scene format errors"""


class InvalidPathSection(SceneFormatError):
    """A path section has a non-positive travel time

    Attributes:
        index: Index of the offending section
        time: The section's time value
    """

    def __init__(self, index, time):
        super().__init__(f"invalid path section {index}: time must be > 0 but is {time}")
        self.index = index
        self.time = time


class InvalidMaterialId(SceneFormatError):
    """A mesh shape references a material that does not exist"""

    def __init__(self, material_id):
        super().__init__(f"material id out of bound: {material_id}")
        self.material_id = material_id


class InvalidMesh(SceneFormatError):
    """Binary mesh data is inconsistent or could not be decoded"""
