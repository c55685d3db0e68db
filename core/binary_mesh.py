#!/usr/bin/env python3
"""
Binary Mesh Module
Interleaved vertex buffer, index buffer and material shapes, stored as one
binary blob (.bmf) per mesh.

File layout (little endian):
    magic        4 bytes  b"BMF1"
    attributes   uint32   Attribute bit flags
    index_size   uint32   2 or 4 bytes per index
    float_count  uint32   number of float32 values in the vertex buffer
    index_count  uint32
    shape_count  uint32
    vertices     float32[float_count]
    indices      uint16/uint32[index_count]
    shapes       uint32[shape_count * 3]  (index_offset, index_count, material_id)
"""

from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path
from typing import List, Sequence

import numpy as np

from .errors import InvalidMesh


MAGIC = b"BMF1"
HEADER_DTYPE = np.dtype('<u4')
HEADER_FIELDS = 5


class Attribute(IntFlag):
    """Vertex attributes stored (interleaved, in this order) per vertex"""
    NONE = 0
    POSITION = 1
    NORMAL = 2
    TEXCOORD0 = 4


# float components per attribute
ATTRIBUTE_SIZES = {
    Attribute.POSITION: 3,
    Attribute.NORMAL: 3,
    Attribute.TEXCOORD0: 2,
}

INDEX_DTYPES = {
    2: np.uint16,
    4: np.uint32,
}


def get_stride(attributes) -> int:
    """Number of floats per vertex for a set of attributes"""
    return sum(size for flag, size in ATTRIBUTE_SIZES.items() if attributes & flag)


@dataclass
class Shape:
    """Range of the index buffer drawn with one material

    Attributes:
        index_offset: First index of the shape
        index_count: Number of indices (multiple of 3)
        material_id: Index into the scene's material list
    """
    index_offset: int
    index_count: int
    material_id: int


class BinaryMesh:
    """Triangle mesh with interleaved vertex attributes and material shapes"""

    def __init__(self, attributes, vertices, indices, shapes: Sequence[Shape], index_dtype=np.uint32):
        """Create a mesh

        Args:
            attributes: Attribute flags describing the vertex layout
            vertices: Flat interleaved vertex floats
            indices: Flat triangle indices
            shapes: Material ranges over the index buffer
            index_dtype: np.uint16 or np.uint32
        """
        self.attributes = Attribute(attributes)
        self.vertices = np.asarray(vertices, dtype=np.float32).ravel()
        self.indices = np.asarray(indices, dtype=index_dtype).ravel()
        self.shapes: List[Shape] = list(shapes)

    @property
    def stride(self) -> int:
        return get_stride(self.attributes)

    @property
    def vertex_count(self) -> int:
        stride = self.stride
        return len(self.vertices) // stride if stride else 0

    def get_attributes(self):
        return self.attributes

    def get_vertices(self):
        return self.vertices

    def get_indices(self):
        return self.indices

    def get_shapes(self) -> List[Shape]:
        return self.shapes

    def verify(self):
        """Check that buffers and shapes are consistent

        Raises:
            InvalidMesh: If the mesh layout is invalid
        """
        if not self.attributes & Attribute.POSITION:
            raise InvalidMesh("mesh has no position attribute")

        stride = self.stride
        if len(self.vertices) % stride != 0:
            raise InvalidMesh(
                f"vertex buffer size {len(self.vertices)} is not a multiple of the stride {stride}"
            )

        if len(self.indices) % 3 != 0:
            raise InvalidMesh(f"index count {len(self.indices)} is not a multiple of 3")

        if len(self.indices) and int(self.indices.max()) >= self.vertex_count:
            raise InvalidMesh(
                f"index {int(self.indices.max())} out of bound (vertex count {self.vertex_count})"
            )

        for i, shape in enumerate(self.shapes):
            if shape.index_count % 3 != 0:
                raise InvalidMesh(f"shape {i}: index count {shape.index_count} is not a multiple of 3")
            if shape.index_offset < 0 or shape.index_offset + shape.index_count > len(self.indices):
                raise InvalidMesh(f"shape {i}: index range exceeds the index buffer")

    def save_to_file(self, filename):
        """Write the mesh as a .bmf blob

        Args:
            filename: Output file path
        """
        index_size = self.indices.dtype.itemsize
        if index_size not in INDEX_DTYPES:
            raise InvalidMesh(f"unsupported index size: {index_size}")

        header = np.array([
            int(self.attributes),
            index_size,
            len(self.vertices),
            len(self.indices),
            len(self.shapes),
        ], dtype=HEADER_DTYPE)
        shapes = np.array(
            [(s.index_offset, s.index_count, s.material_id) for s in self.shapes],
            dtype=HEADER_DTYPE,
        ).reshape(-1, 3)

        with open(filename, 'wb') as f:
            f.write(MAGIC)
            f.write(header.tobytes())
            f.write(self.vertices.astype('<f4').tobytes())
            f.write(self.indices.astype(f'<u{index_size}').tobytes())
            f.write(shapes.tobytes())

    @classmethod
    def load_from_file(cls, filename) -> 'BinaryMesh':
        """Read a .bmf blob

        Args:
            filename: Path to the .bmf file

        Returns:
            BinaryMesh: Loaded mesh

        Raises:
            InvalidMesh: If the file is not a valid mesh blob
            OSError: If the file cannot be read
        """
        data = Path(filename).read_bytes()
        if data[:len(MAGIC)] != MAGIC:
            raise InvalidMesh(f"{filename} is not a binary mesh file")

        offset = len(MAGIC)
        header_size = HEADER_FIELDS * HEADER_DTYPE.itemsize
        if len(data) < offset + header_size:
            raise InvalidMesh(f"{filename}: truncated header")
        attributes, index_size, float_count, index_count, shape_count = (
            int(v) for v in np.frombuffer(data, dtype=HEADER_DTYPE, count=HEADER_FIELDS, offset=offset)
        )
        offset += header_size

        if index_size not in INDEX_DTYPES:
            raise InvalidMesh(f"{filename}: unsupported index size {index_size}")
        index_dtype = INDEX_DTYPES[index_size]

        expected = offset + float_count * 4 + index_count * index_size + shape_count * 3 * HEADER_DTYPE.itemsize
        if len(data) < expected:
            raise InvalidMesh(f"{filename}: truncated data ({len(data)} of {expected} bytes)")

        vertices = np.frombuffer(data, dtype='<f4', count=float_count, offset=offset)
        offset += float_count * 4
        indices = np.frombuffer(data, dtype=f'<u{index_size}', count=index_count, offset=offset)
        offset += index_count * index_size
        raw_shapes = np.frombuffer(data, dtype=HEADER_DTYPE, count=shape_count * 3, offset=offset).reshape(-1, 3)

        shapes = [Shape(int(o), int(c), int(m)) for o, c, m in raw_shapes]
        return cls(attributes, vertices.copy(), indices.copy(), shapes, index_dtype=index_dtype)
