"""Tests for binary mesh layout checks and the .bmf file format."""

import numpy as np
import pytest

from core.binary_mesh import Attribute, BinaryMesh, Shape, MAGIC, get_stride
from core.errors import InvalidMesh


class TestStride:

    @pytest.mark.parametrize("attributes, expected", [
        (Attribute.POSITION, 3),
        (Attribute.POSITION | Attribute.NORMAL, 6),
        (Attribute.POSITION | Attribute.TEXCOORD0, 5),
        (Attribute.POSITION | Attribute.NORMAL | Attribute.TEXCOORD0, 8),
    ])
    def test_get_stride(self, attributes, expected):
        assert get_stride(attributes) == expected

    def test_vertex_count(self, textured_mesh):
        assert textured_mesh.stride == 5
        assert textured_mesh.vertex_count == 4


class TestVerify:

    def test_valid_mesh(self, textured_mesh):
        textured_mesh.verify()

    def test_missing_position(self):
        mesh = BinaryMesh(Attribute.NORMAL, [0.0, 0.0, 1.0] * 3, [0, 1, 2], [])
        with pytest.raises(InvalidMesh, match="no position"):
            mesh.verify()

    def test_vertex_buffer_not_multiple_of_stride(self):
        mesh = BinaryMesh(Attribute.POSITION, [0.0] * 10, [], [])
        with pytest.raises(InvalidMesh, match="stride"):
            mesh.verify()

    def test_index_count_not_multiple_of_three(self):
        mesh = BinaryMesh(Attribute.POSITION, [0.0] * 9, [0, 1], [])
        with pytest.raises(InvalidMesh, match="multiple of 3"):
            mesh.verify()

    def test_index_out_of_bound(self):
        mesh = BinaryMesh(Attribute.POSITION, [0.0] * 9, [0, 1, 3], [])
        with pytest.raises(InvalidMesh, match="out of bound"):
            mesh.verify()

    def test_shape_exceeds_index_buffer(self):
        mesh = BinaryMesh(Attribute.POSITION, [0.0] * 9, [0, 1, 2], [Shape(3, 3, 0)])
        with pytest.raises(InvalidMesh, match="shape 0"):
            mesh.verify()

    def test_shape_count_not_multiple_of_three(self):
        mesh = BinaryMesh(Attribute.POSITION, [0.0] * 9, [0, 1, 2], [Shape(0, 2, 0)])
        with pytest.raises(InvalidMesh, match="shape 0"):
            mesh.verify()


class TestFile:

    def test_save_and_load(self, tmp_dir, textured_mesh):
        filename = tmp_dir / "mesh.bmf"
        textured_mesh.save_to_file(filename)

        loaded = BinaryMesh.load_from_file(filename)

        assert loaded.get_attributes() == Attribute.POSITION | Attribute.TEXCOORD0
        np.testing.assert_array_equal(loaded.get_vertices(), textured_mesh.get_vertices())
        np.testing.assert_array_equal(loaded.get_indices(), [0, 1, 2, 1, 2, 3])
        assert loaded.get_indices().dtype == np.uint32
        assert loaded.get_shapes() == [Shape(0, 3, 0), Shape(3, 3, 1)]

    def test_file_starts_with_magic(self, tmp_dir, textured_mesh):
        filename = tmp_dir / "mesh.bmf"
        textured_mesh.save_to_file(filename)
        assert filename.read_bytes()[:4] == MAGIC

    def test_file_size(self, tmp_dir, textured_mesh):
        filename = tmp_dir / "mesh.bmf"
        textured_mesh.save_to_file(filename)
        # magic + header + 20 floats + 6 uint32 indices + 2 shapes
        assert filename.stat().st_size == 4 + 5 * 4 + 20 * 4 + 6 * 4 + 2 * 3 * 4

    def test_uint16_indices(self, tmp_dir):
        mesh = BinaryMesh(Attribute.POSITION, [0.0] * 9, [0, 1, 2], [Shape(0, 3, 0)], index_dtype=np.uint16)
        filename = tmp_dir / "small.bmf"
        mesh.save_to_file(filename)

        loaded = BinaryMesh.load_from_file(filename)
        assert loaded.get_indices().dtype == np.uint16
        np.testing.assert_array_equal(loaded.get_indices(), [0, 1, 2])

    def test_empty_mesh(self, tmp_dir):
        mesh = BinaryMesh(Attribute.POSITION, [], [], [])
        filename = tmp_dir / "empty.bmf"
        mesh.save_to_file(filename)

        loaded = BinaryMesh.load_from_file(filename)
        assert loaded.vertex_count == 0
        assert loaded.get_shapes() == []
        loaded.verify()

    def test_wrong_magic(self, tmp_dir):
        filename = tmp_dir / "bad.bmf"
        filename.write_bytes(b"NOPE" + bytes(20))
        with pytest.raises(InvalidMesh, match="not a binary mesh"):
            BinaryMesh.load_from_file(filename)

    def test_truncated_data(self, tmp_dir, textured_mesh):
        filename = tmp_dir / "mesh.bmf"
        textured_mesh.save_to_file(filename)
        data = filename.read_bytes()
        filename.write_bytes(data[:-5])
        with pytest.raises(InvalidMesh, match="truncated"):
            BinaryMesh.load_from_file(filename)

    def test_truncated_header(self, tmp_dir):
        filename = tmp_dir / "short.bmf"
        filename.write_bytes(MAGIC + bytes(3))
        with pytest.raises(InvalidMesh, match="truncated header"):
            BinaryMesh.load_from_file(filename)

    def test_missing_file(self, tmp_dir):
        with pytest.raises(OSError):
            BinaryMesh.load_from_file(tmp_dir / "missing.bmf")
