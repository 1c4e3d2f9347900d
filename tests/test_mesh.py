"""
Unit tests for solid_mesh.geometry.mesh.

Tests:
- Layout invariants enforced on construction
- Index formats and capacity
- Derived views and copies
"""

import numpy as np
import pytest

from solid_mesh.errors import IndexCapacityError, MeshLayoutError
from solid_mesh.geometry.mesh import IndexFormat, Mesh


class TestIndexFormat:
    """Tests for IndexFormat."""

    def test_uint16_capacity(self):
        """16-bit indices address 65536 vertices."""
        assert IndexFormat.UINT16.capacity == 65536
        assert IndexFormat.UINT16.dtype == np.uint16

    def test_uint32_capacity(self):
        """32-bit indices address 2**32 vertices."""
        assert IndexFormat.UINT32.capacity == 2 ** 32

    def test_capacity_boundary(self):
        """Exactly the capacity passes, one more fails."""
        IndexFormat.UINT16.check_capacity(65536)
        with pytest.raises(IndexCapacityError) as exc_info:
            IndexFormat.UINT16.check_capacity(65537)
        assert exc_info.value.vertex_count == 65537
        assert exc_info.value.capacity == 65536


class TestMeshConstruction:
    """Tests for Mesh.__post_init__ validation."""

    def test_valid_triangle(self, triangle_mesh):
        """A well-formed mesh is accepted and coerced to its dtypes."""
        assert triangle_mesh.vertex_count == 3
        assert triangle_mesh.index_count == 3
        assert triangle_mesh.triangle_count == 1
        assert triangle_mesh.positions.dtype == np.float32
        assert triangle_mesh.indices.dtype == np.uint16
        assert not triangle_mesh.has_tex_coords

    def test_uint32_indices(self):
        """index_format controls the stored index dtype."""
        mesh = Mesh(
            positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
            colors=[1] * 9,
            normals=[0, 0, 1] * 3,
            indices=[0, 1, 2],
            index_format=IndexFormat.UINT32,
        )
        assert mesh.indices.dtype == np.uint32

    def test_nested_positions_flattened(self):
        """(N, 3) input is flattened."""
        mesh = Mesh(
            positions=[[0, 0, 0], [1, 0, 0], [0, 1, 0]],
            colors=[[1, 1, 1]] * 3,
            normals=[[0, 0, 1]] * 3,
            indices=[[0, 1, 2]],
        )
        assert mesh.positions.shape == (9,)
        assert mesh.faces.tolist() == [[0, 1, 2]]

    def test_positions_not_multiple_of_three(self):
        """Positions must hold whole vertices."""
        with pytest.raises(MeshLayoutError, match="positions"):
            Mesh(positions=[0, 0], colors=[], normals=[], indices=[])

    def test_color_count_mismatch(self):
        """Colors must match the vertex count."""
        with pytest.raises(MeshLayoutError, match="colors"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1, 1, 1],
                normals=[0, 0, 1] * 3,
                indices=[0, 1, 2],
            )

    def test_normal_count_mismatch(self):
        """Normals must match the vertex count."""
        with pytest.raises(MeshLayoutError, match="normals"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 2,
                indices=[0, 1, 2],
            )

    def test_tex_coord_count_mismatch(self):
        """Texture coordinates must match the vertex count."""
        with pytest.raises(MeshLayoutError, match="tex_coords"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 3,
                indices=[0, 1, 2],
                tex_coords=[0, 0, 1, 0],
            )

    def test_index_count_not_multiple_of_three(self):
        """Indices must describe whole triangles."""
        with pytest.raises(MeshLayoutError, match="multiple of 3"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 3,
                indices=[0, 1],
            )

    def test_index_out_of_range(self):
        """Every index must be < vertex count."""
        with pytest.raises(MeshLayoutError, match="out of range"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 3,
                indices=[0, 1, 3],
            )

    def test_negative_index(self):
        """Negative indices are rejected rather than wrapped."""
        with pytest.raises(MeshLayoutError, match="non-negative"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 3,
                indices=[0, 1, -1],
            )

    def test_nan_position(self):
        """Non-finite attribute values are rejected."""
        with pytest.raises(MeshLayoutError, match="NaN"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, float("nan"), 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 3,
                indices=[0, 1, 2],
            )

    def test_capacity_exceeded(self):
        """Vertex count beyond the index type is reported, not wrapped."""
        n = 65537
        with pytest.raises(IndexCapacityError):
            Mesh(
                positions=np.zeros(n * 3),
                colors=np.ones(n * 3),
                normals=np.tile([0, 0, 1], n),
                indices=[0, 1, 2],
            )

    def test_index_format_string_coerced(self):
        """index_format accepts the enum value string."""
        mesh = Mesh(
            positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
            colors=[1] * 9,
            normals=[0, 0, 1] * 3,
            indices=[0, 1, 2],
            index_format="uint32",
        )
        assert mesh.index_format is IndexFormat.UINT32
        assert mesh.indices.dtype == np.uint32

    def test_unknown_index_format(self):
        """An unknown index format is a layout error."""
        with pytest.raises(MeshLayoutError, match="index_format"):
            Mesh(
                positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
                colors=[1] * 9,
                normals=[0, 0, 1] * 3,
                indices=[0, 1, 2],
                index_format="int8",
            )


class TestMeshViews:
    """Tests for derived arrays and copies."""

    def test_vertices_and_faces_shapes(self, triangle_mesh):
        """vertices is (N, 3), faces is (M, 3)."""
        assert triangle_mesh.vertices.shape == (3, 3)
        assert triangle_mesh.faces.shape == (1, 3)
        assert triangle_mesh.normal_vectors.shape == (3, 3)

    def test_views_are_copies(self, triangle_mesh):
        """Modifying a derived view does not touch the mesh."""
        verts = triangle_mesh.vertices
        verts[0, 0] = 99.0
        assert triangle_mesh.positions[0] == 0.0

    def test_copy_shares_no_buffers(self, triangle_mesh):
        """copy() returns independent arrays."""
        dup = triangle_mesh.copy()
        dup.positions[0] = 5.0
        assert triangle_mesh.positions[0] == 0.0
        assert dup.index_format is triangle_mesh.index_format

    def test_construction_copies_input(self):
        """The mesh does not alias caller arrays."""
        positions = np.array([0, 0, 0, 1, 0, 0, 0, 1, 0], dtype=np.float32)
        mesh = Mesh(
            positions=positions,
            colors=np.ones(9, dtype=np.float32),
            normals=np.tile(np.array([0, 0, 1], dtype=np.float32), 3),
            indices=np.array([0, 1, 2], dtype=np.uint16),
        )
        positions[0] = 7.0
        assert mesh.positions[0] == 0.0

    def test_to_dict(self, triangle_mesh):
        """to_dict produces plain lists."""
        data = triangle_mesh.to_dict()
        assert data["indices"] == [0, 1, 2]
        assert data["index_format"] == "uint16"
        assert "tex_coords" not in data
