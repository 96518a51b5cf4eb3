"""
tests/test_geometry.py - Cell mesh builder tests.
"""

import numpy as np
import pytest

from hexglobe.constants import VERTEX_NORMAL, VERTEX_UV
from hexglobe.geometry import build_mesh, build_meshes, fan_indices
from hexglobe.projection import GeodeticProjector

from conftest import ring


class TestFanIndices:

    def test_triangle(self):
        assert fan_indices(3) == [0, 1, 2]

    def test_hexagon(self):
        assert fan_indices(6) == [0, 1, 2, 0, 2, 3, 0, 3, 4, 0, 4, 5]

    def test_too_small(self):
        assert fan_indices(2) == []
        assert fan_indices(0) == []


class TestBuildMesh:

    def test_hexagon_has_four_triangles(self, hexagon):
        mesh = build_mesh(hexagon, altitude=1.0)
        assert mesh.vertex_count == 6
        assert mesh.triangle_count == 4
        assert mesh.indices == (0, 1, 2, 0, 2, 3, 0, 3, 4, 0, 4, 5)

    def test_pentagon_has_three_triangles(self, pentagon):
        mesh = build_mesh(pentagon, altitude=1.0)
        assert mesh.vertex_count == 5
        assert mesh.triangle_count == 3
        assert mesh.indices == (0, 1, 2, 0, 2, 3, 0, 3, 4)

    @pytest.mark.parametrize("n", [3, 4, 7, 12])
    def test_unsupported_arity_keeps_vertices_only(self, n):
        mesh = build_mesh(ring(n))
        assert mesh.vertex_count == n
        assert mesh.indices == ()
        assert mesh.is_empty

    def test_empty_boundary(self):
        mesh = build_mesh(())
        assert mesh.vertex_count == 0
        assert mesh.is_empty

    def test_vertices_follow_boundary_order(self, hexagon):
        proj = GeodeticProjector()
        mesh = build_mesh(hexagon, altitude=1.0, projector=proj)
        for vertex, point in zip(mesh.vertices, hexagon):
            expected = proj.project(point.latitude, point.longitude, 1.0)
            assert np.allclose(vertex.position, expected)

    def test_constant_normal_and_uv(self, hexagon):
        mesh = build_mesh(hexagon)
        assert all(v.normal == VERTEX_NORMAL for v in mesh.vertices)
        assert all(v.uv == VERTEX_UV for v in mesh.vertices)

    def test_altitude_pushes_vertices_outward(self, hexagon):
        low = build_mesh(hexagon, altitude=0.0).positions()
        high = build_mesh(hexagon, altitude=100_000.0).positions()
        assert np.all(np.linalg.norm(high, axis=1) > np.linalg.norm(low, axis=1))

    def test_pure(self, hexagon):
        assert build_mesh(hexagon, 1.0) == build_mesh(hexagon, 1.0)


class TestMeshBuffer:

    def test_array_views(self, hexagon):
        mesh = build_mesh(hexagon)
        assert mesh.positions().shape == (6, 3)
        assert mesh.normals().shape == (6, 3)
        assert mesh.uvs().shape == (6, 2)
        assert mesh.faces().shape == (4, 3)

    def test_empty_array_views(self):
        mesh = build_mesh(ring(4))
        assert mesh.faces().shape == (0, 3)
        assert mesh.positions().shape == (4, 3)

    def test_to_trimesh_keeps_vertex_order(self, hexagon):
        mesh = build_mesh(hexagon)
        tm = mesh.to_trimesh()
        assert len(tm.vertices) == 6
        assert len(tm.faces) == 4
        assert np.allclose(tm.vertices, mesh.positions())


class TestBuildMeshes:

    def test_order_preserved_with_threads(self):
        boundaries = [ring(6, lat=i, lon=i) for i in range(20)]
        serial = build_meshes(boundaries, altitude=1.0)
        threaded = build_meshes(boundaries, altitude=1.0, workers=4)
        assert serial == threaded

    def test_mixed_arities(self):
        meshes = build_meshes([ring(6), ring(5), ring(4)])
        assert [m.triangle_count for m in meshes] == [4, 3, 0]
        assert [m.vertex_count for m in meshes] == [6, 5, 4]
