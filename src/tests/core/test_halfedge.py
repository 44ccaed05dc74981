"""
Half-Edge Mesh Tests
====================

Connectivity and geometry of the reference MeshView implementation:
- Counts and Euler characteristic
- flip / next / edge invariants
- Canonical half-edge bookkeeping
- Boundary loops
- Cotangents, face areas, dual-area policies

Run: python -m pytest src/tests/core/test_halfedge.py -v
"""

import numpy as np
import pytest

from surface_dec.builders import (
    HalfEdgeMesh,
    build_tetrahedron_mesh,
    build_octahedron_mesh,
    build_icosahedron_mesh,
    build_triangulated_cube_mesh,
    build_quad_pair_mesh,
    build_planar_grid_mesh,
)
from surface_dec.operators import build_d0, build_d1, verify_exactness
from surface_dec.spec import MeshView, NO_FACE


# name -> (builder, V, E, F, χ, boundary loops)
TOPOLOGY = {
    'tetrahedron': (build_tetrahedron_mesh, 4, 6, 4, 2, 0),
    'octahedron': (build_octahedron_mesh, 6, 12, 8, 2, 0),
    'icosahedron': (build_icosahedron_mesh, 12, 30, 20, 2, 0),
    'triangulated_cube': (build_triangulated_cube_mesh, 8, 18, 12, 2, 0),
    'quad_pair': (build_quad_pair_mesh, 4, 5, 2, 1, 1),
    'planar_grid': (lambda: build_planar_grid_mesh(3), 16, 33, 18, 1, 1),
}


# =============================================================================
# TEST A: Topology
# =============================================================================

@pytest.mark.parametrize("name", sorted(TOPOLOGY))
def test_counts_and_euler(name):
    builder, V, E, F, chi, loops = TOPOLOGY[name]
    mesh = builder()

    assert (mesh.n_vertices, mesh.n_edges, mesh.n_faces) == (V, E, F)
    assert mesh.euler_characteristic() == chi
    assert mesh.n_boundary_loops == loops
    assert mesh.n_half_edges == 2 * E
    print(f"✓ {name}: V={V}, E={E}, F={F}, χ={chi}")


@pytest.mark.parametrize("name", sorted(TOPOLOGY))
def test_satisfies_mesh_view(name):
    mesh = TOPOLOGY[name][0]()
    assert isinstance(mesh, MeshView)


# =============================================================================
# TEST B: Half-edge invariants
# =============================================================================

@pytest.mark.parametrize("name", sorted(TOPOLOGY))
def test_flip_involution(name):
    """flip(flip(h)) = h, flip(h) ≠ h, same edge, reversed endpoints"""
    mesh = TOPOLOGY[name][0]()

    for h in range(mesh.n_half_edges):
        t = mesh.he_flip(h)
        assert t != h
        assert mesh.he_flip(t) == h
        assert mesh.he_edge(t) == mesh.he_edge(h)
        # origin of the flip is the target of h
        assert mesh.he_vertex(t) == mesh.he_vertex(mesh.he_next(h))


@pytest.mark.parametrize("name", sorted(TOPOLOGY))
def test_one_canonical_per_edge(name):
    """Exactly one of the two half-edges of each edge is canonical"""
    mesh = TOPOLOGY[name][0]()

    for e in range(mesh.n_edges):
        h = mesh.edge_half_edge(e)
        assert mesh.he_edge(h) == e
        assert mesh.is_canonical(h)
        assert not mesh.is_canonical(mesh.he_flip(h))
        assert not mesh.he_on_boundary(h), "canonical half-edge must be interior"


@pytest.mark.parametrize("name", sorted(TOPOLOGY))
def test_face_walk_closes(name):
    """Walking next from face_half_edge returns to start after 3 steps"""
    mesh = TOPOLOGY[name][0]()

    for f in range(mesh.n_faces):
        hs = mesh.face_half_edges(f)
        assert len(hs) == 3
        assert len(set(hs)) == 3
        assert hs[0] == mesh.face_half_edge(f)
        assert all(mesh.he_face(h) == f for h in hs)


def test_boundary_loop_quad_pair():
    """Boundary half-edges form one 4-cycle 0→2→1→3→0 (clockwise)"""
    mesh = build_quad_pair_mesh()

    boundary = [h for h in range(mesh.n_half_edges) if mesh.he_on_boundary(h)]
    assert len(boundary) == 4
    assert all(mesh.he_face(h) == NO_FACE for h in boundary)

    loop = []
    h = boundary[0]
    while True:
        loop.append(mesh.he_vertex(h))
        h = mesh.he_next(h)
        if h == boundary[0]:
            break
    assert sorted(loop) == [0, 1, 2, 3]
    assert mesh.edge_on_boundary(0) is False
    assert mesh.edge_on_boundary(1) is True


def test_face_vertices_preserve_input_order():
    V, F = [[0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 0]], [[0, 1, 3], [0, 3, 2]]
    mesh = HalfEdgeMesh.from_face_soup(np.array(V, dtype=float), F)

    assert mesh.face_vertices(0) == [0, 1, 3]
    assert mesh.face_vertices(1) == [0, 3, 2]


def test_polygon_faces():
    """Square pyramid: quad base walks 4 half-edges, d₁ row has 4 entries"""
    V = np.array([
        [-1, -1, 0], [1, -1, 0], [1, 1, 0], [-1, 1, 0], [0, 0, 1]
    ], dtype=float)
    F = [[0, 3, 2, 1], [0, 1, 4], [1, 2, 4], [2, 3, 4], [3, 0, 4]]
    mesh = HalfEdgeMesh.from_face_soup(V, F)

    assert (mesh.n_vertices, mesh.n_edges, mesh.n_faces) == (5, 8, 5)
    assert len(mesh.face_half_edges(0)) == 4
    assert mesh.face_area(0) == pytest.approx(4.0)
    assert mesh.n_boundary_loops == 0

    d0 = build_d0(mesh)
    d1 = build_d1(mesh)
    dense = d1.toarray()
    assert np.count_nonzero(dense[0]) == 4
    for f in range(mesh.n_faces):
        k = len(mesh.face_half_edges(f))
        assert np.count_nonzero(dense[f]) == k
        for h in mesh.face_half_edges(f):
            expected = 1.0 if mesh.is_canonical(h) else -1.0
            assert dense[f, mesh.he_edge(h)] == expected
    assert verify_exactness(d0, d1) == 0.0


# =============================================================================
# TEST C: Geometry
# =============================================================================

def test_cotan_regular_tetrahedron():
    mesh = build_tetrahedron_mesh()
    cot60 = 1.0 / np.sqrt(3.0)
    for h in range(mesh.n_half_edges):
        assert mesh.he_cotan(h) == pytest.approx(cot60, abs=1e-12)


def test_cotan_boundary_is_zero():
    mesh = build_planar_grid_mesh(2)
    for h in range(mesh.n_half_edges):
        if mesh.he_on_boundary(h):
            assert mesh.he_cotan(h) == 0.0


def test_face_areas():
    mesh = build_icosahedron_mesh()
    # equilateral, side 2
    for f in range(mesh.n_faces):
        assert mesh.face_area(f) == pytest.approx(np.sqrt(3.0), abs=1e-12)

    mesh = build_planar_grid_mesh(2)
    for f in range(mesh.n_faces):
        assert mesh.face_area(f) == pytest.approx(0.5)


def test_edge_lengths_icosahedron():
    mesh = build_icosahedron_mesh()
    lengths = [mesh.edge_length(e) for e in range(mesh.n_edges)]
    assert np.allclose(lengths, 2.0)


def test_dual_area_barycentric_quad_pair():
    mesh = build_quad_pair_mesh()
    areas = [mesh.vertex_dual_area(v) for v in range(4)]
    assert np.allclose(areas, [1/3, 1/3, 1/6, 1/6])


def test_dual_area_circumcentric_sums_to_area():
    """Σ cot θ |e|² = 4A per triangle, so circumcentric areas sum to total area"""
    mesh = build_icosahedron_mesh(vertex_area="circumcentric")
    areas = np.array([mesh.vertex_dual_area(v) for v in range(mesh.n_vertices)])

    total = 20 * np.sqrt(3.0)
    assert areas.sum() == pytest.approx(total, rel=1e-12)
    assert np.allclose(areas, total / 12)


def test_dual_area_unit():
    mesh = build_octahedron_mesh(vertex_area="unit")
    assert all(mesh.vertex_dual_area(v) == 1.0 for v in range(mesh.n_vertices))


def test_isolated_vertex_gets_default_area():
    """A vertex in no face has undefined dual area → 1.0"""
    V = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0], [5, 5, 5]], dtype=float)
    mesh = HalfEdgeMesh.from_face_soup(V, [[0, 1, 2]])
    assert mesh.vertex_dual_area(3) == 1.0
    assert mesh.vertex_dual_area(0) == pytest.approx(0.5 / 3)


def test_arrays_read_only():
    mesh = build_tetrahedron_mesh()
    with pytest.raises(ValueError):
        mesh.positions[0, 0] = 10.0


def test_input_not_frozen():
    """The caller's vertex array stays writable"""
    V = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=float)
    HalfEdgeMesh.from_face_soup(V, [[0, 1, 2]])
    V[0, 0] = 2.0
    assert V[0, 0] == 2.0
