"""
Generic Polyhedra Construction
==============================

Small surface meshes for operator tests and self-checks.

POLYHEDRA INCLUDED (closed, χ = 2):
    - Tetrahedron        (V=4,  E=6,  F=4)
    - Octahedron         (V=6,  E=12, F=8)
    - Icosahedron        (V=12, E=30, F=20)
    - Triangulated cube  (V=8,  E=18, F=12)

OPEN SURFACES (χ = 1, one boundary loop):
    - Quad pair          (V=4,  E=5,  F=2)   two triangles, one shared edge
    - Planar grid        (V=(n+1)², F=2n²)

Every builder returns (vertices, faces) with faces ordered CCW when seen
from outside (closed) or from +z (planar). The build_*_mesh wrappers return
a HalfEdgeMesh.
"""

import numpy as np
from typing import List, Tuple

from ..spec.constants import EPS_CLOSE, VERTEX_AREA_BARYCENTRIC
from .halfedge import HalfEdgeMesh


def _order_outward(vertices_arr: np.ndarray, face: List[int]) -> List[int]:
    """Order a convex face CCW around its outward normal (centered solid)."""
    coords = vertices_arr[face]
    centroid = coords.mean(axis=0)
    normal = np.cross(coords[1] - coords[0], coords[2] - coords[0])
    # Ensure outward normal
    if np.dot(normal, centroid) < 0:
        normal = -normal
    normal = normal / np.linalg.norm(normal)

    if abs(normal[0]) < 0.9:
        u = np.cross(normal, [1, 0, 0])
    else:
        u = np.cross(normal, [0, 1, 0])
    u = u / np.linalg.norm(u)
    v = np.cross(normal, u)

    angles = [np.arctan2(np.dot(coords[k] - centroid, v),
                         np.dot(coords[k] - centroid, u))
              for k in range(len(face))]
    order = np.argsort(angles)
    return [face[o] for o in order]


def _triangles_from_edges(n_vertices: int,
                          edges: List[Tuple[int, int]]) -> List[List[int]]:
    """All 3-cliques of the edge graph (faces of a simplicial convex polytope)."""
    adj = [set() for _ in range(n_vertices)]
    for i, j in edges:
        adj[i].add(j)
        adj[j].add(i)

    triangles = []
    for i, j in edges:
        for k in adj[i] & adj[j]:
            if k > j:
                triangles.append([i, j, k])
    return triangles


def build_tetrahedron() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Build a regular tetrahedron centered at origin.

    TOPOLOGY:
        V = 4 vertices
        E = 6 edges
        F = 4 faces (triangles)
        χ = V - E + F = 4 - 6 + 4 = 2

    Returns:
        vertices: (4, 3) array
        faces: list of 4 outward-oriented triangles
    """
    # Regular tetrahedron vertices (at alternating corners of cube)
    vertices = [
        (1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)
    ]
    vertices = sorted(vertices)
    vertices_arr = np.array(vertices, dtype=float)

    faces = [
        [0, 1, 2], [0, 1, 3], [0, 2, 3], [1, 2, 3]
    ]
    faces = [_order_outward(vertices_arr, face) for face in faces]

    return vertices_arr, faces


def build_octahedron() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Build a regular octahedron centered at origin.

    TOPOLOGY:
        V = 6 vertices (on axes at ±1)
        E = 12 edges
        F = 8 faces (triangles, one per octant)
        χ = V - E + F = 6 - 12 + 8 = 2

    Returns:
        vertices: (6, 3) array
        faces: list of 8 outward-oriented triangles
    """
    # 6 vertices on coordinate axes
    vertices = [
        (1, 0, 0), (-1, 0, 0),
        (0, 1, 0), (0, -1, 0),
        (0, 0, 1), (0, 0, -1)
    ]
    vertices = sorted(vertices)
    vertices_arr = np.array(vertices, dtype=float)

    # Edges: distance = √2 (between adjacent vertices)
    edges = []
    for i in range(6):
        for j in range(i+1, 6):
            d2 = np.sum((vertices_arr[i] - vertices_arr[j])**2)
            if abs(d2 - 2.0) < EPS_CLOSE:
                edges.append((i, j))

    faces = [_order_outward(vertices_arr, t)
             for t in _triangles_from_edges(6, edges)]

    if len(edges) != 12:
        raise ValueError(f"Expected 12 edges, got {len(edges)}")
    if len(faces) != 8:
        raise ValueError(f"Expected 8 faces, got {len(faces)}")

    return vertices_arr, faces


def build_icosahedron() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Build a regular icosahedron centered at origin.

    Vertices are the cyclic permutations of (0, ±1, ±φ), φ = golden ratio.
    Edge length is 2.

    TOPOLOGY:
        V = 12, E = 30, F = 20, χ = 2
        Every vertex has valence 5.

    Returns:
        vertices: (12, 3) array
        faces: list of 20 outward-oriented triangles
    """
    phi = (1.0 + np.sqrt(5.0)) / 2.0

    vertices = []
    for s1 in [-1, 1]:
        for s2 in [-1, 1]:
            vertices.append((0.0, s1 * 1.0, s2 * phi))
            vertices.append((s1 * 1.0, s2 * phi, 0.0))
            vertices.append((s2 * phi, 0.0, s1 * 1.0))
    vertices = sorted(vertices)
    vertices_arr = np.array(vertices, dtype=float)

    # Edges: distance = 2
    edges = []
    for i in range(12):
        for j in range(i+1, 12):
            d2 = np.sum((vertices_arr[i] - vertices_arr[j])**2)
            if abs(d2 - 4.0) < 1e-9:
                edges.append((i, j))

    faces = [_order_outward(vertices_arr, t)
             for t in _triangles_from_edges(12, edges)]

    if len(edges) != 30:
        raise ValueError(f"Expected 30 edges, got {len(edges)}")
    if len(faces) != 20:
        raise ValueError(f"Expected 20 faces, got {len(faces)}")

    return vertices_arr, faces


def build_triangulated_cube() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Build a cube at (±1, ±1, ±1) with each square split along a diagonal.

    TOPOLOGY:
        V = 8, E = 12 + 6 diagonals = 18, F = 12, χ = 2

    The angles opposite each diagonal are right angles, so the diagonal
    edges have (cot α + cot β)/2 = 0 exactly: the degenerate case that
    the star1 regularization exists for.

    Returns:
        vertices: (8, 3) array
        faces: list of 12 outward-oriented triangles
    """
    # 8 corners of cube at (±1, ±1, ±1)
    vertices = []
    for x in [-1, 1]:
        for y in [-1, 1]:
            for z in [-1, 1]:
                vertices.append((x, y, z))

    vertices = sorted(vertices)
    vertices_arr = np.array(vertices, dtype=float)

    faces = []
    for axis in range(3):
        for sign in [-1, 1]:
            square = [i for i, v in enumerate(vertices) if v[axis] == sign]
            a, b, c, d = _order_outward(vertices_arr, square)
            faces.append([a, b, c])
            faces.append([a, c, d])

    if len(faces) != 12:
        raise ValueError(f"Expected 12 faces, got {len(faces)}")

    return vertices_arr, faces


def build_quad_pair() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Two triangles sharing edge (0, 1), both CCW from +z.

        2
        | \\
        0---1
         \\ |
            3

    Both angles opposite the shared edge are 45°, so cot α = cot β = 1
    and star1 on the shared edge is (1 + 1)/2 + HODGE1_EPS.

    TOPOLOGY:
        V = 4, E = 5 (1 interior, 4 boundary), F = 2, χ = 1

    Returns:
        vertices: (4, 3) array
        faces: [[0, 1, 2], [0, 3, 1]]
    """
    vertices_arr = np.array([
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [1.0, -1.0, 0.0],
    ])
    faces = [[0, 1, 2], [0, 3, 1]]
    return vertices_arr, faces


def build_planar_grid(n: int) -> Tuple[np.ndarray, List[List[int]]]:
    """
    Build an n × n grid of unit squares in the z = 0 plane, each split
    into two triangles along its (i, j) → (i+1, j+1) diagonal.

    TOPOLOGY:
        V = (n+1)², E = 2n(n+1) + n², F = 2n², χ = 1

    Args:
        n: squares per side (n ≥ 1)

    Returns:
        vertices: ((n+1)², 3) array, vertex (i, j) at index j*(n+1) + i
        faces: list of 2n² CCW triangles
    """
    if n < 1:
        raise ValueError(f"Planar grid needs n >= 1, got n={n}")

    m = n + 1
    vertices_arr = np.array([[i, j, 0.0] for j in range(m) for i in range(m)],
                            dtype=float)

    faces = []
    for j in range(n):
        for i in range(n):
            a = j * m + i
            b = a + 1
            c = a + m + 1
            d = a + m
            faces.append([a, b, c])
            faces.append([a, c, d])

    return vertices_arr, faces


# =============================================================================
# MESH WRAPPERS (return HalfEdgeMesh)
# =============================================================================

def build_tetrahedron_mesh(vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> HalfEdgeMesh:
    V, F = build_tetrahedron()
    return HalfEdgeMesh.from_face_soup(V, F, vertex_area=vertex_area)


def build_octahedron_mesh(vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> HalfEdgeMesh:
    V, F = build_octahedron()
    return HalfEdgeMesh.from_face_soup(V, F, vertex_area=vertex_area)


def build_icosahedron_mesh(vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> HalfEdgeMesh:
    V, F = build_icosahedron()
    return HalfEdgeMesh.from_face_soup(V, F, vertex_area=vertex_area)


def build_triangulated_cube_mesh(vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> HalfEdgeMesh:
    V, F = build_triangulated_cube()
    return HalfEdgeMesh.from_face_soup(V, F, vertex_area=vertex_area)


def build_quad_pair_mesh(vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> HalfEdgeMesh:
    V, F = build_quad_pair()
    return HalfEdgeMesh.from_face_soup(V, F, vertex_area=vertex_area)


def build_planar_grid_mesh(n: int,
                           vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> HalfEdgeMesh:
    V, F = build_planar_grid(n)
    return HalfEdgeMesh.from_face_soup(V, F, vertex_area=vertex_area)


# Self-test
# Run with: python -m surface_dec.builders.polyhedra (from src/)
if __name__ == "__main__":
    print("=" * 60)
    print("POLYHEDRA CONSTRUCTION")
    print("=" * 60)

    for name, builder in [("Tetrahedron", build_tetrahedron_mesh),
                          ("Octahedron", build_octahedron_mesh),
                          ("Icosahedron", build_icosahedron_mesh),
                          ("Triangulated cube", build_triangulated_cube_mesh),
                          ("Quad pair", build_quad_pair_mesh)]:
        mesh = builder()
        print(f"\n{name}:")
        print(f"  V={mesh.n_vertices}, E={mesh.n_edges}, F={mesh.n_faces}, "
              f"χ={mesh.euler_characteristic()}")
        print(f"  boundary loops = {mesh.n_boundary_loops}")
