"""
Mesh builders - half-edge arena and small test surfaces.

EXPORTS:
- HalfEdgeMesh: reference MeshView implementation (from_face_soup)
- Raw geometry: build_* (return vertices, faces)
- Mesh wrappers: build_*_mesh (return HalfEdgeMesh)

The operators never import this package; they only see MeshView.
"""

from .halfedge import HalfEdgeMesh

# === Raw geometry (return vertices, faces) ===
from .polyhedra import (
    build_tetrahedron,
    build_octahedron,
    build_icosahedron,
    build_triangulated_cube,
    build_quad_pair,
    build_planar_grid,
)

# === Mesh wrappers (return HalfEdgeMesh) ===
from .polyhedra import (
    build_tetrahedron_mesh,
    build_octahedron_mesh,
    build_icosahedron_mesh,
    build_triangulated_cube_mesh,
    build_quad_pair_mesh,
    build_planar_grid_mesh,
)
