"""
Exterior Derivative on a Half-Edge Surface
==========================================

Pure combinatorics - NO geometry.

DEFINITIONS:
    d₀: E × V  "gradient" - oriented edge-vertex incidence
    d₁: F × E  "curl"     - oriented face-edge incidence

ORIENTATION:
    Edge e is oriented by its canonical half-edge h:
        e runs from origin(h) to origin(flip(h)).
    Face f is oriented by its half-edge cycle.
    A half-edge on the boundary of f agrees with its edge iff it is
    the canonical half-edge.

EXACTNESS:
    d₁ d₀ = 0
    Around any face, each vertex is the head of one boundary half-edge
    and the tail of the next, with opposite signs.
"""

import scipy.sparse as sp

from ..spec.structures import MeshView
from .assembly import TripletBuilder


def build_d0(mesh: MeshView) -> sp.csr_matrix:
    """
    Build gradient operator d₀: C⁰ → C¹.

    DEFINITION:
        d₀[e, v] = -1 if v is the origin of e's canonical half-edge
        d₀[e, v] = +1 if v is the origin of its flip
        d₀[e, v] = 0 otherwise

    Args:
        mesh: read-only mesh view

    Returns:
        d0: (E, V) sparse incidence matrix

    PROPERTY:
        Each row has exactly one -1 and one +1 and sums to zero.
    """
    n_V = mesh.n_vertices
    n_E = mesh.n_edges
    d0 = TripletBuilder((n_E, n_V))

    for r in range(n_E):
        h = mesh.edge_half_edge(r)
        ci = mesh.he_vertex(h)
        cj = mesh.he_vertex(mesh.he_flip(h))

        d0.set(r, ci, -1.0)
        d0.set(r, cj, +1.0)

    return d0.tocsr()


def build_d1(mesh: MeshView) -> sp.csr_matrix:
    """
    Build curl operator d₁: C¹ → C².

    DEFINITION:
        d₁[f, e] = +1 if e is on the boundary of f via its canonical half-edge
        d₁[f, e] = -1 if e is on the boundary of f via the flip
        d₁[f, e] = 0 if e is not on the boundary of f

    The boundary of f is walked from face_half_edge(f) along he_next until
    the walk returns to the start, so faces of any degree are handled.

    Args:
        mesh: read-only mesh view

    Returns:
        d1: (F, E) sparse incidence matrix

    PROPERTY:
        Row f has one ±1 per boundary edge of f.
        Column e has 2 non-zeros (interior) or 1 (boundary edge).
    """
    n_E = mesh.n_edges
    n_F = mesh.n_faces
    d1 = TripletBuilder((n_F, n_E))

    for r in range(n_F):
        start = mesh.face_half_edge(r)
        h = start
        while True:
            s = 1.0 if mesh.is_canonical(h) else -1.0
            d1.set(r, mesh.he_edge(h), s)

            h = mesh.he_next(h)
            if h == start:
                break

    return d1.tocsr()
