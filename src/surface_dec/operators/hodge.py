"""
Diagonal Hodge Stars on a Surface
=================================

Standard DEC formula:
    *[σ] = |dual(σ)| / |σ|

On a triangulated surface with circumcentric-style duals:
    ★₀[v] = dual_area(v) / 1                 (area of a vertex is 1 by convention)
    ★₁[e] = (cot α + cot β) / 2              (dual edge length / edge length)
    ★₂[f] = 1 / area(f)                      (area of a dual vertex is 1)

where α, β are the angles opposite e in its two incident triangles.

REGULARIZATION (★₁ only):
    For some geometries cot α + cot β is exactly 0 (e.g. both opposite angles
    are right angles) and ★₁ would be singular when inverted. Every diagonal
    entry gets + eps (default HODGE1_EPS = 1e-8). It is applied to ALL edges,
    not only degenerate ones. This is a numerical policy, not geometry.

PRECONDITIONS (not checked):
    - dual_area(v) is finite (mesh substitutes 1.0 where undefined)
    - area(f) > 0; a zero-area face yields an infinite ★₂ entry

REFERENCE: Crane, "Discrete Differential Geometry: An Applied Introduction", ch. 3
"""

import warnings
import numpy as np
import scipy.sparse as sp

from ..spec.constants import HODGE1_EPS
from ..spec.structures import MeshView
from .assembly import TripletBuilder


def build_star0(mesh: MeshView) -> sp.csr_matrix:
    """
    Build Hodge star on 0-forms ★₀: C⁰ → dual C².

    DEFINITION:
        ★₀[i, i] = dual area of vertex i

    Args:
        mesh: read-only mesh view

    Returns:
        star0: (V, V) diagonal CSR
    """
    n_V = mesh.n_vertices
    star0 = TripletBuilder((n_V, n_V))

    for i in range(n_V):
        star0.set(i, i, mesh.vertex_dual_area(i))

    return star0.tocsr()


def build_star1(mesh: MeshView, eps: float = HODGE1_EPS) -> sp.csr_matrix:
    """
    Build Hodge star on 1-forms ★₁: C¹ → dual C¹.

    DEFINITION:
        ★₁[i, i] = (cot α + cot β) / 2 + eps

    cot α comes from the edge's canonical half-edge, cot β from its flip.
    A boundary half-edge contributes 0.

    Args:
        mesh: read-only mesh view
        eps: additive regularization, applied to every edge

    Returns:
        star1: (E, E) diagonal CSR
    """
    if eps <= 0:
        warnings.warn(
            f"star1 regularization eps={eps} is not positive; "
            f"diagonal entries may be zero and star1 singular.",
            UserWarning,
            stacklevel=2,
        )

    n_E = mesh.n_edges
    star1 = TripletBuilder((n_E, n_E))

    for i in range(n_E):
        # cotangents of the two angles opposite this edge
        h = mesh.edge_half_edge(i)
        cot_alpha = mesh.he_cotan(h)
        cot_beta = mesh.he_cotan(mesh.he_flip(h))

        star1.set(i, i, (cot_alpha + cot_beta) / 2.0 + eps)

    return star1.tocsr()


def build_star2(mesh: MeshView) -> sp.csr_matrix:
    """
    Build Hodge star on 2-forms ★₂: C² → dual C⁰.

    DEFINITION:
        ★₂[i, i] = 1 / area(face i)

    Args:
        mesh: read-only mesh view

    Returns:
        star2: (F, F) diagonal CSR

    NOTE:
        Zero-area faces give inf (float division, no exception).
    """
    n_F = mesh.n_faces
    star2 = TripletBuilder((n_F, n_F))

    with np.errstate(divide='ignore'):
        for i in range(n_F):
            star2.set(i, i, np.float64(1.0) / np.float64(mesh.face_area(i)))

    return star2.tocsr()
