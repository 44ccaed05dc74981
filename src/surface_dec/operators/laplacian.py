"""
Composed Operators and Verification
===================================

Chains the leaf builders (★₀, ★₁, ★₂, d₀, d₁) into the operators a
PDE layer consumes. No linear solves happen here.

DEFINITIONS:
    L = d₀ᵀ ★₁ d₀            cotan Laplacian on 0-forms, (V, V)
    ★ₖ⁻¹                     inverse of a diagonal Hodge star

TRACE IDENTITIES (surface with boundary allowed):
    1. d₁d₀ = 0                    (exactness - ALWAYS)
    2. Tr(d₀ᵀd₀) = 2E              (each edge has 2 endpoints)
    3. Tr(d₁ᵀd₁) = 2E_int + E_bdy  (interior edges bound 2 faces, boundary 1)

LAPLACIAN PROPERTIES:
    - symmetric
    - rows sum to zero (constants are in the kernel)
    - positive semi-definite when all ★₁ entries are positive
"""

import numpy as np
import scipy.sparse as sp
from scipy.sparse.linalg import norm as sparse_norm
from typing import Any, Dict

from ..spec.constants import (
    EPS_CLOSE,
    HODGE1_EPS,
    FACES_PER_EDGE_INTERIOR,
    FACES_PER_EDGE_BOUNDARY,
)
from ..spec.structures import MeshView
from .hodge import build_star0, build_star1, build_star2
from .exterior import build_d0, build_d1


def invert_diagonal(star: sp.spmatrix) -> sp.csr_matrix:
    """
    Invert a diagonal Hodge star.

    Args:
        star: (N, N) diagonal sparse matrix

    Returns:
        (N, N) diagonal CSR with 1 / star[i, i]

    Raises:
        ValueError: if star is not square or has off-diagonal entries
    """
    n_rows, n_cols = star.shape
    if n_rows != n_cols:
        raise ValueError(f"Hodge star must be square, got shape {star.shape}")

    coo = sp.coo_matrix(star)
    off = coo.row != coo.col
    if np.any(coo.data[off] != 0):
        raise ValueError("Hodge star has off-diagonal entries; cannot invert as diagonal")

    diag = star.diagonal()
    with np.errstate(divide='ignore'):
        inv = 1.0 / diag
    return sp.diags(inv, 0, shape=star.shape, format='csr')


def _laplacian(d0: sp.spmatrix, star1: sp.spmatrix) -> sp.csr_matrix:
    return (d0.T @ star1 @ d0).tocsr()


def build_cotan_laplacian(mesh: MeshView, eps: float = HODGE1_EPS) -> sp.csr_matrix:
    """
    Build the cotan Laplacian L = d₀ᵀ ★₁ d₀.

    L[i, i] =  Σ_j w_ij,  L[i, j] = -w_ij,  w_ij = (cot α + cot β)/2 + eps

    Args:
        mesh: read-only mesh view
        eps: ★₁ regularization

    Returns:
        L: (V, V) CSR
    """
    return _laplacian(build_d0(mesh), build_star1(mesh, eps=eps))


def _exactness_norm(d0: sp.spmatrix, d1: sp.spmatrix) -> float:
    d1d0 = d1 @ d0
    return float(sparse_norm(d1d0)) if d1d0.nnz else 0.0


def verify_exactness(d0: sp.spmatrix, d1: sp.spmatrix) -> float:
    """
    Verify d₁d₀ = 0 (discrete curl of gradient vanishes).

    Args:
        d0: (E, V) gradient matrix
        d1: (F, E) curl matrix

    Returns:
        Frobenius norm of d₁d₀

    Raises:
        ValueError: if shapes do not chain or ||d₁d₀|| > EPS_CLOSE
    """
    if d1.shape[1] != d0.shape[0]:
        raise ValueError(
            f"Shapes do not chain: d1 is {d1.shape}, d0 is {d0.shape}"
        )

    norm = _exactness_norm(d0, d1)
    if norm > EPS_CLOSE:
        raise ValueError(f"Exactness failed: ||d₁d₀|| = {norm}")
    return norm


def verify_faces_per_edge(d1: sp.spmatrix) -> Dict[str, Any]:
    """
    Check that every edge bounds 1 (boundary) or 2 (interior) faces.

    Args:
        d1: (F, E) face-edge incidence matrix

    Returns:
        dict with:
            'valid': bool - all edges have 1 or 2 faces
            'n_interior': int - edges with 2 faces
            'n_boundary': int - edges with 1 face
            'histogram': dict - {count: n_edges_with_that_count}
    """
    faces_per_edge = np.asarray(abs(d1).sum(axis=0)).ravel()

    unique, counts = np.unique(faces_per_edge, return_counts=True)
    histogram = {int(u): int(c) for u, c in zip(unique, counts)}

    allowed = {FACES_PER_EDGE_INTERIOR, FACES_PER_EDGE_BOUNDARY}
    return {
        'valid': set(histogram) <= allowed,
        'n_interior': histogram.get(FACES_PER_EDGE_INTERIOR, 0),
        'n_boundary': histogram.get(FACES_PER_EDGE_BOUNDARY, 0),
        'histogram': histogram,
    }


# =============================================================================
# CONTRACT-AWARE WRAPPER
# =============================================================================

def build_operators_from_mesh(mesh: MeshView,
                              eps: float = HODGE1_EPS,
                              verify: bool = True) -> Dict[str, Any]:
    """
    Build all DEC operators for a surface mesh.

    Args:
        mesh: read-only mesh view
        eps: ★₁ regularization
        verify: if True (default), raise on exactness or faces-per-edge failure

    Returns:
        dict with:
            star0, star1, star2: Hodge stars
            d0, d1: exterior derivatives
            L: cotan Laplacian d₀ᵀ ★₁ d₀
            exactness_norm: ||d₁d₀||
            traces: dict of trace values and expectations
            faces_per_edge: verify_faces_per_edge() result
    """
    star0 = build_star0(mesh)
    star1 = build_star1(mesh, eps=eps)
    star2 = build_star2(mesh)
    d0 = build_d0(mesh)
    d1 = build_d1(mesh)
    L = _laplacian(d0, star1)

    fpe = verify_faces_per_edge(d1)
    if verify:
        exactness_norm = verify_exactness(d0, d1)
        if not fpe['valid']:
            raise ValueError(
                f"faces_per_edge invariant violated: expected 1 or 2 faces per edge. "
                f"Histogram: {fpe['histogram']}"
            )
    else:
        exactness_norm = _exactness_norm(d0, d1)

    n_E = d0.shape[0]
    return {
        'star0': star0,
        'star1': star1,
        'star2': star2,
        'd0': d0,
        'd1': d1,
        'L': L,
        'exactness_norm': exactness_norm,
        'traces': {
            'Tr_d0td0': float((d0.T @ d0).diagonal().sum()),
            'Tr_d1td1': float((d1.T @ d1).diagonal().sum()),
            'expected_d0td0': 2 * n_E,
            'expected_d1td1': (FACES_PER_EDGE_INTERIOR * fpe['n_interior']
                               + FACES_PER_EDGE_BOUNDARY * fpe['n_boundary']),
        },
        'faces_per_edge': fpe,
    }


# Self-test when run directly
# Run with: python -m surface_dec.operators.laplacian (from src/)
if __name__ == "__main__":
    from ..builders.polyhedra import build_icosahedron_mesh, build_planar_grid_mesh

    print("=" * 60)
    print("SURFACE DEC OPERATORS - VERIFICATION")
    print("=" * 60)

    for name, mesh in [("Icosahedron (closed)", build_icosahedron_mesh()),
                       ("Planar grid 4x4 (open)", build_planar_grid_mesh(4))]:
        ops = build_operators_from_mesh(mesh)
        traces = ops['traces']
        print(f"\n=== {name} ===")
        print(f"V={mesh.n_vertices}, E={mesh.n_edges}, F={mesh.n_faces}")
        print(f"  ||d₁d₀||  = {ops['exactness_norm']:.2e}")
        print(f"  Tr(d₀ᵀd₀) = {traces['Tr_d0td0']:.0f} (expected {traces['expected_d0td0']})")
        print(f"  Tr(d₁ᵀd₁) = {traces['Tr_d1td1']:.0f} (expected {traces['expected_d1td1']})")
        print(f"  faces/edge histogram: {ops['faces_per_edge']['histogram']}")

    print("\n" + "=" * 60)
    print("Verification complete.")
    print("=" * 60)
