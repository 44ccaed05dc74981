"""
Half-Edge Mesh (arena)
======================

Reference implementation of the read-only MeshView contract.

STORAGE:
    All connectivity lives in flat integer arrays indexed by handle.
    No element owns another; adjacency is a handle into the same arena.

        he_next[h]    next half-edge around the face (or boundary loop)
        he_flip[h]    oppositely oriented half-edge of the same edge
        he_vertex[h]  origin vertex
        he_edge[h]    undirected edge
        he_face[h]    incident face, NO_FACE (-1) on the boundary
        edge_he[e]    canonical half-edge of edge e
        face_he[f]    first half-edge of face f

CANONICAL HALF-EDGE:
    Edges are numbered in order of first appearance while scanning faces.
    The canonical half-edge of an edge is the first INTERIOR half-edge
    created for it. Boundary half-edges are never canonical.

BOUNDARY:
    A directed edge (i, j) with no partner (j, i) gets a boundary twin
    (origin j, face -1). Boundary twins are linked by he_next into
    boundary loops. Their cotangent is 0.

GEOMETRY (precomputed, read-only):
    face_area(f)        |vector area| of the face polygon
    he_cotan(h)         cot of the angle opposite h in its triangle
    vertex_dual_area(v) per the vertex_area policy

FAIL-FAST:
    Construction raises ValueError on out-of-range indices, short faces,
    repeated directed edges (inconsistent orientation / non-manifold edge),
    and pinched boundary vertices.
"""

import warnings
import numpy as np
from typing import Dict, List, Sequence, Tuple

from ..spec.constants import (
    AREA_TOL,
    EPS_ZERO,
    DEFAULT_VERTEX_AREA,
    NO_FACE,
    VERTEX_AREA_BARYCENTRIC,
    VERTEX_AREA_CIRCUMCENTRIC,
    VERTEX_AREA_UNIT,
    VERTEX_AREA_POLICIES,
)
from ..spec.structures import validate_face_soup


def _frozen(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


class HalfEdgeMesh:
    """
    Half-edge surface mesh built from a face soup.

    Use HalfEdgeMesh.from_face_soup(V, F); the constructor takes the
    already-assembled arena and is not meant to be called directly.
    """

    def __init__(self,
                 positions: np.ndarray,
                 he_next: List[int],
                 he_flip: List[int],
                 he_vertex: List[int],
                 he_edge: List[int],
                 he_face: List[int],
                 edge_he: List[int],
                 face_he: List[int],
                 vertex_area: str = VERTEX_AREA_BARYCENTRIC):
        if vertex_area not in VERTEX_AREA_POLICIES:
            raise ValueError(
                f"Unknown vertex_area policy '{vertex_area}'. "
                f"Expected one of {VERTEX_AREA_POLICIES}"
            )

        self._positions = _frozen(positions, float)
        self._he_next = _frozen(he_next, np.int64)
        self._he_flip = _frozen(he_flip, np.int64)
        self._he_vertex = _frozen(he_vertex, np.int64)
        self._he_edge = _frozen(he_edge, np.int64)
        self._he_face = _frozen(he_face, np.int64)
        self._edge_he = _frozen(edge_he, np.int64)
        self._face_he = _frozen(face_he, np.int64)
        self.vertex_area = vertex_area

        self._face_area = self._compute_face_areas()
        self._he_cotan = self._compute_cotans()
        self._vertex_dual_area = self._compute_dual_areas()

        n_degenerate = int(np.sum(self._face_area < AREA_TOL))
        if n_degenerate > 0:
            warnings.warn(
                f"{n_degenerate} face(s) with area < {AREA_TOL}. "
                f"Hodge star on 2-forms will contain non-finite entries.",
                UserWarning,
                stacklevel=3,
            )

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_face_soup(cls,
                       vertices: np.ndarray,
                       faces: Sequence[Sequence[int]],
                       vertex_area: str = VERTEX_AREA_BARYCENTRIC) -> "HalfEdgeMesh":
        """
        Build the half-edge arena from vertex positions and face cycles.

        Args:
            vertices: (N, 3) coordinates
            faces: list of vertex cycles, consistently oriented
            vertex_area: dual-area policy ("barycentric", "circumcentric", "unit")

        Returns:
            HalfEdgeMesh

        Raises:
            ValueError: on any face-soup or manifold contract violation
        """
        validate_face_soup(vertices, faces, strict=True)

        he_vertex: List[int] = []
        he_next: List[int] = []
        he_face: List[int] = []
        face_he: List[int] = []
        directed: Dict[Tuple[int, int], int] = {}

        for f_idx, face in enumerate(faces):
            n = len(face)
            start = len(he_vertex)
            for k in range(n):
                i, j = int(face[k]), int(face[(k + 1) % n])
                if (i, j) in directed:
                    raise ValueError(
                        f"Directed edge ({i},{j}) used twice (faces "
                        f"{he_face[directed[(i, j)]]} and {f_idx}). "
                        f"Faces are inconsistently oriented or the edge is non-manifold."
                    )
                directed[(i, j)] = start + k
                he_vertex.append(i)
                he_face.append(f_idx)
                he_next.append(start + (k + 1) % n)
            face_he.append(start)

        n_interior = len(he_vertex)
        he_flip = [-1] * n_interior
        he_edge = [-1] * n_interior
        edge_he: List[int] = []

        # Pair half-edges into edges; unpaired ones get boundary twins
        for h in range(n_interior):
            if he_edge[h] != -1:
                continue
            i = he_vertex[h]
            j = he_vertex[he_next[h]]
            e = len(edge_he)
            edge_he.append(h)
            he_edge[h] = e

            twin = directed.get((j, i))
            if twin is None:
                twin = len(he_vertex)
                he_vertex.append(j)
                he_face.append(NO_FACE)
                he_next.append(-1)
                he_flip.append(-1)
                he_edge.append(-1)
            he_flip[h] = twin
            he_flip[twin] = h
            he_edge[twin] = e

        # Link boundary loops: boundary half-edge j->i continues from i
        boundary_out: Dict[int, int] = {}
        for b in range(n_interior, len(he_vertex)):
            v = he_vertex[b]
            if v in boundary_out:
                raise ValueError(
                    f"Vertex {v} has more than one outgoing boundary half-edge "
                    f"(pinched, non-manifold vertex)."
                )
            boundary_out[v] = b
        for b in range(n_interior, len(he_vertex)):
            he_next[b] = boundary_out[he_vertex[he_flip[b]]]

        return cls(vertices, he_next, he_flip, he_vertex, he_edge, he_face,
                   edge_he, face_he, vertex_area=vertex_area)

    # =========================================================================
    # COUNTS
    # =========================================================================

    @property
    def n_vertices(self) -> int:
        return len(self._positions)

    @property
    def n_edges(self) -> int:
        return len(self._edge_he)

    @property
    def n_faces(self) -> int:
        return len(self._face_he)

    @property
    def n_half_edges(self) -> int:
        return len(self._he_next)

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    # =========================================================================
    # TRAVERSAL
    # =========================================================================

    def he_next(self, h: int) -> int:
        return int(self._he_next[h])

    def he_flip(self, h: int) -> int:
        return int(self._he_flip[h])

    def he_vertex(self, h: int) -> int:
        return int(self._he_vertex[h])

    def he_edge(self, h: int) -> int:
        return int(self._he_edge[h])

    def he_face(self, h: int) -> int:
        return int(self._he_face[h])

    def he_on_boundary(self, h: int) -> bool:
        return bool(self._he_face[h] == NO_FACE)

    def edge_half_edge(self, e: int) -> int:
        return int(self._edge_he[e])

    def face_half_edge(self, f: int) -> int:
        return int(self._face_he[f])

    def is_canonical(self, h: int) -> bool:
        """True if h is the canonical half-edge of its edge."""
        return bool(self._edge_he[self._he_edge[h]] == h)

    def face_half_edges(self, f: int) -> List[int]:
        """Half-edges of face f in cyclic order, starting at face_half_edge(f)."""
        start = self.face_half_edge(f)
        result = []
        h = start
        while True:
            result.append(h)
            h = self.he_next(h)
            if h == start:
                break
        return result

    def face_vertices(self, f: int) -> List[int]:
        return [self.he_vertex(h) for h in self.face_half_edges(f)]

    def edge_vertices(self, e: int) -> Tuple[int, int]:
        """(origin, target) of the canonical half-edge of e."""
        h = self.edge_half_edge(e)
        return self.he_vertex(h), self.he_vertex(self.he_flip(h))

    def edge_on_boundary(self, e: int) -> bool:
        h = self.edge_half_edge(e)
        return self.he_on_boundary(self.he_flip(h))

    # =========================================================================
    # GEOMETRY
    # =========================================================================

    def face_area(self, f: int) -> float:
        return float(self._face_area[f])

    def he_cotan(self, h: int) -> float:
        """Cotangent of the angle opposite h in its face (0 on boundary)."""
        return float(self._he_cotan[h])

    def vertex_dual_area(self, v: int) -> float:
        return float(self._vertex_dual_area[v])

    def edge_length(self, e: int) -> float:
        i, j = self.edge_vertices(e)
        return float(np.linalg.norm(self._positions[j] - self._positions[i]))

    def _compute_face_areas(self) -> np.ndarray:
        areas = np.zeros(self.n_faces)
        for f in range(self.n_faces):
            pos = self._positions[self.face_vertices(f)]
            total_cross = np.zeros(3)
            n = len(pos)
            for k in range(n):
                total_cross += np.cross(pos[k], pos[(k + 1) % n])
            areas[f] = 0.5 * np.linalg.norm(total_cross)
        return areas

    def _compute_cotans(self) -> np.ndarray:
        """
        cot θ = (u · v) / |u × v|, with u, v the edge vectors from the
        vertex opposite h. Only defined on triangles; other faces get NaN.
        """
        cotans = np.zeros(self.n_half_edges)
        for h in range(self.n_half_edges):
            if self._he_face[h] == NO_FACE:
                continue
            h_next = self._he_next[h]
            h_opp = self._he_next[h_next]
            if self._he_next[h_opp] != h:
                cotans[h] = np.nan
                continue
            p_i = self._positions[self._he_vertex[h]]
            p_j = self._positions[self._he_vertex[h_next]]
            p_k = self._positions[self._he_vertex[h_opp]]
            u = p_i - p_k
            v = p_j - p_k
            with np.errstate(divide='ignore', invalid='ignore'):
                cotans[h] = np.dot(u, v) / np.linalg.norm(np.cross(u, v))
        return cotans

    def _compute_dual_areas(self) -> np.ndarray:
        n_V = self.n_vertices

        if self.vertex_area == VERTEX_AREA_UNIT:
            return np.full(n_V, DEFAULT_VERTEX_AREA)

        areas = np.zeros(n_V)
        if self.vertex_area == VERTEX_AREA_BARYCENTRIC:
            for f in range(self.n_faces):
                verts = self.face_vertices(f)
                share = self._face_area[f] / len(verts)
                for v in verts:
                    areas[v] += share
        elif self.vertex_area == VERTEX_AREA_CIRCUMCENTRIC:
            for h in range(self.n_half_edges):
                if self._he_face[h] == NO_FACE:
                    continue
                i = self._he_vertex[h]
                j = self._he_vertex[self._he_flip[h]]
                length2 = np.sum((self._positions[j] - self._positions[i]) ** 2)
                contribution = self._he_cotan[h] * length2 / 8.0
                areas[i] += contribution
                areas[j] += contribution

        undefined = ~np.isfinite(areas) | (np.abs(areas) < EPS_ZERO)
        areas[undefined] = DEFAULT_VERTEX_AREA
        return areas

    # =========================================================================
    # TOPOLOGY
    # =========================================================================

    @property
    def n_boundary_loops(self) -> int:
        seen = set()
        loops = 0
        for h in range(self.n_half_edges):
            if self._he_face[h] != NO_FACE or h in seen:
                continue
            loops += 1
            b = h
            while b not in seen:
                seen.add(b)
                b = int(self._he_next[b])
        return loops

    def euler_characteristic(self) -> int:
        """χ = V - E + F"""
        return self.n_vertices - self.n_edges + self.n_faces

    def __repr__(self) -> str:
        return (f"HalfEdgeMesh(V={self.n_vertices}, E={self.n_edges}, "
                f"F={self.n_faces}, boundary_loops={self.n_boundary_loops}, "
                f"vertex_area='{self.vertex_area}')")
