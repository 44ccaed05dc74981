"""Constants and mesh contract."""

from .constants import (
    EPS_ZERO,
    EPS_CLOSE,
    AREA_TOL,
    HODGE1_EPS,
    VERTEX_AREA_BARYCENTRIC,
    VERTEX_AREA_CIRCUMCENTRIC,
    VERTEX_AREA_UNIT,
    VERTEX_AREA_POLICIES,
    DEFAULT_VERTEX_AREA,
    NO_FACE,
    FACES_PER_EDGE_INTERIOR,
    FACES_PER_EDGE_BOUNDARY,
)

from .structures import MeshView, validate_face_soup
