"""DEC operators - Hodge stars, exterior derivatives, cotan Laplacian."""

from .assembly import TripletBuilder

from .hodge import (
    build_star0,
    build_star1,
    build_star2,
)

from .exterior import (
    build_d0,
    build_d1,
)

from .laplacian import (
    invert_diagonal,
    build_cotan_laplacian,
    verify_exactness,
    verify_faces_per_edge,
    build_operators_from_mesh,
)
