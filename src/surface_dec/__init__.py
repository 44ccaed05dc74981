"""
SURFACE_DEC - Discrete Exterior Calculus on triangulated surfaces
=================================================================

Structure:
    spec/       - Constants and the read-only mesh contract (MeshView)
    operators/  - DEC operators (★₀, ★₁, ★₂, d₀, d₁, cotan Laplacian)
    builders/   - Reference half-edge mesh and test polyhedra

Every operator is a pure function of a MeshView and returns a freshly
allocated scipy.sparse CSR matrix.

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.8
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"surface_dec requires Python >= 3.9, got {sys.version}")

import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 8):
    raise ImportError(f"surface_dec requires scipy >= 1.8, got {scipy.__version__}")

import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"surface_dec requires numpy >= 1.20, got {np.__version__}")

__version__ = "0.1.0"

from . import spec
from . import operators
from . import builders

from .spec import MeshView, HODGE1_EPS
from .operators import (
    build_star0,
    build_star1,
    build_star2,
    build_d0,
    build_d1,
    build_cotan_laplacian,
    build_operators_from_mesh,
)
from .builders import HalfEdgeMesh
