"""
Global constants for surface_dec
================================

All tolerances and numeric policies in ONE place.
"""

# Numerical tolerances
EPS_ZERO = 1e-12       # For "is this zero?"
EPS_CLOSE = 1e-10      # For "are these equal?" (exact combinatorics, integer-derived)

# Geometry tolerances
AREA_TOL = 1e-14       # Faces with area below this are reported as degenerate

# Hodge star on 1-forms: additive regularization.
# Added to EVERY diagonal entry of star1, not only degenerate ones, so that
# (cot α + cot β)/2 = 0 never produces a singular operator. This is a
# numerical policy, not a geometric correction. Absolute, not unit-scaled.
HODGE1_EPS = 1e-8

# Vertex dual-area policies (HalfEdgeMesh.vertex_area)
VERTEX_AREA_BARYCENTRIC = "barycentric"      # 1/3 of incident face areas
VERTEX_AREA_CIRCUMCENTRIC = "circumcentric"  # 1/8 Σ (cot α + cot β) |e|²
VERTEX_AREA_UNIT = "unit"                    # always 1.0

VERTEX_AREA_POLICIES = (
    VERTEX_AREA_BARYCENTRIC,
    VERTEX_AREA_CIRCUMCENTRIC,
    VERTEX_AREA_UNIT,
)

# Fallback dual area for vertices whose area is zero or undefined
DEFAULT_VERTEX_AREA = 1.0

# Boundary sentinel for half-edge face index
NO_FACE = -1

# Faces per edge on a 2-manifold surface
FACES_PER_EDGE_INTERIOR = 2  # interior edge
FACES_PER_EDGE_BOUNDARY = 1  # boundary edge

# =============================================================================
# DEC OPERATOR CONVENTIONS
# =============================================================================
#
# HODGE STARS (diagonal):
#   ★₀: C⁰ → dual C²   shape: (V, V)   ★₀[v, v] = dual area of v
#   ★₁: C¹ → dual C¹   shape: (E, E)   ★₁[e, e] = (cot α + cot β)/2 + HODGE1_EPS
#   ★₂: C² → dual C⁰   shape: (F, F)   ★₂[f, f] = 1 / area(f)
#
# EXTERIOR DERIVATIVE:
#   d₀: C⁰ → C¹  (gradient, V → E)     shape: (E, V)
#   d₁: C¹ → C²  (curl, E → F)         shape: (F, E)
#
# ORIENTATION:
#   Every edge has one canonical half-edge h.
#   d₀[e, origin(h)] = -1,  d₀[e, origin(flip(h))] = +1
#   d₁[f, edge(h')] = +1 if h' is canonical, -1 otherwise,
#   for every half-edge h' on the boundary cycle of f.
#
# EXACTNESS (discrete analog of ∂² = 0):
#   d₁ d₀ = 0   (curl of gradient is zero)
#
# COTAN LAPLACIAN:
#   L = d₀ᵀ ★₁ d₀     shape: (V, V), symmetric positive semi-definite
#
