"""
Sparse Operator Assembly
========================

Operators are accumulated as (row, col, value) triplets and finalized
into scipy.sparse CSR. Builders never write into a matrix type directly.

SEMANTICS:
    set(r, c, v) assigns: writing the same (r, c) twice keeps the LAST
    value, matching indexed writes A[r, c] = v.

    Entries are emitted in insertion order, so the same sequence of
    writes always produces a bit-identical matrix.
"""

import numpy as np
import scipy.sparse as sp
from typing import Dict, Tuple


class TripletBuilder:
    """
    Accumulate entries of an (n_rows, n_cols) operator.

    Usage:
        T = TripletBuilder((n_E, n_V))
        T.set(e, i, -1.0)
        T.set(e, j, +1.0)
        d0 = T.tocsr()
    """

    def __init__(self, shape: Tuple[int, int]):
        n_rows, n_cols = shape
        if n_rows < 0 or n_cols < 0:
            raise ValueError(f"Operator shape must be non-negative, got {shape}")
        self.shape = (int(n_rows), int(n_cols))
        self._entries: Dict[Tuple[int, int], float] = {}

    def set(self, row: int, col: int, value: float) -> None:
        n_rows, n_cols = self.shape
        if not (0 <= row < n_rows and 0 <= col < n_cols):
            raise ValueError(
                f"Entry ({row}, {col}) out of bounds for operator of shape {self.shape}"
            )
        self._entries[(row, col)] = float(value)

    def __len__(self) -> int:
        return len(self._entries)

    def tocsr(self) -> sp.csr_matrix:
        """Finalize into a freshly allocated float64 CSR matrix."""
        n = len(self._entries)
        rows, cols = np.array(list(self._entries), dtype=np.int64).reshape(-1, 2).T
        vals = np.fromiter(self._entries.values(), dtype=np.float64, count=n)

        return sp.coo_matrix((vals, (rows, cols)), shape=self.shape,
                             dtype=np.float64).tocsr()
