"""Distances between bag-of-clusters embeddings."""

import numpy as np
from scipy.spatial.distance import pdist, squareform


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity; 0.0 when either vector is all zeros."""
    norm = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b)) / norm


def cosine_distance(a: np.ndarray, b: np.ndarray) -> float:
    """1 - cosine similarity, so empty embeddings are maximally distant."""
    return 1.0 - cosine_similarity(a, b)


class DistanceMatrix:
    """Symmetric Euclidean distance matrix over one language's embeddings.

    Only the upper triangle is computed, on first access. The dense matrix is
    read-only once built.
    """

    def __init__(self, embeddings: list[np.ndarray]):
        self._embeddings = embeddings
        self._matrix: np.ndarray | None = None

    def __len__(self) -> int:
        return len(self._embeddings)

    @property
    def matrix(self) -> np.ndarray:
        """Lazily build the dense matrix."""
        if self._matrix is None:
            n = len(self._embeddings)
            if n < 2:
                matrix = np.zeros((n, n), dtype=np.float64)
            else:
                stacked = np.vstack(self._embeddings).astype(np.float64)
                if stacked.shape[1] == 0:
                    matrix = np.zeros((n, n), dtype=np.float64)
                else:
                    matrix = squareform(pdist(stacked, metric="euclidean"))
            matrix.setflags(write=False)
            self._matrix = matrix
        return self._matrix

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self.matrix[i, j])
