"""Vector similarity scoring."""

from collections.abc import Sequence

import numpy as np

from .exceptions import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity between two equal-length vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        ``dot(a, b) / (|a| * |b|)`` in [-1, 1]; 0.0 when either vector has
        zero norm or both are empty.

    Raises:
        DimensionMismatchError: If the vectors have different lengths.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(
            f"Cannot compare vectors of length {len(a)} and {len(b)}",
            context={"left_dimension": len(a), "right_dimension": len(b)},
        )

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))
