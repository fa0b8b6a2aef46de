"""
Similarity utilities — cosine similarity for semantic matching.
"""

from typing import Sequence

import numpy as np


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Returns 0.0 when either vector is empty or has zero magnitude. Vectors of
    different length are a caller bug and raise ValueError.
    """
    if len(v1) == 0 or len(v2) == 0:
        return 0.0
    if len(v1) != len(v2):
        raise ValueError(f"Vector dimensions differ: {len(v1)} != {len(v2)}")
    v1_arr = np.asarray(v1, dtype=float)
    v2_arr = np.asarray(v2, dtype=float)
    dot_product = np.dot(v1_arr, v2_arr)
    norm_product = np.linalg.norm(v1_arr) * np.linalg.norm(v2_arr)
    if norm_product == 0:
        return 0.0
    # Float rounding can push parallel vectors a hair outside [-1, 1]
    return float(np.clip(dot_product / norm_product, -1.0, 1.0))
