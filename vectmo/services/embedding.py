"""
Character-histogram embeddings and cosine similarity (CPU-only).

Every string maps to the same 96-dimensional space: slot i counts how often
the i-th alphabet character occurs. Two strings with no characters in common
are orthogonal, so cosine similarity is meaningful regardless of length.

    "cat"  -> [... 1 (a) ... 1 (c) ... 1 (t) ...]
"""
from __future__ import annotations

from typing import Iterable

import numpy as np
from sklearn.utils.extmath import row_norms

from .alphabet import ALPHABET, ALPHABET_SIZE


def embed(text: str) -> np.ndarray:
    """
    Embed text as a character histogram.

    Args:
        text: Any string; unsupported characters contribute nothing

    Returns:
        float64 vector of shape (96,)
    """
    histogram = np.zeros(ALPHABET_SIZE, dtype=np.float64)
    for char in text:
        idx = ALPHABET.index_of(char)
        if idx is not None:
            histogram[idx] += 1.0
    return histogram


def embed_many(words: Iterable[str]) -> np.ndarray:
    """Stack histogram embeddings into an (n, 96) matrix."""
    rows = [embed(w) for w in words]
    if not rows:
        return np.zeros((0, ALPHABET_SIZE), dtype=np.float64)
    return np.vstack(rows)


def cosine_similarity(v1: np.ndarray, v2: np.ndarray) -> float:
    """
    Cosine similarity between two vectors.

    Returns exactly 0.0 when either vector has zero magnitude (the string had
    no supported characters), never NaN.
    """
    a = np.asarray(v1, dtype=np.float64)
    b = np.asarray(v2, dtype=np.float64)
    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    score = float(np.dot(a, b)) / (norm_a * norm_b)
    return float(np.clip(score, -1.0, 1.0))


def cosine_scores(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """
    Score one query vector against every row of `matrix`.

    Each score is dot / (|query| * |row|), computed in the same order as
    `cosine_similarity`, so batch and pairwise scores are bit-identical and
    equal scores compare equal. Zero rows (and a zero query) score 0.0.
    """
    if matrix.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    query = np.asarray(query, dtype=np.float64)
    matrix = np.asarray(matrix, dtype=np.float64)

    dots = matrix @ query
    query_norm = float(np.sqrt(query @ query))
    denominators = query_norm * row_norms(matrix)

    scores = np.zeros(matrix.shape[0], dtype=np.float64)
    nonzero = denominators != 0.0
    scores[nonzero] = dots[nonzero] / denominators[nonzero]
    return np.clip(scores, -1.0, 1.0)
