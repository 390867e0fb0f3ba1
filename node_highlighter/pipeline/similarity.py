"""Similarity matching of all nodes against a seed node."""

import logging
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


def score_against_seed(features: np.ndarray, seed_index: int) -> np.ndarray:
    """Score every node against the seed.

    The score is the raw dot product of the two feature vectors (not cosine
    similarity), so it is sensitive to the magnitude of every feature.

    Args:
        features: (N, D) feature matrix
        seed_index: Row of the seed node

    Returns:
        (N,) array of scores
    """
    if features.ndim != 2:
        raise ValueError(f"Feature matrix must be 2-dimensional, got shape {features.shape}")
    if not 0 <= seed_index < features.shape[0]:
        raise IndexError(f"Seed index {seed_index} out of range for {features.shape[0]} nodes")
    return features @ features[seed_index]


def find_raw_matches(features: np.ndarray, seed_index: int, threshold: float) -> List[int]:
    """Return indices of nodes whose score strictly exceeds the threshold.

    The seed is scored against itself (its squared norm). Whether it clears
    the threshold depends on the normalization constants; it is not forced in.

    Args:
        features: (N, D) feature matrix
        seed_index: Row of the seed node
        threshold: Similarity threshold

    Returns:
        Matching node indices in document order
    """
    scores = score_against_seed(features, seed_index)
    matches = np.flatnonzero(scores > threshold).tolist()
    if seed_index not in matches:
        logger.debug(
            f"Seed {seed_index} does not match itself "
            f"(squared norm {scores[seed_index]:.4f} <= threshold {threshold})"
        )
    return matches
