from typing import List, Sequence, Tuple
import numpy as np

from recipe_search.exceptions import EmbeddingDimensionError
from recipe_search.models.embedding_models import EmbeddingRecord


def cosine_distance(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Cosine distance = 1 - cosine similarity, in [0, 2]
    A zero-magnitude or non-finite vector is maximally distant (1.0) from anything
    """
    a = np.asarray(vec1, dtype=float)
    b = np.asarray(vec2, dtype=float)

    if a.shape != b.shape:
        raise EmbeddingDimensionError(f"Cannot compare vectors of length {a.size} and {b.size}")

    norm1 = np.linalg.norm(a)
    norm2 = np.linalg.norm(b)

    if norm1 == 0 or norm2 == 0:
        return 1.0

    similarity = np.dot(a, b) / (norm1 * norm2)
    if not np.isfinite(similarity):
        return 1.0

    return float(1.0 - similarity)


def rank_by_distance(query_embedding: Sequence[float],
                     records: List[EmbeddingRecord]) -> List[Tuple[EmbeddingRecord, float]]:
    """Score every record against the query, closest first. Ties keep store order."""
    scored = [(record, cosine_distance(query_embedding, record.embedding)) for record in records]
    scored.sort(key=lambda pair: pair[1])
    return scored
