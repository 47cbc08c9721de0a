# Corpus models
from .recipe_models import Recipe, RecipeMatch

# Embedding models
from .embedding_models import EmbeddingRecord, RebuildEvent, RebuildStatus

# Pipeline models
from .pipeline_models import SearchState

__all__ = [
    "Recipe",
    "RecipeMatch",
    "EmbeddingRecord",
    "RebuildEvent",
    "RebuildStatus",
    "SearchState",
]
