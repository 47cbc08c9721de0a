from typing import Dict, List, Optional
from typing_extensions import TypedDict

from recipe_search.models.recipe_models import Recipe, RecipeMatch
from recipe_search.models.embedding_models import EmbeddingRecord


class SearchState(TypedDict, total=False):
    """
    State object for the similarity search pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    query: str
    top_k: int

    # Pipeline data
    recipe_lookup: Optional[Dict[str, Recipe]]
    stored_embeddings: Optional[List[EmbeddingRecord]]
    query_embedding: Optional[List[float]]
    results: Optional[List[RecipeMatch]]

    # Pipeline metadata
    pipeline_step: str
    error: Optional[str]
    failure: Optional[Exception]
    execution_time: Optional[float]
