import logging

from recipe_search.exceptions import EmbeddingDimensionError
from recipe_search.models.pipeline_models import SearchState
from recipe_search.models.recipe_models import RecipeMatch
from recipe_search.services.similarity_service import rank_by_distance

logger = logging.getLogger(__name__)

async def rank_recipes_node(state: SearchState) -> SearchState:
    """
    Score every stored embedding against the query (cosine distance, lower is closer)
    and keep the top_k matches merged with their corpus recipe
    """
    if state.get("error"):
        return state

    try:
        ranked = rank_by_distance(state["query_embedding"], state.get("stored_embeddings") or [])
    except EmbeddingDimensionError as e:
        logger.error(f"Error ranking recipes: {str(e)}")
        state["error"] = str(e)
        state["failure"] = e
        state["pipeline_step"] = "error"
        return state

    recipe_lookup = state.get("recipe_lookup") or {}
    top_k = state.get("top_k", 3)
    results = []

    for record, distance in ranked:
        if len(results) >= top_k:
            break
        recipe = recipe_lookup.get(record.id)
        if recipe is None:
            logger.warning(f"Skipping embedding for unknown recipe id {record.id}")
            continue
        results.append(RecipeMatch.model_validate({**recipe.model_dump(), "distance": distance}))

    state["results"] = results
    state["pipeline_step"] = "ranking_completed"
    logger.info(f"Ranked {len(ranked)} embeddings, returning {len(results)} matches")
    return state
