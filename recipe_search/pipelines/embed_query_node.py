import logging
from typing import Awaitable, Callable

from recipe_search.exceptions import QueryEmbeddingError
from recipe_search.models.pipeline_models import SearchState
from recipe_search.services.embedding_service import EmbeddingProvider

logger = logging.getLogger(__name__)

def build_embed_query_node(embedding_service: EmbeddingProvider) -> Callable[[SearchState], Awaitable[SearchState]]:

    async def embed_query_node(state: SearchState) -> SearchState:
        """Embed the query text with the same provider used for the corpus"""
        if state.get("error"):
            return state

        try:
            query_embedding = await embedding_service.embed(state["query"])
            if not query_embedding:
                raise QueryEmbeddingError("Failed to generate embedding for query")
        except Exception as e:
            logger.error(f"Error embedding search query: {str(e)}")
            failure = e if isinstance(e, QueryEmbeddingError) else QueryEmbeddingError(f"Failed to generate embedding for query: {e}")
            state["error"] = str(failure)
            state["failure"] = failure
            state["pipeline_step"] = "error"
            return state

        state["query_embedding"] = query_embedding
        state["pipeline_step"] = "query_embedded"
        logger.info(f"Query embedded: dimension {len(query_embedding)}")
        return state

    return embed_query_node
