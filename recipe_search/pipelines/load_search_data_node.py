import asyncio
import logging
from typing import Awaitable, Callable

from recipe_search.database.recipe_corpus_client import RecipeCorpusClient
from recipe_search.database.vector_store_client import VectorStoreClient
from recipe_search.exceptions import RecipeSearchError
from recipe_search.models.pipeline_models import SearchState

logger = logging.getLogger(__name__)

def build_load_search_data_node(corpus_client: RecipeCorpusClient,
                                vector_store_client: VectorStoreClient) -> Callable[[SearchState], Awaitable[SearchState]]:

    async def load_search_data_node(state: SearchState) -> SearchState:
        """
        Load the vector store and index the corpus by recipe id
        Both files must exist before anything is sent to the provider
        """
        try:
            stored_embeddings = await asyncio.to_thread(vector_store_client.load_records)
            recipe_lookup = await asyncio.to_thread(corpus_client.recipe_lookup)

            state["stored_embeddings"] = stored_embeddings
            state["recipe_lookup"] = recipe_lookup
            state["pipeline_step"] = "search_data_loaded"

            logger.info(f"Loaded {len(stored_embeddings)} embeddings and {len(recipe_lookup)} recipes")
            return state

        except RecipeSearchError as e:
            logger.error(f"Error in load_search_data_node: {str(e)}")
            state["error"] = str(e)
            state["failure"] = e
            state["pipeline_step"] = "error"
            return state

    return load_search_data_node
