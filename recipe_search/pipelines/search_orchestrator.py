from typing import List
import time
import logging
from langgraph.graph import StateGraph, END

# LangSmith tracing
from langsmith import traceable

from recipe_search.database.recipe_corpus_client import RecipeCorpusClient
from recipe_search.database.vector_store_client import VectorStoreClient
from recipe_search.exceptions import RecipeSearchError
from recipe_search.models.pipeline_models import SearchState
from recipe_search.models.recipe_models import RecipeMatch
from recipe_search.pipelines.load_search_data_node import build_load_search_data_node
from recipe_search.pipelines.embed_query_node import build_embed_query_node
from recipe_search.pipelines.rank_recipes_node import rank_recipes_node
from recipe_search.services.embedding_service import EmbeddingProvider

logger = logging.getLogger(__name__)

class SearchOrchestrator:
    """
    Similarity search pipeline:
    1. Load search data (vector store + corpus indexed by id)
    2. Embed the query text
    3. Rank stored embeddings by cosine distance and merge the top matches with their recipes
    """

    def __init__(self,
                 corpus_client: RecipeCorpusClient,
                 vector_store_client: VectorStoreClient,
                 embedding_service: EmbeddingProvider,
                 top_k: int = 3):
        self.top_k = top_k
        self.load_search_data_node = build_load_search_data_node(corpus_client, vector_store_client)
        self.embed_query_node = build_embed_query_node(embedding_service)
        self.rank_recipes_node = rank_recipes_node
        self.graph = None
        self._build_graph()

    def _build_graph(self):
        """Build the LangGraph workflow"""
        try:
            workflow = StateGraph(SearchState)

            workflow.add_node("load_search_data", self.load_search_data_node)
            workflow.add_node("embed_query", self.embed_query_node)
            workflow.add_node("rank_recipes", self.rank_recipes_node)

            workflow.set_entry_point("load_search_data")
            workflow.add_edge("load_search_data", "embed_query")
            workflow.add_edge("embed_query", "rank_recipes")
            workflow.add_edge("rank_recipes", END)

            self.graph = workflow.compile()
            logger.info("Search workflow compiled successfully")

        except Exception as e:
            logger.error(f"Error building search workflow: {str(e)}")
            self.graph = None

    async def _run_sequential(self, state: SearchState) -> SearchState:
        state = await self.load_search_data_node(state)
        if not state.get("error"):
            state = await self.embed_query_node(state)
        if not state.get("error"):
            state = await self.rank_recipes_node(state)
        return state

    @traceable(name="recipe_search_pipeline")
    async def search(self, query: str) -> List[RecipeMatch]:
        """
        Main entry point for a similarity search
        Raises the RecipeSearchError recorded by the failing step
        """
        start_time = time.perf_counter()

        initial_state: SearchState = {
            "query": query,
            "top_k": self.top_k,
            "recipe_lookup": None,
            "stored_embeddings": None,
            "query_embedding": None,
            "results": None,
            "pipeline_step": "initialized",
            "error": None,
            "failure": None,
            "execution_time": None,
        }

        if self.graph:
            result = await self.graph.ainvoke(initial_state)
        else:
            # Sequential execution when the graph could not be compiled
            result = await self._run_sequential(initial_state)

        execution_time = time.perf_counter() - start_time

        failure = result.get("failure")
        if failure is not None:
            logger.error(f"Search failed at step {result.get('pipeline_step')} after {execution_time:.2f}s: {result.get('error')}")
            if isinstance(failure, RecipeSearchError):
                raise failure
            raise RecipeSearchError(str(failure)) from failure

        results = result.get("results") or []
        logger.info(f"Search for '{query}' completed in {execution_time:.2f}s with {len(results)} matches")
        return results
