# Search pipeline steps and orchestrator
from .load_search_data_node import build_load_search_data_node
from .embed_query_node import build_embed_query_node
from .rank_recipes_node import rank_recipes_node
from .search_orchestrator import SearchOrchestrator

__all__ = [
    "build_load_search_data_node",
    "build_embed_query_node",
    "rank_recipes_node",
    "SearchOrchestrator",
]
