# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging
import sys

from fastapi import FastAPI

from recipe_search.api.middleware import log_requests
from recipe_search.api.routes import reset, search
from recipe_search.config import Settings, configure_logging, load_settings
from recipe_search.database.recipe_corpus_client import RecipeCorpusClient
from recipe_search.database.vector_store_client import VectorStoreClient
from recipe_search.exceptions import ConfigurationError
from recipe_search.pipelines.search_orchestrator import SearchOrchestrator
from recipe_search.services.embedding_generator import EmbeddingGenerator
from recipe_search.services.embedding_service import EmbeddingProvider, GeminiEmbeddingService

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, embedding_service: EmbeddingProvider = None) -> FastAPI:
    """
    Build the API with its collaborators wired from settings.
    An embedding_service can be passed in to replace the Gemini provider.
    """
    settings = settings or load_settings()
    embedding_service = embedding_service or GeminiEmbeddingService(settings)

    corpus_client = RecipeCorpusClient(settings.recipes_path)
    vector_store_client = VectorStoreClient(settings.embeddings_path)

    app = FastAPI(title="Recipe Search Service", version="1.0.0")
    app.state.settings = settings
    app.state.embedding_generator = EmbeddingGenerator(corpus_client, vector_store_client, embedding_service)
    app.state.search_orchestrator = SearchOrchestrator(
        corpus_client, vector_store_client, embedding_service, top_k=settings.top_k
    )

    app.middleware("http")(log_requests)
    app.include_router(reset.router, tags=["reset"])
    app.include_router(search.router, tags=["search"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


def main():
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Error: {str(e)}")
        sys.exit(1)

    configure_logging(settings.log_level)

    import uvicorn
    logger.info(f"Serving at http://{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
