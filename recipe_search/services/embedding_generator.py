import asyncio
import logging
from typing import AsyncIterator, List, Optional, Set

from recipe_search.database.recipe_corpus_client import RecipeCorpusClient
from recipe_search.database.vector_store_client import VectorStoreClient
from recipe_search.exceptions import EmptyEmbeddingError
from recipe_search.models.embedding_models import EmbeddingRecord, RebuildEvent, RebuildStatus
from recipe_search.models.recipe_models import Recipe
from recipe_search.services.embedding_service import EmbeddingProvider

logger = logging.getLogger(__name__)

class EmbeddingGenerator:
    """
    Rebuilds the vector store from the recipe corpus:
    1. Load the corpus (fail fast if it is missing or invalid)
    2. Delete the previous vector store
    3. Embed every recipe in file order, one request at a time
    4. Write the collected records to the store in a single write

    Progress is reported as RebuildEvents on an asyncio queue; a None
    sentinel closes the channel once, whether the run succeeded or not.
    """

    def __init__(self,
                 corpus_client: RecipeCorpusClient,
                 vector_store_client: VectorStoreClient,
                 embedding_service: EmbeddingProvider):
        self.corpus_client = corpus_client
        self.vector_store_client = vector_store_client
        self.embedding_service = embedding_service
        self._background_tasks: Set[asyncio.Task] = set()

    def prepare(self) -> List[Recipe]:
        """Load the corpus and drop the existing store. Raises CorpusError before anything is deleted."""
        recipes = self.corpus_client.load_recipes()
        self.vector_store_client.delete()
        return recipes

    async def embed_recipe(self, recipe: Recipe) -> EmbeddingRecord:
        vector = await self.embedding_service.embed(recipe.embedding_text())
        if not vector:
            raise EmptyEmbeddingError("provider returned no embedding values")
        return EmbeddingRecord(id=recipe.id, embedding=vector)

    async def generate(self, recipes: List[Recipe],
                       queue: "asyncio.Queue[Optional[RebuildEvent]]") -> List[EmbeddingRecord]:
        """
        Producer side of the rebuild. Per-recipe failures are reported and skipped;
        anything else ends the run with a fatal event.
        """
        records: List[EmbeddingRecord] = []

        async def emit(event: RebuildEvent) -> None:
            log = logger.warning if event.is_error else logger.info
            log(event.message)
            await queue.put(event)

        try:
            for recipe in recipes:
                try:
                    records.append(await self.embed_recipe(recipe))
                except EmptyEmbeddingError:
                    await emit(RebuildEvent(
                        status=RebuildStatus.EMPTY,
                        recipe_id=recipe.id,
                        message=f"Failed to generate embedding for: {recipe.title} (No values)",
                    ))
                    continue
                except Exception as e:
                    await emit(RebuildEvent(
                        status=RebuildStatus.FAILED,
                        recipe_id=recipe.id,
                        message=f"Error generating embedding for {recipe.title}: {e}",
                    ))
                    continue

                await emit(RebuildEvent(
                    status=RebuildStatus.EMBEDDED,
                    recipe_id=recipe.id,
                    message=f"Generated embedding for: {recipe.title}",
                ))

            await asyncio.to_thread(self.vector_store_client.save_records, records)
            await emit(RebuildEvent(
                status=RebuildStatus.DONE,
                message=f"Done. Saved to {self.vector_store_client.path.name}",
            ))
        except Exception as e:
            logger.exception("Vector store rebuild aborted")
            await emit(RebuildEvent(status=RebuildStatus.FATAL, message=f"Fatal error: {e}"))
        finally:
            await queue.put(None)

        return records

    async def stream_progress(self, recipes: List[Recipe]) -> AsyncIterator[str]:
        """
        Run generate() as a background task and yield its progress lines as they arrive.
        The task keeps running if the consumer goes away before the run ends.
        """
        queue: "asyncio.Queue[Optional[RebuildEvent]]" = asyncio.Queue()
        task = asyncio.create_task(self.generate(recipes, queue))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

        while True:
            event = await queue.get()
            if event is None:
                break
            yield event.to_line()
