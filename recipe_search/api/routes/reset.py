# API route for rebuilding the vector store
from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
import logging

from recipe_search.exceptions import CorpusError

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/reset")
async def reset_embeddings(request: Request):
    """
    Regenerate the whole vector store from the recipe corpus.

    Progress lines are streamed as plain text while each recipe is embedded.
    Fails with 500 before streaming if the corpus is missing or invalid.
    """
    generator = request.app.state.embedding_generator

    try:
        recipes = await run_in_threadpool(generator.prepare)
    except CorpusError as e:
        logger.error(f"Cannot rebuild vector store: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Rebuilding vector store for {len(recipes)} recipes")
    return StreamingResponse(
        generator.stream_progress(recipes),
        media_type="text/plain",
    )
