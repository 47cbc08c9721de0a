# API route for similarity search over the stored recipe embeddings
from fastapi import APIRouter, HTTPException, Query, Request
from typing import Any, Dict, List, Optional
import logging

from recipe_search.exceptions import RecipeSearchError

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/search", response_model=List[Dict[str, Any]])
async def search_recipes(
    request: Request,
    q: Optional[str] = Query(None, description="Free-text recipe query"),
):
    """
    Return the closest recipes to the query, each with its cosine distance
    """
    if not q:
        raise HTTPException(status_code=400, detail='Missing query parameter "q"')

    orchestrator = request.app.state.search_orchestrator

    try:
        matches = await orchestrator.search(q)
    except RecipeSearchError as e:
        raise HTTPException(status_code=500, detail=f"Error during search: {e}")

    return [match.model_dump() for match in matches]
