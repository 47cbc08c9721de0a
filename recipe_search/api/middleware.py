import logging
import time

from fastapi import Request

logger = logging.getLogger("recipe_search.access")


async def log_requests(request: Request, call_next):
    """Log one line per request: method, path, status and elapsed time"""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response
