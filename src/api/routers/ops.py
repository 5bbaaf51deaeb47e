import logging
import os

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from api.backend import GreedyBackend
from api.dependencies import GREEDY_STORE_PATH, get_backend
from api.metrics import CLASSES_STORED

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(backend: GreedyBackend = Depends(get_backend)) -> dict:
    """Liveness plus a summary of how the service is configured."""
    return {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "store": "json-file" if GREEDY_STORE_PATH else "in-memory",
        "llm_provider": os.getenv("LLM_PROVIDER", "gemini"),
        "classes": len(backend.store.list_classes()),
    }


@router.get("/metrics")
async def metrics(backend: GreedyBackend = Depends(get_backend)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    CLASSES_STORED.set(len(backend.store.list_classes()))
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
