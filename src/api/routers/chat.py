import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field

from api.backend import GreedyBackend
from api.dependencies import get_backend
from api.metrics import COMMANDS_TOTAL, LLM_FAILURES_TOTAL
from api.responses import record_request
from greedy.models import CamelModel, FileAttachment

router = APIRouter()
logger = logging.getLogger(__name__)


class ChatIn(CamelModel):
    message: str = Field(..., min_length=1)
    class_name: Optional[str] = None
    selected_assignment: Optional[Dict[str, Any]] = None
    all_assignments: Optional[List[Dict[str, Any]]] = None
    files: List[FileAttachment] = Field(default_factory=list)


@router.post("/chat")
async def chat(payload: ChatIn, backend: GreedyBackend = Depends(get_backend)) -> dict:
    start = time.time()
    logger.info(f"Received chat message: {payload.message[:50]}...")

    response = await asyncio.to_thread(
        backend.chat,
        payload.message,
        class_name=payload.class_name,
        selected_assignment=payload.selected_assignment,
        all_assignments=payload.all_assignments,
        files=payload.files,
    )

    for fr in response.function_results:
        COMMANDS_TOTAL.labels(
            intent=fr.name, status="success" if fr.result.success else "failure"
        ).inc()
    if response.error:
        LLM_FAILURES_TOTAL.inc()

    record_request("/chat", "error" if response.error else "ok", start)
    return response.model_dump(mode="json", by_alias=True)
