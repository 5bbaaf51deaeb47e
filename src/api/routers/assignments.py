import asyncio
import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from api.backend import GreedyBackend
from api.dependencies import get_backend
from api.responses import record_request, result_response
from commands.intents import CommandContext
from greedy.models import CamelModel, FileAttachment

router = APIRouter()
logger = logging.getLogger(__name__)


class AnalyzePriorityIn(CamelModel):
    content: Optional[str] = None
    file: Optional[FileAttachment] = None


@router.patch("/assignments/{assignment_id}")
async def edit_assignment(
    assignment_id: str,
    updates: Dict[str, Any] = Body(...),
    backend: GreedyBackend = Depends(get_backend),
):
    start = time.time()
    intent = {"name": "editAssignment", "args": {k: v for k, v in updates.items() if k != "id"}}
    result = await asyncio.to_thread(
        backend.execute, intent, CommandContext(selected_assignment_id=assignment_id)
    )
    return result_response(result, "/assignments/{id}", start, intent="editAssignment")


@router.delete("/assignments/{assignment_id}")
async def delete_assignment(assignment_id: str, backend: GreedyBackend = Depends(get_backend)):
    start = time.time()
    result = await asyncio.to_thread(
        backend.execute,
        {"name": "deleteAssignment", "args": {}},
        CommandContext(selected_assignment_id=assignment_id),
    )
    return result_response(result, "/assignments/{id}", start, intent="deleteAssignment")


@router.post("/assignments/analyze-priority")
async def analyze_priority(payload: AnalyzePriorityIn, backend: GreedyBackend = Depends(get_backend)) -> dict:
    start = time.time()
    assessment = await asyncio.to_thread(
        backend.analyze_priority, content=payload.content, attachment=payload.file
    )
    record_request("/assignments/analyze-priority", "ok", start)
    return {"success": True, "priority": assessment.priority, "reason": assessment.reason}
