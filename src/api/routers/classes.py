import asyncio
import logging
import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field, field_validator

from api.backend import GreedyBackend
from api.dependencies import get_backend
from api.responses import result_response
from commands.intents import DATE_PATTERN, CommandContext
from greedy.errors import NotFoundError
from greedy.models import CamelModel

router = APIRouter()
logger = logging.getLogger(__name__)


class ClassIn(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    schedule: Optional[str] = None
    color: Optional[str] = None


class AssignmentIn(CamelModel):
    name: str = Field(..., min_length=1)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class RecommendIn(CamelModel):
    current_date: Optional[str] = Field(None, pattern=DATE_PATTERN)

    @field_validator("current_date")
    @classmethod
    def real_date(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            date.fromisoformat(v)
        return v


class SyllabusIn(CamelModel):
    text: str = Field(..., min_length=1)


@router.get("/classes")
async def list_classes(backend: GreedyBackend = Depends(get_backend)) -> dict:
    classes = await asyncio.to_thread(backend.store.list_classes)
    return {"success": True, "classes": [c.to_record() for c in classes]}


@router.post("/classes")
async def create_class(payload: ClassIn, backend: GreedyBackend = Depends(get_backend)):
    start = time.time()
    intent = {
        "name": "createClassCard",
        "args": {
            "className": payload.name,
            "description": payload.description,
            "schedule": payload.schedule,
            "color": payload.color,
        },
    }
    result = await asyncio.to_thread(backend.execute, intent)
    return result_response(result, "/classes", start, intent="createClassCard")


@router.get("/classes/{slug}")
async def get_class(slug: str, backend: GreedyBackend = Depends(get_backend)) -> dict:
    try:
        card = await asyncio.to_thread(backend.store.get_class, slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"success": True, "class": card.to_record()}


@router.get("/classes/{slug}/assignments")
async def list_assignments(slug: str, backend: GreedyBackend = Depends(get_backend)) -> dict:
    if not await asyncio.to_thread(backend.store.has_class, slug):
        raise HTTPException(status_code=404, detail=f"Class '{slug}' not found")
    assignments = await asyncio.to_thread(backend.store.list_assignments, slug)
    return {
        "success": True,
        "assignments": [a.to_record() for a in assignments],
        "total": len(assignments),
    }


@router.post("/classes/{slug}/assignments")
async def create_assignment(
    slug: str, payload: AssignmentIn, backend: GreedyBackend = Depends(get_backend)
):
    start = time.time()
    intent = {"name": "createAssignment", "args": payload.model_dump(by_alias=True, exclude_none=True)}
    result = await asyncio.to_thread(backend.execute, intent, CommandContext(class_name=slug))
    return result_response(result, "/classes/{slug}/assignments", start, intent="createAssignment")


@router.post("/classes/{slug}/recommend")
async def recommend_class(
    slug: str,
    payload: Optional[RecommendIn] = None,
    backend: GreedyBackend = Depends(get_backend),
):
    start = time.time()
    current = None
    if payload is not None and payload.current_date:
        current = date.fromisoformat(payload.current_date)
    result = await asyncio.to_thread(backend.recommend_class, slug, current)
    return result_response(result, "/classes/{slug}/recommend", start, intent="recommend")


@router.post("/syllabus")
async def import_syllabus(payload: SyllabusIn, backend: GreedyBackend = Depends(get_backend)):
    start = time.time()
    logger.info(f"Processing syllabus upload ({len(payload.text)} chars)")
    result = await asyncio.to_thread(backend.create_class_from_syllabus, payload.text)
    return result_response(result, "/syllabus", start)
