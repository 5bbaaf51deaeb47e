from __future__ import annotations

import random
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Priority = Literal["low", "medium", "high"]
PriorityCategory = Literal["Overdue", "Urgent", "High", "Medium", "Low"]

CLASS_COLORS = [
    "forest",
    "blue",
    "green",
    "purple",
    "amber",
    "teal",
    "pink",
    "indigo",
    "orange",
    "emerald",
]


def new_assignment_id() -> str:
    return f"assignment-{uuid.uuid4().hex[:12]}"


def new_class_id() -> str:
    return f"class-{uuid.uuid4().hex[:12]}"


def random_color() -> str:
    return random.choice(CLASS_COLORS)


def slugify(name: str) -> str:
    """Lower-case the name and collapse every non-alphanumeric run into a hyphen."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "class"


def normalize_priority(value: Any) -> str:
    """Map free-form priority text (e.g. from a model) onto low/medium/high."""
    if not value or not isinstance(value, str):
        return "medium"
    lowered = value.lower().strip()
    if "low" in lowered:
        return "low"
    if "high" in lowered:
        return "high"
    return "medium"


class CamelModel(BaseModel):
    # records are exchanged with the browser in camelCase
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class FileAttachment(CamelModel):
    name: str
    type: str = ""
    size: int = Field(0, ge=0)
    data: str = ""  # base64


class Assignment(CamelModel):
    id: str = Field(default_factory=new_assignment_id)
    name: str = Field(..., min_length=1)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: str = ""

    progress: int = 0
    priority: Priority = "medium"

    files: List[FileAttachment] = Field(default_factory=list)
    files_used: bool = False
    class_name: str = ""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name must not be blank")
        return v2

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("progress", mode="before")
    @classmethod
    def clamp_progress(cls, v: Any) -> int:
        try:
            value = int(float(v))
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(0, min(100, value))

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> str:
        return normalize_priority(v)


class ClassCard(CamelModel):
    id: str = Field(default_factory=new_class_id)
    name: str = Field(..., min_length=1)
    slug: str
    description: str = ""
    schedule: str = "TBD"
    color: str = Field(default_factory=random_color)
    topics: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CommandResult(BaseModel):
    success: bool
    message: str
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "CommandResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, error: str, message: str) -> "CommandResult":
        return cls(success=False, message=message, error=error)
