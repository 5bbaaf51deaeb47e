"""
Argument schemas for the fixed intent vocabulary.

Each intent name maps to one pydantic model; arguments from the language
model are validated against it before anything touches the store. Date
strings must name a real calendar day and are never rewritten.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from greedy.models import FileAttachment, normalize_priority

IntentName = Literal[
    "createAssignment",
    "createClassCard",
    "editAssignment",
    "deleteAssignment",
    "recommend",
]

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _calendar_date(v: Optional[str]) -> Optional[str]:
    if v is not None:
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError(f"{v!r} is not a calendar date")
    return v


class IntentArgs(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CreateAssignmentArgs(IntentArgs):
    name: str = Field(..., min_length=1)
    start_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    end_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    description: Optional[str] = None
    files_used: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def real_dates(cls, v: Optional[str]) -> Optional[str]:
        return _calendar_date(v)


class CreateClassCardArgs(IntentArgs):
    class_name: str = Field(..., min_length=1)
    schedule: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    @field_validator("class_name")
    @classmethod
    def class_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("className must not be blank")
        return v


class EditAssignmentArgs(IntentArgs):
    id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    start_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    end_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    description: Optional[str] = None
    progress: Optional[int] = None
    priority: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def real_dates(cls, v: Optional[str]) -> Optional[str]:
        return _calendar_date(v)

    @field_validator("progress")
    @classmethod
    def clamp_progress(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        return max(0, min(100, v))

    @field_validator("priority")
    @classmethod
    def coerce_priority(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else normalize_priority(v)


class DeleteAssignmentArgs(IntentArgs):
    id: Optional[str] = None


class RecommendArgs(IntentArgs):
    current_date: Optional[str] = Field(None, pattern=DATE_PATTERN)


INTENT_ARGUMENTS: Dict[str, Type[IntentArgs]] = {
    "createAssignment": CreateAssignmentArgs,
    "createClassCard": CreateClassCardArgs,
    "editAssignment": EditAssignmentArgs,
    "deleteAssignment": DeleteAssignmentArgs,
    "recommend": RecommendArgs,
}


class CommandIntent(BaseModel):
    """One {name, args} pair as returned by the model."""

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("args", mode="before")
    @classmethod
    def args_default(cls, v: Any) -> Any:
        return {} if v is None else v


class CommandContext(BaseModel):
    """What the caller knows about the chat turn besides the message itself."""

    selected_assignment_id: Optional[str] = None
    class_name: Optional[str] = None
    files: List[FileAttachment] = Field(default_factory=list)
    assignments: Optional[List[Any]] = None
    today: Optional[date] = None

    @property
    def files_attached(self) -> bool:
        return bool(self.files)
