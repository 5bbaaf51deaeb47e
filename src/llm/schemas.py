from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from greedy.models import normalize_priority

# Function declarations sent to the model, one per intent.
CREATE_ASSIGNMENT = {
    "name": "createAssignment",
    "description": "Creates a new assignment on the timeline with provided details",
    "parameters": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "The name of the assignment"},
            "startDate": {"type": "string", "description": "The start date of the assignment in YYYY-MM-DD format"},
            "endDate": {"type": "string", "description": "The end date of the assignment in YYYY-MM-DD format"},
            "description": {"type": "string", "description": "A detailed description of the assignment"},
            "filesUsed": {"type": "boolean", "description": "Whether uploaded files were used for this assignment"},
        },
        "required": ["name"],
    },
}

CREATE_CLASS_CARD = {
    "name": "createClassCard",
    "description": "Creates a new class card on the timeline",
    "parameters": {
        "type": "object",
        "properties": {
            "className": {"type": "string", "description": "The name of the class"},
            "schedule": {"type": "string", "description": "The schedule of the class, e.g., 'MWF 10:00-11:30AM'"},
            "description": {"type": "string", "description": "A brief description of the class content"},
            "color": {"type": "string", "description": "Color for the class card (optional)"},
        },
        "required": ["className"],
    },
}

EDIT_ASSIGNMENT = {
    "name": "editAssignment",
    "description": "Edits an existing assignment on the timeline",
    "parameters": {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "The ID of the assignment to edit"},
            "name": {"type": "string", "description": "The updated name of the assignment (optional)"},
            "startDate": {"type": "string", "description": "The updated start date in YYYY-MM-DD format (optional)"},
            "endDate": {"type": "string", "description": "The updated end date in YYYY-MM-DD format (optional)"},
            "description": {"type": "string", "description": "The updated description of the assignment (optional)"},
            "progress": {"type": "integer", "description": "Completion percentage from 0 to 100 (optional)"},
            "priority": {"type": "string", "description": "low, medium or high (optional)"},
        },
    },
}

DELETE_ASSIGNMENT = {
    "name": "deleteAssignment",
    "description": "Deletes an assignment from the timeline",
    "parameters": {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "The ID of the assignment to delete"},
        },
    },
}

RECOMMEND = {
    "name": "recommend",
    "description": "Recommends which assignments to work on first, ordered by urgency",
    "parameters": {
        "type": "object",
        "properties": {
            "currentDate": {"type": "string", "description": "Today's date in YYYY-MM-DD format"},
        },
    },
}

FUNCTION_DECLARATIONS: List[Dict[str, Any]] = [
    CREATE_ASSIGNMENT,
    CREATE_CLASS_CARD,
    EDIT_ASSIGNMENT,
    DELETE_ASSIGNMENT,
    RECOMMEND,
]


class FunctionCall(BaseModel):
    name: str = Field(..., min_length=1)
    args: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("args", mode="before")
    @classmethod
    def args_default(cls, v: Any) -> Any:
        return {} if v is None else v


class ModelReply(BaseModel):
    text: str = ""
    function_calls: List[FunctionCall] = Field(default_factory=list)


class PriorityAssessment(BaseModel):
    priority: str = "medium"
    reason: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> str:
        return normalize_priority(v)


class SyllabusAssignment(BaseModel):
    name: str = Field(..., min_length=1)
    due_date: str = Field("", alias="dueDate")
    description: Optional[str] = ""

    model_config = {"populate_by_name": True}


class SyllabusSummary(BaseModel):
    class_name: str = Field(..., min_length=1, alias="className")
    description: str = ""
    schedule: str = ""
    topics: List[str] = Field(default_factory=list)
    assignments: List[SyllabusAssignment] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
