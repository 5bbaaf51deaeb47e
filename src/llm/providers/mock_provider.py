from __future__ import annotations
import json
import re
from datetime import date, timedelta
from typing import Any, Dict, List

from llm.prompts import CONTEXT_MARKER
from llm.providers.base import LLMProvider


def _today_from(system: str) -> date:
    match = re.search(r"Today's date is (\d{4}-\d{2}-\d{2})", system)
    return date.fromisoformat(match.group(1)) if match else date.today()


def _title_after(keyword: str, text: str) -> str:
    match = re.search(rf"{keyword}\s+(?:an?\s+|the\s+)?(.+)", text, flags=re.IGNORECASE)
    title = match.group(1) if match else text
    return title.strip().rstrip(".!?").strip() or "New Assignment"


class MockProvider(LLMProvider):
    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        """
        Returns dummy JSON responses based on the prompt content.
        """
        if "priority level" in system:
            lower_user = user.lower()
            priority = "medium"
            if "final" in lower_user or "project" in lower_user or "exam" in lower_user:
                priority = "high"
            elif "reading" in lower_user or "optional" in lower_user:
                priority = "low"
            return json.dumps({
                "priority": priority,
                "reason": f"Keyword analysis suggests {priority} priority.",
            })

        if "syllabus" in system.lower():
            return json.dumps({
                "className": "Introduction to Computer Organization",
                "description": "Number representations, assembly programming and processor design.",
                "schedule": "MWF 10:00-11:50AM",
                "topics": ["Number representation", "Assembly", "Processor design", "Memory hierarchy", "Virtual memory"],
                "assignments": [
                    {"name": "Data Lab", "dueDate": "Week 2", "description": "Bit-level puzzles."},
                    {"name": "Bomb Lab", "dueDate": "Week 4", "description": "Reverse engineer a binary."},
                    {"name": "Cache Lab", "dueDate": "Week 8", "description": "Write a cache simulator."},
                ],
            })

        # Default fallback
        return "{}"

    def generate_function_calls(
        self,
        *,
        system: str,
        user: str,
        functions: List[Dict[str, Any]],
        model: str | None = None,
    ) -> Dict[str, Any]:
        # Simple keyword matching for demo purposes, on the message only
        message = user.split(CONTEXT_MARKER)[0].strip()
        lower = message.lower()
        today = _today_from(system)

        if "class" in lower and "assignment" not in lower and any(w in lower for w in ("create", "add", "new", "set up")):
            name = re.sub(r"^(create|add|make|set up)\s+(an?\s+)?(new\s+)?", "", message, flags=re.IGNORECASE)
            name = re.split(r"\s*\bclass\b", name, flags=re.IGNORECASE)[0].strip() or "New Class"
            call = {"name": "createClassCard", "args": {"className": name}}
        elif any(w in lower for w in ("delete", "remove")):
            call = {"name": "deleteAssignment", "args": {"id": "selected-assignment"}}
        elif any(w in lower for w in ("change", "update", "edit", "rename", "move")):
            args: Dict[str, Any] = {"id": "selected-assignment"}
            if "tomorrow" in lower:
                args["endDate"] = (today + timedelta(days=1)).isoformat()
            elif "next week" in lower:
                args["endDate"] = (today + timedelta(days=7)).isoformat()
            rename = re.search(r"rename (?:it |this )?to\s+(.+)", message, flags=re.IGNORECASE)
            if rename:
                args["name"] = rename.group(1).strip().rstrip(".!?")
            call = {"name": "editAssignment", "args": args}
        elif any(w in lower for w in ("recommend", "priorit", "what should")):
            call = {"name": "recommend", "args": {"currentDate": today.isoformat()}}
        elif any(w in lower for w in ("assignment", "homework", "project", "essay")):
            call = {
                "name": "createAssignment",
                "args": {
                    "name": _title_after("(?:create|add|make)", message),
                    "startDate": today.isoformat(),
                    "endDate": (today + timedelta(days=7)).isoformat(),
                    "description": f"Assignment created from: {message}",
                },
            }
        else:
            return {"text": "I can create, edit or delete assignments and classes.", "function_calls": []}

        return {"text": f"Okay, running {call['name']}.", "function_calls": [call]}
