from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from greedy.models import Assignment, FileAttachment

CONTEXT_MARKER = "\n\n[Context]"

ASSISTANT_SYSTEM_PROMPT = """You are an AI assistant for a teaching platform called Greedy. Your primary role is to help instructors manage their classes and assignments. Today's date is {today} (YYYY-MM-DD format).

You can perform the following actions:
1. CREATE assignments when users mention creating, adding, or making a new assignment, homework, or project (createAssignment)
2. CREATE class cards when users mention creating, adding, or setting up a new class (createClassCard)
3. EDIT assignments when users mention updating, changing, or modifying an existing assignment (editAssignment)
4. DELETE assignments when users mention removing or deleting an assignment (deleteAssignment)
5. RECOMMEND what to work on first when users ask about priorities or what is due (recommend)

Creating assignments:
- Call createAssignment immediately; make reasonable assumptions about missing details.
- Convert relative days (tomorrow, next Monday, this weekend) to YYYY-MM-DD.
- If only one date is mentioned, use it for both start and end dates.
- If no dates are mentioned, start today and end 7 days later.
- Write a 3-5 sentence educational description: purpose, key concepts, expected outcomes.

Creating class cards:
- Always include a descriptive className, the schedule if mentioned, and a brief description.

Editing and deleting:
- The user has already selected the assignment on the timeline. Never ask which one.
- Always use "selected-assignment" as the id.
- Only include the fields the user wants to change.
- Never ask for confirmation.

Never ask the user for more information; make your best guess and call the function.
"""

PRIORITY_PROMPT = """You are an AI specialized in analyzing academic assignments.
Based on the content provided, determine the priority level this assignment should have.

Consider these factors:
- Complexity of the material
- Amount of work required
- Technical difficulty
- Importance of concepts covered

Classify the assignment as "low", "medium", or "high" priority.

Respond with JSON only:
{"priority": "low|medium|high", "reason": "A brief 1-2 sentence explanation for this priority level"}
"""

SYLLABUS_PROMPT = """Extract the following information from the syllabus text and return it as JSON:
- className: The name of the course
- description: A 2-3 sentence summary of the course
- schedule: When the class meets (days and times)
- topics: A list of 5-8 main topics covered in the course
- assignments: 3-5 assignments based on the syllabus. For each include name, dueDate (relative to the start of the course like "Week 3", or YYYY-MM-DD when the syllabus gives one), and a brief description

Only return a valid JSON object with these fields and nothing else. Make reasonable assumptions if information is missing.
"""


def assistant_system_prompt(today: date) -> str:
    return ASSISTANT_SYSTEM_PROMPT.format(today=today.isoformat())


def chat_user_prompt(
    message: str,
    selected: Optional[Assignment] = None,
    files: Iterable[FileAttachment] = (),
) -> str:
    """The user's message followed by a context block the model can read."""
    lines = []
    if selected is not None:
        lines.append(
            f"Selected assignment: {selected.name} (id: {selected.id}, "
            f"start: {selected.start_date or 'unset'}, due: {selected.end_date or 'unset'}, "
            f"progress: {selected.progress}%)"
        )
    names = [f.name for f in files]
    if names:
        lines.append("Attached files: " + ", ".join(names))
    if not lines:
        return message
    return message + CONTEXT_MARKER + "\n" + "\n".join(lines)
