from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Optional

from pydantic import Field

from greedy.models import CamelModel
from prioritization.priority_scorer import clamp_progress, read_field, score, to_date


class PrioritizedAssignment(CamelModel):
    id: Optional[str] = None
    name: str = ""
    class_name: str = ""
    due_date: Optional[str] = None
    days_until_due: int = 0
    progress: int = 0
    priority_score: float = 0.0
    priority_category: str = "Low"


class Recommendation(CamelModel):
    total_assignments: int = 0
    prioritized_assignments: List[PrioritizedAssignment] = Field(default_factory=list)
    message: str = ""


def _project(assignment: Any, reference: date) -> PrioritizedAssignment:
    result = score(assignment, reference)
    due = read_field(assignment, "end_date", "endDate")
    return PrioritizedAssignment(
        id=read_field(assignment, "id"),
        name=read_field(assignment, "name", default="") or "",
        class_name=read_field(assignment, "class_name", "className", default="") or "",
        due_date=str(due) if due not in (None, "") else None,
        days_until_due=result.days_until_due,
        progress=clamp_progress(read_field(assignment, "progress", default=0)),
        priority_score=result.priority_score,
        priority_category=result.priority_category,
    )


def _summarize(prioritized: List[PrioritizedAssignment]) -> str:
    top = prioritized[0]
    overdue = sum(1 for p in prioritized if p.priority_category == "Overdue")
    due = f", due {top.due_date}" if top.due_date else ""
    message = (
        f"Prioritized {len(prioritized)} assignment(s). "
        f"Focus first on '{top.name}' ({top.priority_category}{due})."
    )
    if overdue:
        message += f" {overdue} assignment(s) are overdue."
    return message


def recommend(assignments: Iterable[Any], reference_date: Any = None) -> Recommendation:
    """Score every assignment and order them most urgent first.

    Ties keep their input order. The collection is always supplied by the
    caller.
    """
    reference = to_date(reference_date) or date.today()
    items = list(assignments or [])
    if not items:
        return Recommendation(
            total_assignments=0,
            prioritized_assignments=[],
            message="No assignments found to prioritize. Add assignments to get recommendations.",
        )

    prioritized = sorted(
        (_project(a, reference) for a in items),
        key=lambda p: p.priority_score,
        reverse=True,
    )
    return Recommendation(
        total_assignments=len(prioritized),
        prioritized_assignments=prioritized,
        message=_summarize(prioritized),
    )
