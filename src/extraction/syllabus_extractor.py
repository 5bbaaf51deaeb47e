import calendar
import logging
import re
from datetime import date, timedelta
from typing import List, Optional

from llm.llm_client import LLMClient
from llm.schemas import SyllabusAssignment, SyllabusSummary

logger = logging.getLogger(__name__)

MAX_SYLLABUS_CHARS = 8000


def _add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def resolve_due_date(due: str, today: date) -> str:
    """Turn "Week 3" / "Month 2" / an ISO date into YYYY-MM-DD; anything else is today."""
    text = (due or "").strip()
    try:
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        pass

    week = re.search(r"week\s*(\d+)", text, flags=re.IGNORECASE)
    month = re.search(r"month\s*(\d+)", text, flags=re.IGNORECASE)
    try:
        if week:
            return (today + timedelta(weeks=int(week.group(1)))).isoformat()
        if month:
            return _add_months(today, int(month.group(1))).isoformat()
    except (OverflowError, ValueError):
        # offsets past the last representable date
        logger.warning("Due date %r is out of range, using today", text)
        return today.isoformat()

    if text:
        logger.info("Could not resolve due date %r, using today", text)
    return today.isoformat()


def resolve_due_dates(assignments: List[SyllabusAssignment], today: Optional[date] = None) -> List[SyllabusAssignment]:
    today = today or date.today()
    return [
        a.model_copy(update={"due_date": resolve_due_date(a.due_date, today)})
        for a in assignments
    ]


class SyllabusExtractor:
    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or LLMClient()

    def extract(self, text: str, today: Optional[date] = None) -> SyllabusSummary:
        """Summarize syllabus text; assignment due dates come back resolved.

        Raises UpstreamError when the model fails or returns something unusable.
        """
        summary = self.llm.summarize_syllabus(text[:MAX_SYLLABUS_CHARS])
        return summary.model_copy(update={"assignments": resolve_due_dates(summary.assignments, today)})
