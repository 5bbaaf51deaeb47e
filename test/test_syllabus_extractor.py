from datetime import date

import pytest

from extraction.syllabus_extractor import MAX_SYLLABUS_CHARS, SyllabusExtractor, resolve_due_date
from llm.llm_client import LLMClient

START = date(2025, 1, 6)


@pytest.mark.parametrize(
    "due, expected",
    [
        ("2025-02-14", "2025-02-14"),
        ("Week 2", "2025-01-20"),
        ("week3", "2025-01-27"),
        ("Month 1", "2025-02-06"),
        ("End of term", "2025-01-06"),
        ("", "2025-01-06"),
    ],
)
def test_resolve_due_date(due, expected):
    assert resolve_due_date(due, START) == expected


def test_month_offset_clamps_to_month_end():
    assert resolve_due_date("Month 1", date(2025, 1, 31)) == "2025-02-28"


@pytest.mark.parametrize("due", ["Week 99999999", "Month 99999999", "week " + "9" * 5000])
def test_out_of_range_offsets_fall_back_to_start(due):
    assert resolve_due_date(due, START) == "2025-01-06"


def test_extract_resolves_dates(mock_llm):
    summary = SyllabusExtractor(mock_llm).extract("Course syllabus ...", today=START)
    assert summary.class_name == "Introduction to Computer Organization"
    assert [a.due_date for a in summary.assignments] == ["2025-01-20", "2025-02-03", "2025-03-03"]


def test_extract_truncates_text(fake_provider_factory):
    provider = fake_provider_factory('{"className": "History", "assignments": []}')
    SyllabusExtractor(LLMClient(provider=provider)).extract("q" * (MAX_SYLLABUS_CHARS * 2), today=START)
    assert provider.calls[0]["user"].count("q") == MAX_SYLLABUS_CHARS
