from datetime import date, datetime

import pytest

from greedy.models import Assignment
from prioritization.priority_scorer import priority_level, score, time_factor

REF = date(2025, 3, 10)


def _a(end_date, progress=0):
    return {"id": "a", "name": "A", "endDate": end_date, "progress": progress}


def test_due_today_is_urgent():
    s = score(_a("2025-03-10"), REF)
    assert s.days_until_due == 0
    assert not s.overdue
    assert s.priority_category == "Urgent"
    assert s.priority_score == pytest.approx(0.7 * 10 + 0.3)


def test_overdue_uses_strict_comparison_not_day_count():
    s = score(_a("2025-03-09"), REF)
    assert s.days_until_due == 0
    assert s.overdue
    assert s.priority_category == "Overdue"
    assert s.priority_score == pytest.approx(0.7 * 12 + 0.3)


def test_finished_overdue_assignment_keeps_time_factor():
    s = score(_a("2025-03-01", progress=100), REF)
    assert s.priority_category == "Overdue"
    assert s.priority_score == pytest.approx(8.4)


@pytest.mark.parametrize(
    "end_date, days, category, factor",
    [
        ("2025-03-11", 1, "Urgent", 10),
        ("2025-03-12", 2, "Urgent", 8),
        ("2025-03-13", 3, "High", 8),
        ("2025-03-17", 7, "High", 6),
        ("2025-03-18", 8, "Medium", 4),
        ("2025-03-24", 14, "Medium", 4),
        ("2025-03-25", 15, "Low", 4),
    ],
)
def test_buckets(end_date, days, category, factor):
    s = score(_a(end_date, progress=50), REF)
    assert s.days_until_due == days
    assert s.priority_category == category
    assert s.priority_score == pytest.approx(0.7 * factor + 0.3 * 0.5)


def test_missing_due_date_scores_low_with_anomaly():
    s = score({"id": "a", "name": "A"}, REF)
    assert s.priority_category == "Low"
    assert s.days_until_due == 0
    assert s.priority_score == pytest.approx(0.7 * 4 + 0.3)
    assert s.anomaly == "missing due date"


def test_unparseable_due_date_is_reported():
    s = score(_a("next tuesday"), REF)
    assert s.priority_category == "Low"
    assert "unparseable" in s.anomaly


def test_datetime_strings_and_models_are_accepted():
    assert score(_a("2025-03-12T23:59:00Z"), REF).days_until_due == 2
    model = Assignment(name="A", endDate="2025-03-17", progress=20)
    assert score(model, REF).priority_category == "High"
    assert score(_a("2025-03-12"), datetime(2025, 3, 10, 18, 30)).days_until_due == 2


def test_reference_defaults_to_today():
    s = score(_a(date.today().isoformat()))
    assert s.days_until_due == 0
    assert not s.overdue


def test_time_factor_and_priority_level():
    assert time_factor(0, overdue=True) == 12
    assert time_factor(30, overdue=False) == 4
    assert priority_level("Overdue") == "high"
    assert priority_level("Medium") == "medium"
    assert priority_level("Low") == "low"
