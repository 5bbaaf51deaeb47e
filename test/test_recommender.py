from datetime import date

from greedy.models import Assignment
from prioritization.recommender import recommend

REF = date(2025, 3, 10)


def test_overdue_ranks_ahead_of_later_work():
    a = {"id": "a", "name": "Lab report", "endDate": "2025-03-05", "progress": 0}
    b = {"id": "b", "name": "Reading", "endDate": "2025-03-20", "progress": 0}
    rec = recommend([b, a], REF)

    assert rec.total_assignments == 2
    first, second = rec.prioritized_assignments
    assert first.id == "a"
    assert first.priority_category == "Overdue"
    assert second.id == "b"
    assert second.priority_category == "Medium"
    assert second.days_until_due == 10
    assert "Lab report" in rec.message
    assert "1 assignment(s) are overdue" in rec.message


def test_completed_overdue_still_outranks_ten_days_out():
    done = {"id": "done", "name": "Done", "endDate": "2025-03-01", "progress": 100}
    later = {"id": "later", "name": "Later", "endDate": "2025-03-20", "progress": 0}
    rec = recommend([later, done], REF)
    assert [p.id for p in rec.prioritized_assignments] == ["done", "later"]


def test_ties_keep_input_order():
    items = [{"id": str(i), "name": f"A{i}", "endDate": "2025-03-12"} for i in range(4)]
    rec = recommend(items, REF)
    assert [p.id for p in rec.prioritized_assignments] == ["0", "1", "2", "3"]


def test_empty_collection():
    rec = recommend([], REF)
    assert rec.total_assignments == 0
    assert rec.prioritized_assignments == []
    assert rec.message.startswith("No assignments found")


def test_input_is_not_mutated_and_models_are_accepted():
    items = [Assignment(id="m", name="Model", endDate="2025-03-11", progress=30, className="cs101")]
    before = items[0].model_copy()
    rec = recommend(items, REF)
    assert items[0] == before
    p = rec.prioritized_assignments[0]
    assert p.class_name == "cs101"
    assert p.progress == 30
    assert p.due_date == "2025-03-11"


def test_missing_dates_sort_with_low_priority():
    items = [
        {"id": "nodate", "name": "No date"},
        {"id": "soon", "name": "Soon", "endDate": "2025-03-11"},
    ]
    rec = recommend(items, REF)
    assert [p.id for p in rec.prioritized_assignments] == ["soon", "nodate"]
    assert rec.prioritized_assignments[1].due_date is None


def test_camel_case_dump():
    rec = recommend([{"id": "a", "name": "A", "endDate": "2025-03-11"}], REF)
    data = rec.model_dump(mode="json", by_alias=True)
    assert data["totalAssignments"] == 1
    entry = data["prioritizedAssignments"][0]
    assert set(entry) >= {"daysUntilDue", "priorityScore", "priorityCategory", "dueDate"}


def test_half_done_overdue_then_ten_days_out():
    items = [
        {"id": "a", "name": "A", "endDate": "2025-03-09", "progress": 50},
        {"id": "b", "name": "B", "endDate": "2025-03-20", "progress": 0},
    ]
    ranked = recommend(items, REF).prioritized_assignments
    assert [(p.id, p.priority_category) for p in ranked] == [("a", "Overdue"), ("b", "Medium")]


def test_unrepresentable_progress_counts_as_not_started():
    items = [
        {"id": "a", "name": "A", "endDate": "2025-03-11", "progress": float("inf")},
        {"id": "b", "name": "B", "endDate": "2025-03-11", "progress": "1e999"},
    ]
    rec = recommend(items, REF)
    assert [p.progress for p in rec.prioritized_assignments] == [0, 0]
    assert rec.prioritized_assignments[0].priority_category == "Urgent"
