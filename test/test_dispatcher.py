from commands.dispatcher import dispatch, execute_intent
from commands.intents import CommandContext
from commands.interpreter import NormalizedCommand
from storage.classroom_store import ClassroomStore
from storage.kv_store import MemoryStore


def _create(store, name="Essay", **args):
    return execute_intent(
        {"name": "createAssignment", "args": {"name": name, **args}},
        CommandContext(class_name="cs101"),
        store,
    )


def test_create_class_card_defaults(store):
    result = execute_intent({"name": "createClassCard", "args": {"className": "Machine Learning"}}, None, store)
    assert result.success
    assert result.data["slug"] == "machine-learning"
    assert result.data["schedule"] == "TBD"
    assert result.data["description"] == "Course materials and assignments for Machine Learning"
    assert store.has_class("machine-learning")


def test_class_slugs_stay_unique(store):
    for _ in range(3):
        execute_intent({"name": "createClassCard", "args": {"className": "Biology"}}, None, store)
    assert [c.slug for c in store.list_classes()] == ["biology", "biology-2", "biology-3"]


def test_create_assignment(store_with_class):
    result = _create(store_with_class, startDate="2025-03-01", endDate="2025-03-08")
    assert result.success
    assert result.data["className"] == "cs101"
    stored = store_with_class.list_assignments("cs101")
    assert [a.id for a in stored] == [result.data["id"]]
    assert stored[0].end_date == "2025-03-08"


def test_create_assignment_ignores_model_supplied_id(store_with_class):
    result = _create(store_with_class, id="assignment-from-model")
    assert result.data["id"] != "assignment-from-model"


def test_create_assignment_unknown_class(store):
    result = _create(store)
    assert not result.success
    assert result.error == "NotFoundError"
    assert store.list_assignments("cs101") == []


def test_edit_is_idempotent(store_with_class):
    created = _create(store_with_class).data
    ctx = CommandContext(selected_assignment_id=created["id"])
    intent = {"name": "editAssignment", "args": {"name": "Final essay", "endDate": "2025-04-01"}}

    first = execute_intent(intent, ctx, store_with_class)
    second = execute_intent(intent, ctx, store_with_class)
    assert first.success and second.success
    assert first.data == second.data
    assert first.data["name"] == "Final essay"
    assert first.data["startDate"] == created["startDate"]
    assert len(store_with_class.list_assignments("cs101")) == 1


def test_edit_with_invalid_merged_record_leaves_store_alone(store_with_class):
    created = _create(store_with_class).data
    ctx = CommandContext(selected_assignment_id=created["id"])
    result = dispatch(
        NormalizedCommand(name="editAssignment", fields={"name": "   "}, target_id=created["id"]),
        store_with_class,
    )
    assert not result.success
    assert result.error == "ValidationError"
    assert store_with_class.list_assignments("cs101")[0].name == "Essay"
    assert execute_intent({"name": "editAssignment", "args": {}}, ctx, store_with_class).success


def test_delete_removes_assignment(store_with_class):
    keep = _create(store_with_class, name="Keep").data
    drop = _create(store_with_class, name="Drop").data
    result = execute_intent(
        {"name": "deleteAssignment", "args": {"id": "selected-assignment"}},
        CommandContext(selected_assignment_id=drop["id"]),
        store_with_class,
    )
    assert result.success
    assert result.data == {"id": drop["id"]}
    assert [a.id for a in store_with_class.list_assignments("cs101")] == [keep["id"]]


def test_delete_not_found_leaves_collection_unchanged(store_with_class):
    _create(store_with_class)
    before = store_with_class.list_assignments("cs101")
    result = execute_intent(
        {"name": "deleteAssignment", "args": {}},
        CommandContext(selected_assignment_id="assignment-missing"),
        store_with_class,
    )
    assert not result.success
    assert result.error == "NotFoundError"
    assert store_with_class.list_assignments("cs101") == before


def test_interpreter_errors_come_back_as_results(store):
    result = execute_intent({"name": "deleteAssignment", "args": {}}, None, store)
    assert not result.success
    assert result.error == "MissingTargetError"
    assert execute_intent({"name": "nope"}, None, store).error == "UnknownIntentError"


def test_recommend_result(store):
    ctx = CommandContext(assignments=[{"id": "a", "name": "A", "endDate": "2025-03-11"}])
    result = execute_intent({"name": "recommend", "args": {"currentDate": "2025-03-10"}}, ctx, store)
    assert result.success
    assert result.data["prioritizedAssignments"][0]["priorityCategory"] == "Urgent"


class _BrokenKV(MemoryStore):
    def set(self, key, value):
        raise RuntimeError("disk full")


def test_unexpected_errors_become_internal_error():
    store = ClassroomStore(_BrokenKV())
    result = execute_intent({"name": "createClassCard", "args": {"className": "Art"}}, None, store)
    assert not result.success
    assert result.error == "InternalError"
    assert "disk full" in result.message


def test_created_dates_are_stored_verbatim(store_with_class):
    _create(store_with_class, startDate="2025-05-18", endDate="2025-05-22")
    stored = store_with_class.list_assignments("cs101")[0]
    assert (stored.start_date, stored.end_date) == ("2025-05-18", "2025-05-22")


def test_create_with_impossible_date_stores_nothing(store_with_class):
    result = _create(store_with_class, endDate="2025-02-30")
    assert not result.success
    assert result.error == "ValidationError"
    assert store_with_class.list_assignments("cs101") == []


def test_edit_with_impossible_date_leaves_record_unchanged(store_with_class):
    created = _create(store_with_class, endDate="2025-03-08").data
    result = execute_intent(
        {"name": "editAssignment", "args": {"endDate": "2025-02-30"}},
        CommandContext(selected_assignment_id=created["id"]),
        store_with_class,
    )
    assert not result.success
    assert result.error == "ValidationError"
    assert store_with_class.list_assignments("cs101")[0].end_date == "2025-03-08"
