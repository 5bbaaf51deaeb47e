from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from commands.intents import CommandContext, CommandIntent
from commands.interpreter import NormalizedCommand, interpret
from greedy.errors import GreedyError, UnknownIntentError, ValidationError
from greedy.models import Assignment, ClassCard, CommandResult, new_assignment_id
from prioritization.recommender import recommend
from storage.classroom_store import ClassroomStore

logger = logging.getLogger(__name__)


def _create_assignment(command: NormalizedCommand, store: ClassroomStore) -> CommandResult:
    slug = command.class_slug
    if not slug:
        raise ValidationError("createAssignment needs a class to add the assignment to")
    store.get_class(slug)

    assignment = Assignment(
        **command.fields,
        id=new_assignment_id(),
        class_name=slug,
        files=command.files,
    )
    collection = store.list_assignments(slug)
    collection.append(assignment)
    store.save_assignments(slug, collection)
    logger.info("Created assignment %s in %s", assignment.id, slug)
    return CommandResult.ok(
        f"Successfully created assignment: {assignment.name}",
        data=assignment.to_record(),
    )


def _create_class_card(command: NormalizedCommand, store: ClassroomStore) -> CommandResult:
    fields = dict(command.fields)
    name = fields.pop("class_name").strip()
    card_fields: Dict[str, Any] = {
        "description": fields.get("description") or f"Course materials and assignments for {name}",
        "schedule": fields.get("schedule") or "TBD",
    }
    if fields.get("color"):
        card_fields["color"] = fields["color"]
    if fields.get("topics"):
        card_fields["topics"] = fields["topics"]

    card = ClassCard(name=name, slug=store.unique_slug(name), **card_fields)
    store.add_class(card)
    logger.info("Created class %s (%s)", card.slug, card.id)
    return CommandResult.ok(f"Successfully created class card: {card.name}", data=card.to_record())


def _edit_assignment(command: NormalizedCommand, store: ClassroomStore) -> CommandResult:
    slug, collection, index = store.find_assignment(command.target_id, command.class_slug)
    current = collection[index]
    merged = current.model_dump()
    merged.update(command.fields)
    updated = Assignment.model_validate(merged)
    collection[index] = updated
    store.save_assignments(slug, collection)
    suffix = f": {updated.name}" if "name" in command.fields else ""
    return CommandResult.ok(
        f"Successfully updated assignment {updated.id}{suffix}",
        data=updated.to_record(),
    )


def _delete_assignment(command: NormalizedCommand, store: ClassroomStore) -> CommandResult:
    slug, collection, index = store.find_assignment(command.target_id, command.class_slug)
    removed = collection.pop(index)
    store.save_assignments(slug, collection)
    logger.info("Deleted assignment %s from %s", removed.id, slug)
    return CommandResult.ok(
        f"Successfully deleted assignment: {removed.name}",
        data={"id": removed.id},
    )


def _recommend(command: NormalizedCommand, store: ClassroomStore) -> CommandResult:
    recommendation = recommend(command.assignments or [], command.reference_date)
    return CommandResult.ok(recommendation.message, data=recommendation.model_dump(mode="json", by_alias=True))


_HANDLERS = {
    "createAssignment": _create_assignment,
    "createClassCard": _create_class_card,
    "editAssignment": _edit_assignment,
    "deleteAssignment": _delete_assignment,
    "recommend": _recommend,
}


def _failure(e: GreedyError) -> CommandResult:
    return CommandResult.failure(e.kind, e.message)


def dispatch(command: NormalizedCommand, store: ClassroomStore) -> CommandResult:
    """Execute a normalized command against the store.

    Never raises: every failure comes back as CommandResult(success=False).
    """
    handler = _HANDLERS.get(command.name)
    try:
        if handler is None:
            raise UnknownIntentError(f"Unknown intent '{command.name}'")
        return handler(command, store)
    except GreedyError as e:
        logger.info("%s failed: %s", command.name, e.message)
        return _failure(e)
    except PydanticValidationError as e:
        logger.info("%s produced an invalid record: %s", command.name, e)
        return CommandResult.failure(ValidationError.kind, f"Invalid {command.name} data: {e.error_count()} error(s)")
    except Exception as e:
        logger.exception("Unexpected error dispatching %s", command.name)
        return CommandResult.failure("InternalError", f"Could not complete {command.name}: {e}")


def execute_intent(
    intent: CommandIntent | Dict[str, Any],
    context: Optional[CommandContext],
    store: ClassroomStore,
) -> CommandResult:
    """Interpret and dispatch one intent, converting interpreter errors too."""
    try:
        command = interpret(intent, context)
    except GreedyError as e:
        logger.info("Intent rejected: %s", e.message)
        return _failure(e)
    return dispatch(command, store)
