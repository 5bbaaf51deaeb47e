from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from commands.intents import INTENT_ARGUMENTS, CommandContext, CommandIntent, IntentArgs
from greedy.errors import MissingTargetError, UnknownIntentError, ValidationError
from greedy.models import FileAttachment

logger = logging.getLogger(__name__)

# the system prompt tells the model to use this id for the selected assignment
PLACEHOLDER_IDS = {"selected-assignment"}


@dataclass
class NormalizedCommand:
    """An intent after validation, ready for the dispatcher."""

    name: str
    fields: Dict[str, Any] = field(default_factory=dict)
    target_id: Optional[str] = None
    class_slug: Optional[str] = None
    files: List[FileAttachment] = field(default_factory=list)
    assignments: Optional[List[Any]] = None
    reference_date: Optional[date] = None


def _describe(e: PydanticValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "args"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def _validate(intent: CommandIntent) -> IntentArgs:
    schema = INTENT_ARGUMENTS.get(intent.name)
    if schema is None:
        raise UnknownIntentError(f"Unknown intent '{intent.name}'")
    try:
        return schema.model_validate(intent.args)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid arguments for {intent.name}: {_describe(e)}") from e


def _resolve_target(args: IntentArgs, context: CommandContext, intent_name: str) -> str:
    # the UI selection always wins; models do not echo ids reliably
    if context.selected_assignment_id:
        if args.id and args.id != context.selected_assignment_id and args.id not in PLACEHOLDER_IDS:
            logger.info(
                "%s: overriding model id %r with selected assignment %r",
                intent_name, args.id, context.selected_assignment_id,
            )
        return context.selected_assignment_id
    if args.id and args.id not in PLACEHOLDER_IDS:
        return args.id
    raise MissingTargetError(
        f"No assignment selected for {intent_name}. Select an assignment on the timeline first."
    )


def interpret(intent: CommandIntent | Dict[str, Any], context: Optional[CommandContext] = None) -> NormalizedCommand:
    """Validate one intent and turn it into a NormalizedCommand.

    Raises MissingTargetError, UnknownIntentError or ValidationError.
    """
    if not isinstance(intent, CommandIntent):
        try:
            intent = CommandIntent.model_validate(intent)
        except PydanticValidationError as e:
            raise ValidationError(f"Malformed intent: {_describe(e)}") from e
    context = context or CommandContext()
    args = _validate(intent)

    if intent.name == "createAssignment":
        if not context.class_name:
            raise ValidationError("createAssignment needs a class to add the assignment to")
        fields = args.model_dump(exclude_none=True)
        if context.files_attached:
            fields["files_used"] = True
        # dates are stored exactly as given
        return NormalizedCommand(
            name=intent.name,
            fields=fields,
            class_slug=context.class_name,
            files=list(context.files),
        )

    if intent.name == "createClassCard":
        return NormalizedCommand(name=intent.name, fields=args.model_dump(exclude_none=True))

    if intent.name == "editAssignment":
        target = _resolve_target(args, context, intent.name)
        # only what the model actually sent is merged
        fields = args.model_dump(exclude_unset=True, exclude={"id"})
        fields = {k: v for k, v in fields.items() if v is not None}
        return NormalizedCommand(
            name=intent.name,
            fields=fields,
            target_id=target,
            class_slug=context.class_name,
        )

    if intent.name == "deleteAssignment":
        target = _resolve_target(args, context, intent.name)
        return NormalizedCommand(name=intent.name, target_id=target, class_slug=context.class_name)

    # recommend
    if context.assignments is None:
        raise ValidationError("recommend needs the caller to supply the assignment collection")
    reference = context.today or date.today()
    if args.current_date:
        try:
            reference = date.fromisoformat(args.current_date)
        except ValueError as e:
            raise ValidationError(f"Invalid currentDate {args.current_date!r}") from e
    return NormalizedCommand(
        name=intent.name,
        assignments=list(context.assignments),
        reference_date=reference,
        class_slug=context.class_name,
    )
