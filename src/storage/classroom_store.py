from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from greedy.errors import NotFoundError
from greedy.models import Assignment, ClassCard, slugify
from storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

CLASSES_KEY = "greedy_classes"
ASSIGNMENTS_KEY_PREFIX = "greedy_assignments_"


def assignments_key(class_slug: str) -> str:
    return f"{ASSIGNMENTS_KEY_PREFIX}{class_slug}"


class ClassroomStore:
    """Classes and their per-class assignment collections on top of a key-value store."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    # classes

    def list_classes(self) -> List[ClassCard]:
        classes = []
        for raw in self.kv.get(CLASSES_KEY, []) or []:
            try:
                classes.append(ClassCard.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed class record %r: %s", raw, e)
        return classes

    def save_classes(self, classes: List[ClassCard]) -> None:
        self.kv.set(CLASSES_KEY, [c.to_record() for c in classes])

    def get_class(self, slug: str) -> ClassCard:
        for card in self.list_classes():
            if card.slug == slug:
                return card
        raise NotFoundError(f"Class '{slug}' not found")

    def has_class(self, slug: str) -> bool:
        return any(card.slug == slug for card in self.list_classes())

    def unique_slug(self, name: str) -> str:
        base = slugify(name)
        taken = {card.slug for card in self.list_classes()}
        slug, n = base, 2
        while slug in taken:
            slug = f"{base}-{n}"
            n += 1
        return slug

    def add_class(self, card: ClassCard) -> ClassCard:
        classes = self.list_classes()
        classes.append(card)
        self.save_classes(classes)
        return card

    # assignments

    def list_assignments(self, class_slug: str) -> List[Assignment]:
        assignments = []
        for raw in self.kv.get(assignments_key(class_slug), []) or []:
            try:
                assignments.append(Assignment.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed assignment record in %s: %s", class_slug, e)
        return assignments

    def save_assignments(self, class_slug: str, assignments: List[Assignment]) -> None:
        self.kv.set(assignments_key(class_slug), [a.to_record() for a in assignments])

    def find_assignment(
        self, assignment_id: str, class_slug: Optional[str] = None
    ) -> Tuple[str, List[Assignment], int]:
        """Locate an assignment; returns (class slug, that class's collection, index).

        The given class is searched first, then every other known class.
        """
        slugs = [c.slug for c in self.list_classes()]
        if class_slug:
            slugs = [class_slug] + [s for s in slugs if s != class_slug]
        for slug in slugs:
            collection = self.list_assignments(slug)
            for index, assignment in enumerate(collection):
                if assignment.id == assignment_id:
                    return slug, collection, index
        raise NotFoundError(f"Assignment '{assignment_id}' not found")
