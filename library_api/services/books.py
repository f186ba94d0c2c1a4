"""
Book Service

Books are a regular resource whose writes reference other records.
Before anything is written BookService checks that every referenced
writer, publication, translator and subject exists:

    {"writer": "<unknown id>"}  -> 400 "Invalid writer ID: <id>."

Subjects
========
A create sets the subject list. An update either replaces it
(`subjects`) or edits it (`addSubjects` / `removeSubjects`):
- adding a subject the book already has is rejected
- removing a subject the book does not have is rejected
- the same id in both lists is rejected
"""

import logging
from typing import Any

from sqlalchemy import ColumnElement, select
from sqlalchemy.orm import Session

from library_api.models import Book, Publication, Subject, Translator, Writer
from library_api.schemas.book import BookResponse
from library_api.services.resource import MatchMode, ResourceService
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)

# Foreign key column -> (model, name used in messages)
REFERENCES = {
    "writer_id": (Writer, "writer"),
    "publication_id": (Publication, "publication"),
    "translator_id": (Translator, "translator"),
}


def _invalid(kind: str, value: str) -> ServiceResult:
    logger.warning(f"Rejected book write with unknown {kind} {value}")
    return ServiceResult.fail(f"Invalid {kind} ID: {value}.")


class BookService(ResourceService[Book]):
    """ResourceService for books with reference and subject checks."""

    def __init__(self) -> None:
        super().__init__(
            Book,
            BookResponse,
            label="book",
            filters={"summary": MatchMode.CONTAINS},
        )

    def _load_subjects(
        self,
        db: Session,
        subject_ids: list[str],
    ) -> tuple[list[Subject], str | None]:
        """Subjects for the ids, in order, plus the first unknown id if any."""
        unique_ids = list(dict.fromkeys(subject_ids))
        if not unique_ids:
            return [], None

        found = {
            subject.id: subject
            for subject in db.execute(
                select(Subject).where(Subject.id.in_(unique_ids))
            ).scalars()
        }
        for subject_id in unique_ids:
            if subject_id not in found:
                return [], subject_id
        return [found[subject_id] for subject_id in unique_ids], None

    def _prepare(
        self,
        db: Session,
        values: dict[str, Any],
        instance: Book | None = None,
    ) -> ServiceResult | None:
        for column, (model, kind) in REFERENCES.items():
            value = values.get(column)
            if value is not None and db.get(model, value) is None:
                return _invalid(kind, value)

        if values.get("subjects") is not None:
            subjects, unknown = self._load_subjects(db, values["subjects"])
            if unknown is not None:
                return _invalid("subject", unknown)
            values["subjects"] = subjects

        to_add = values.pop("add_subjects", None) or []
        to_remove = values.pop("remove_subjects", None) or []
        if instance is None or not (to_add or to_remove):
            return None

        overlap = set(to_add) & set(to_remove)
        if overlap:
            return ServiceResult.fail(
                f"Subject ID {sorted(overlap)[0]} cannot be both added and removed."
            )

        current = {subject.id: subject for subject in instance.subjects}
        for subject_id in to_add:
            if subject_id in current:
                return ServiceResult.fail(
                    f"Subject ID {subject_id} is already assigned to this book."
                )
        for subject_id in to_remove:
            if subject_id not in current:
                return ServiceResult.fail(
                    f"Subject ID {subject_id} is not assigned to this book."
                )

        added, unknown = self._load_subjects(db, to_add)
        if unknown is not None:
            return _invalid("subject", unknown)

        kept = [subject for subject in instance.subjects if subject.id not in to_remove]
        values["subjects"] = kept + added
        return None

    def _filter_clause(self, field: str, value: Any) -> ColumnElement[bool]:
        if field == "subject":
            return Book.subjects.any(Subject.id == value)
        return super()._filter_clause(field, value)


book_service = BookService()
