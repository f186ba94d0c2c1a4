"""
Generic Resource Service

Most resources of the library (subjects, writers, publications, FAQs...)
need exactly the same six operations. ResourceService implements them
once against any SQLAlchemy model:

    subjects = ResourceService(Subject, SubjectResponse, label="subject")

    subjects.create(db, requester_id, data)      -> 201 / 409
    subjects.list(db, query)                     -> 200
    subjects.get_by_id(db, subject_id)           -> 200 / 404
    subjects.update(db, requester_id, id, data)  -> 200 / 400 / 404 / 409
    subjects.delete_many(db, ids)                -> 200
    subjects.delete_one(db, subject_id)          -> 200 / 404

Error Handling
==============
Operations never raise for expected outcomes. Duplicates, unknown ids
and empty updates come back as a failed ServiceResult. Datastore errors
are logged with their traceback and reported as a generic 500 result,
so no internal detail reaches the client.

Customisation
=============
Subclasses override the hooks instead of the operations:
- _prepare(): check/resolve references before a write
- _after_create(): extra writes in the same transaction as a create
- _filter_clause(): resource specific list filters
"""

import logging
import math
from enum import Enum
from typing import Any, Generic, TypeVar

from fastapi import status
from pydantic import BaseModel
from pydantic.alias_generators import to_snake
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from library_api.schemas.common import Page, PageQuery
from library_api.services.results import BulkDeleteResult, ServiceResult

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Failures that are unexpected for a service: logged, reported as 500
DATASTORE_ERRORS = (SQLAlchemyError, OSError)

PAGING_FIELDS = {"page", "limit", "sort"}


class MatchMode(str, Enum):
    """How a list filter compares against the column."""

    EXACT = "exact"
    CONTAINS = "contains"  # case-insensitive substring


class ResourceService(Generic[ModelT]):
    """
    CRUD operations for one model, returning ServiceResults.

    Args:
        model: SQLAlchemy model class
        response_schema: Pydantic model used to serialise records
        label: Singular human name ("subject", "book request")
        plural: Plural human name, defaults to label + "s"
        unique_field: Column that must be unique, None to skip the check
        filters: Match mode per list filter; unlisted filters are exact
    """

    default_filters = {
        "name": MatchMode.CONTAINS,
        "created_by": MatchMode.CONTAINS,
        "updated_by": MatchMode.CONTAINS,
    }

    def __init__(
        self,
        model: type[ModelT],
        response_schema: type[BaseModel],
        *,
        label: str,
        plural: str | None = None,
        unique_field: str | None = "name",
        filters: dict[str, MatchMode] | None = None,
    ) -> None:
        self.model = model
        self.response_schema = response_schema
        self.label = label
        self.plural = plural or f"{label}s"
        self.unique_field = unique_field
        self.filters = {**self.default_filters, **(filters or {})}

    @property
    def title(self) -> str:
        return self.label[:1].upper() + self.label[1:]

    # =========================================================================
    # Hooks
    # =========================================================================
    def _prepare(
        self,
        db: Session,
        values: dict[str, Any],
        instance: ModelT | None = None,
    ) -> ServiceResult | None:
        """
        Validate and resolve values before they are written.

        May rewrite `values` in place (e.g. ids into related objects).
        Return a failed ServiceResult to stop the operation.
        instance is None on create and the record being changed on update.
        """
        return None

    def _after_create(self, db: Session, instance: ModelT) -> None:
        """Extra writes committed together with a newly created record."""

    def _filter_clause(self, field: str, value: Any) -> ColumnElement[bool]:
        column = getattr(self.model, field)
        if self.filters.get(field) is MatchMode.CONTAINS:
            return column.icontains(str(value), autoescape=True)
        return column == value

    # =========================================================================
    # Helpers
    # =========================================================================
    def serialize(self, instance: ModelT) -> BaseModel:
        return self.response_schema.model_validate(instance)

    def not_found(self) -> ServiceResult:
        return ServiceResult.not_found(f"No {self.label} found with the provided ID.")

    def _find_duplicate(
        self,
        db: Session,
        values: dict[str, Any],
        exclude_id: str | None = None,
    ) -> ServiceResult | None:
        if self.unique_field is None or values.get(self.unique_field) is None:
            return None

        value = values[self.unique_field]
        stmt = select(self.model.id).where(
            getattr(self.model, self.unique_field) == value
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)

        if db.execute(stmt).first() is not None:
            logger.warning(f"Duplicate {self.label} {self.unique_field}: {value}")
            return self._conflict(value)
        return None

    def _conflict(self, value: Any) -> ServiceResult:
        return ServiceResult.conflict(
            f'{self.title} {self.unique_field} "{value}" already exists.'
        )

    def _ordering(self, sort: str) -> list[Any]:
        descending = sort.startswith("-")
        column = getattr(self.model, to_snake(sort.lstrip("-")))
        # id breaks ties so pages never overlap
        return [column.desc() if descending else column.asc(), self.model.id]

    # =========================================================================
    # Operations
    # =========================================================================
    def create(
        self,
        db: Session,
        requester_id: str | None,
        data: BaseModel,
    ) -> ServiceResult:
        """Insert a record stamped with its creator, unless the key is taken."""
        values = data.model_dump()

        try:
            duplicate = self._find_duplicate(db, values)
            if duplicate is not None:
                return duplicate

            rejected = self._prepare(db, values)
            if rejected is not None:
                return rejected

            instance = self.model(**values, created_by=requester_id)
            db.add(instance)
            self._after_create(db, instance)
            db.commit()
            db.refresh(instance)
            payload = self.serialize(instance)
        except IntegrityError:
            # Lost the race between the duplicate check and the insert
            db.rollback()
            logger.warning(f"Integrity error creating {self.label}", exc_info=True)
            return self._conflict(values.get(self.unique_field))
        except DATASTORE_ERRORS:
            db.rollback()
            logger.exception(f"Failed to create {self.label}")
            return ServiceResult.internal_error(f"Failed to create {self.label}.")

        logger.info(f"{self.title} created: {instance.id}")
        return ServiceResult.ok(
            payload,
            f"{self.title} created successfully.",
            status.HTTP_201_CREATED,
        )

    def get_by_id(self, db: Session, resource_id: str) -> ServiceResult:
        try:
            instance = db.get(self.model, resource_id)
            if instance is None:
                return self.not_found()
            payload = self.serialize(instance)
        except DATASTORE_ERRORS:
            logger.exception(f"Failed to fetch {self.label} {resource_id}")
            return ServiceResult.internal_error(f"Failed to fetch {self.label}.")

        return ServiceResult.ok(payload, f"{self.title} fetched successfully.")

    def update(
        self,
        db: Session,
        requester_id: str | None,
        resource_id: str,
        data: BaseModel,
    ) -> ServiceResult:
        """
        Apply a partial update and return the updated record.

        Only fields present in the request are written. An empty payload is
        rejected before the datastore is touched.
        """
        values = data.model_dump(exclude_unset=True)
        if not values:
            return ServiceResult.fail("Please provide update data.")

        try:
            instance = db.get(self.model, resource_id)
            if instance is None:
                return self.not_found()

            duplicate = self._find_duplicate(db, values, exclude_id=resource_id)
            if duplicate is not None:
                return duplicate

            rejected = self._prepare(db, values, instance)
            if rejected is not None:
                return rejected

            for field, value in values.items():
                setattr(instance, field, value)
            instance.updated_by = requester_id

            db.commit()
            db.refresh(instance)
            payload = self.serialize(instance)
        except IntegrityError:
            db.rollback()
            logger.warning(f"Integrity error updating {self.label} {resource_id}", exc_info=True)
            return self._conflict(values.get(self.unique_field))
        except DATASTORE_ERRORS:
            db.rollback()
            logger.exception(f"Failed to update {self.label} {resource_id}")
            return ServiceResult.internal_error(f"Failed to update {self.label}.")

        logger.info(f"{self.title} updated: {resource_id}")
        return ServiceResult.ok(payload, f"{self.title} updated successfully.")

    def delete_many(self, db: Session, ids: list[str]) -> ServiceResult:
        """
        Delete each id on its own, one after the other.

        A failure is rolled back for that id only and the loop goes on.
        """
        outcome = BulkDeleteResult()

        for resource_id in ids:
            try:
                instance = db.get(self.model, resource_id)
                if instance is None:
                    outcome.not_found.append(resource_id)
                    continue
                db.delete(instance)
                db.commit()
                outcome.deleted.append(resource_id)
            except DATASTORE_ERRORS:
                db.rollback()
                logger.exception(f"Failed to delete {self.label} {resource_id}")
                outcome.failed.append(resource_id)

        logger.info(f"Bulk delete of {self.plural}: {outcome.message}")
        return outcome.to_result()

    def delete_one(self, db: Session, resource_id: str) -> ServiceResult:
        try:
            instance = db.get(self.model, resource_id)
            if instance is None:
                return self.not_found()
            db.delete(instance)
            db.commit()
        except DATASTORE_ERRORS:
            db.rollback()
            logger.exception(f"Failed to delete {self.label} {resource_id}")
            return ServiceResult.internal_error(f"Failed to delete {self.label}.")

        logger.info(f"{self.title} deleted: {resource_id}")
        return ServiceResult.ok(message=f"{self.title} deleted successfully.")

    def list(self, db: Session, query: PageQuery) -> ServiceResult:
        """
        Filtered, sorted page of records with pagination metadata.

        The page size is clamped to what is left after skipping the
        previous pages, so a page past the end is simply empty.
        """
        filters = query.model_dump(exclude_none=True, exclude=PAGING_FIELDS)
        clauses = [self._filter_clause(field, value) for field, value in filters.items()]

        try:
            count_stmt = select(func.count()).select_from(self.model).where(*clauses)
            total = db.execute(count_stmt).scalar_one()

            offset = (query.page - 1) * query.limit
            page_size = max(0, min(query.limit, total - offset))

            items: list[BaseModel] = []
            if page_size:
                stmt = (
                    select(self.model)
                    .where(*clauses)
                    .order_by(*self._ordering(query.sort))
                    .offset(offset)
                    .limit(page_size)
                )
                items = [self.serialize(row) for row in db.execute(stmt).scalars()]
        except DATASTORE_ERRORS:
            logger.exception(f"Failed to fetch {self.plural}")
            return ServiceResult.internal_error(f"Failed to fetch {self.plural}.")

        page = Page(
            items=items,
            total_items=total,
            total_pages=math.ceil(total / query.limit),
            current_page=query.page,
            page_size=page_size,
            sort=query.sort,
        )
        message = (
            f"{len(items)} {self.plural} fetched successfully."
            if items
            else f"No {self.plural} found."
        )
        return ServiceResult.ok(page, message)
