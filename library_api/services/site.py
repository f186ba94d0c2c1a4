"""
Site Document Service

About us, terms and conditions and the privacy policy are single
documents, one row per DocumentKind. Writing one creates it the first
time (201) and replaces its text afterwards (200).
"""

import logging

from fastapi import status
from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models import DocumentKind, SiteDocument
from library_api.schemas.site import SiteDocumentResponse, SiteDocumentWrite
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)

TITLES = {
    DocumentKind.ABOUT_US: "About us",
    DocumentKind.TERMS_AND_CONDITIONS: "Terms and conditions",
    DocumentKind.PRIVACY_POLICY: "Privacy policy",
}


def _find(db: Session, kind: DocumentKind) -> SiteDocument | None:
    return db.execute(
        select(SiteDocument).where(SiteDocument.kind == kind.value)
    ).scalar_one_or_none()


def _not_found(kind: DocumentKind) -> ServiceResult:
    return ServiceResult.not_found(f"{TITLES[kind]} not found.")


def get(db: Session, kind: DocumentKind) -> ServiceResult:
    try:
        document = _find(db, kind)
        if document is None:
            return _not_found(kind)
        payload = SiteDocumentResponse.model_validate(document)
    except DATASTORE_ERRORS:
        logger.exception(f"Failed to fetch {kind.value}")
        return ServiceResult.internal_error(f"Failed to fetch {TITLES[kind].lower()}.")

    return ServiceResult.ok(payload, f"{TITLES[kind]} fetched successfully.")


def write(
    db: Session,
    requester_id: str | None,
    kind: DocumentKind,
    data: SiteDocumentWrite,
) -> ServiceResult:
    """Create the document, or replace it when it already exists."""
    try:
        document = _find(db, kind)
        created = document is None
        if created:
            document = SiteDocument(kind=kind.value, created_by=requester_id, **data.model_dump())
            db.add(document)
        else:
            for field, value in data.model_dump().items():
                setattr(document, field, value)
            document.updated_by = requester_id
        db.commit()
        db.refresh(document)
        payload = SiteDocumentResponse.model_validate(document)
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to save {kind.value}")
        return ServiceResult.internal_error(f"Failed to save {TITLES[kind].lower()}.")

    if created:
        logger.info(f"Site document created: {kind.value}")
        return ServiceResult.ok(
            payload,
            f"{TITLES[kind]} created successfully.",
            status.HTTP_201_CREATED,
        )
    logger.info(f"Site document updated: {kind.value}")
    return ServiceResult.ok(payload, f"{TITLES[kind]} updated successfully.")


def delete(db: Session, kind: DocumentKind) -> ServiceResult:
    try:
        document = _find(db, kind)
        if document is None:
            return _not_found(kind)
        db.delete(document)
        db.commit()
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to delete {kind.value}")
        return ServiceResult.internal_error(f"Failed to delete {TITLES[kind].lower()}.")

    logger.info(f"Site document deleted: {kind.value}")
    return ServiceResult.ok(message=f"{TITLES[kind]} deleted successfully.")
