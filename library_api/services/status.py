"""Service status: application identity plus a datastore ping."""

import logging

from sqlalchemy import text
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)


def check(db: Session) -> ServiceResult:
    settings = get_settings()

    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except DATASTORE_ERRORS:
        logger.exception("Database ping failed")
        database = "unavailable"

    return ServiceResult.ok(
        {
            "app": settings.app_name,
            "version": settings.api_version,
            "environment": settings.environment,
            "database": database,
        },
        "Service is running.",
    )
