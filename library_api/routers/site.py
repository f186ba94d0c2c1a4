"""
Site Content Router

About us, terms and conditions and the privacy policy share three
routes each:

    GET    /site/<kind>   public
    POST   /site/<kind>   create or replace ("create-<kind>")
    DELETE /site/<kind>   ("delete-<kind>")

FAQs are a regular resource, see routers/catalog.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import DbSession, RequirePermission
from library_api.models import DocumentKind, User
from library_api.responses import envelope_response
from library_api.schemas.site import SiteDocumentWrite
from library_api.services import site as site_service
from library_api.services.rate_limiter import limiter
from library_api.validation import RequestPart, ValidatedRequest, validate_request

settings = get_settings()

router = APIRouter(prefix="/site", tags=["Site Content"])


def _register(kind: DocumentKind) -> None:
    """Add the GET, POST and DELETE routes of one document kind."""
    slug = kind.value.replace("-", "_")
    title = site_service.TITLES[kind]

    def get_document(request: Request, db: DbSession) -> JSONResponse:
        return envelope_response(request, site_service.get(db, kind))

    def write_document(
        request: Request,
        db: DbSession,
        user: Annotated[User, Depends(RequirePermission(f"create-{kind.value}"))],
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request((SiteDocumentWrite, RequestPart.BODY))),
        ],
    ) -> JSONResponse:
        return envelope_response(request, site_service.write(db, user.id, kind, payload.body))

    def delete_document(request: Request, db: DbSession) -> JSONResponse:
        return envelope_response(request, site_service.delete(db, kind))

    get_document.__name__ = f"get_{slug}"
    write_document.__name__ = f"write_{slug}"
    delete_document.__name__ = f"delete_{slug}"

    path = f"/{kind.value}"
    router.get(path, summary=f"Get {title.lower()}")(
        limiter.limit(settings.rate_limit_default)(get_document)
    )
    router.post(path, summary=f"Create or replace {title.lower()}")(
        limiter.limit(settings.rate_limit_write)(write_document)
    )
    router.delete(
        path,
        summary=f"Delete {title.lower()}",
        dependencies=[Depends(RequirePermission(f"delete-{kind.value}"))],
    )(limiter.limit(settings.rate_limit_write)(delete_document))


for document_kind in DocumentKind:
    _register(document_kind)
