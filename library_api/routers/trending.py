"""
Trending Router

GET /trending/{books|writers|publications|subjects}: what members
favourite most. Public.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import DbSession
from library_api.responses import envelope_response
from library_api.services import trending
from library_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(prefix="/trending", tags=["Trending"])


@router.get("/books", summary="Most favourited books")
@limiter.limit(settings.rate_limit_default)
def trending_books(request: Request, db: DbSession) -> JSONResponse:
    return envelope_response(request, trending.books(db))


@router.get("/writers", summary="Writers of the most favourited books")
@limiter.limit(settings.rate_limit_default)
def trending_writers(request: Request, db: DbSession) -> JSONResponse:
    return envelope_response(request, trending.writers(db))


@router.get("/publications", summary="Publications of the most favourited books")
@limiter.limit(settings.rate_limit_default)
def trending_publications(request: Request, db: DbSession) -> JSONResponse:
    return envelope_response(request, trending.publications(db))


@router.get("/subjects", summary="Subjects of the most favourited books")
@limiter.limit(settings.rate_limit_default)
def trending_subjects(request: Request, db: DbSession) -> JSONResponse:
    return envelope_response(request, trending.subjects(db))
