"""
Status Router

GET /status: application name, version, environment and whether the
datastore answers. Used by load balancers and monitoring.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from library_api.dependencies import DbSession
from library_api.responses import envelope_response
from library_api.services import status as status_service

router = APIRouter(tags=["Status"])


@router.get("/status", summary="Service status")
def get_status(request: Request, db: DbSession) -> JSONResponse:
    return envelope_response(request, status_service.check(db))
