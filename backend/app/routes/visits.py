"""
Portfolio Backend — Visitor Tracking Routes
=============================================

What:  GET /api/visited, GET /api/visited/last, POST /api/visited/location.
Who:   Called by the portfolio frontend once the visitor grants geolocation,
       and by the admin dashboard map.

The network address and device fingerprint are never taken from the body;
they are derived from the request by the dependencies below.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.visit import LocationRecordResponse, LocationReport, VisitResponse
from app.services.identity import extract_network_address, generate_fingerprint
from app.services.visit_service import visit_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/visited", tags=["Visits"])


def client_network_address(request: Request) -> str:
    return extract_network_address(request)


def client_fingerprint(request: Request) -> str:
    return generate_fingerprint(request)


@router.get(
    "/last",
    response_model=Optional[VisitResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Most recent visit",
    description="Returns the most recently recorded visit from any client, or null.",
)
async def get_last_visit(
    db: AsyncSession = Depends(get_db_session),
) -> Optional[VisitResponse]:
    return await visit_service.get_last_visit(db)


@router.get(
    "",
    response_model=List[VisitResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="All visits",
    description="Returns every recorded visit, newest first.",
)
async def list_visits(
    db: AsyncSession = Depends(get_db_session),
) -> List[VisitResponse]:
    return await visit_service.list_visits(db)


@router.post(
    "/location",
    status_code=status.HTTP_201_CREATED,
    response_model=LocationRecordResponse,
    responses={
        200: {"description": "Not stored: client moved less than the threshold", "model": LocationRecordResponse},
        201: {"description": "Location stored", "model": LocationRecordResponse},
        400: {"description": "Client address unavailable", "model": ErrorResponse},
        422: {"description": "Unprocessable location", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Report the visitor's location",
    description=(
        "Stores the reported coordinates unless this client's previous visit is "
        "closer than the movement threshold (1 km by default)."
    ),
)
async def record_location(
    report: LocationReport,
    response: Response,
    network_address: str = Depends(client_network_address),
    fingerprint: str = Depends(client_fingerprint),
    db: AsyncSession = Depends(get_db_session),
) -> LocationRecordResponse:
    """
    Status codes:
        201: a new visit row was written
        200: nothing written, the client has not moved far enough
    """
    result = await visit_service.record_location(
        db=db,
        network_address=network_address,
        fingerprint=fingerprint,
        latitude=report.latitude,
        longitude=report.longitude,
    )
    if not result.stored:
        response.status_code = status.HTTP_200_OK
    return result
