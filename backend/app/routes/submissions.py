"""
Portfolio Backend — Submission Routes
=======================================

What:  Visitor forms and their admin listings.

Route Inventory:
    POST /api/contact          save a contact request, return owner contact info
    GET  /api/user-details     all contact requests
    POST /api/feedback         save feedback
    GET  /api/feedback         all feedback
    POST /api/query            save a question
    GET  /api/query            all questions
    GET  /api/user-profiles    all signed-in user profiles
    POST /api/authenticate     admin password check

Bodies reach these handlers already stripped of markup by
SanitizeBodyMiddleware.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.submission import (
    AuthRequest,
    AuthResponse,
    ContactCreate,
    ContactResponse,
    ContactSubmissionResponse,
    FeedbackCreate,
    FeedbackResponse,
    QueryCreate,
    QueryResponse,
    UserProfileResponse,
)
from app.services.auth_service import verify_password
from app.services.submission_service import submission_service

router = APIRouter(prefix="/api", tags=["Submissions"])

_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


@router.post(
    "/contact",
    status_code=status.HTTP_201_CREATED,
    response_model=ContactResponse,
    responses=_SERVER_ERROR,
    summary="Submit a contact request",
)
async def submit_contact(
    payload: ContactCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ContactResponse:
    return await submission_service.submit_contact(db, payload)


@router.get(
    "/user-details",
    response_model=List[ContactSubmissionResponse],
    responses=_SERVER_ERROR,
    summary="List contact requests",
)
async def list_user_details(
    db: AsyncSession = Depends(get_db_session),
) -> List[ContactSubmissionResponse]:
    return await submission_service.list_contacts(db)


@router.post(
    "/feedback",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=_SERVER_ERROR,
    summary="Submit feedback",
)
async def submit_feedback(
    payload: FeedbackCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await submission_service.submit_feedback(db, payload)


@router.get(
    "/feedback",
    response_model=List[FeedbackResponse],
    responses=_SERVER_ERROR,
    summary="List feedback",
)
async def list_feedback(
    db: AsyncSession = Depends(get_db_session),
) -> List[FeedbackResponse]:
    return await submission_service.list_feedback(db)


@router.post(
    "/query",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=_SERVER_ERROR,
    summary="Submit a question",
)
async def submit_query(
    payload: QueryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await submission_service.submit_query(db, payload)


@router.get(
    "/query",
    response_model=List[QueryResponse],
    responses=_SERVER_ERROR,
    summary="List questions",
)
async def list_queries(
    db: AsyncSession = Depends(get_db_session),
) -> List[QueryResponse]:
    return await submission_service.list_queries(db)


@router.get(
    "/user-profiles",
    response_model=List[UserProfileResponse],
    responses=_SERVER_ERROR,
    summary="List user profiles",
)
async def list_user_profiles(
    db: AsyncSession = Depends(get_db_session),
) -> List[UserProfileResponse]:
    return await submission_service.list_user_profiles(db)


@router.post(
    "/authenticate",
    response_model=AuthResponse,
    summary="Check the admin password",
    description="Always answers 200; `authenticated` says whether the password matched.",
)
async def authenticate(payload: AuthRequest) -> AuthResponse:
    return AuthResponse(authenticated=verify_password(payload.password))
