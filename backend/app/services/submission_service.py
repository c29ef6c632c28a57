"""
Portfolio Backend — Submission Service
========================================

What:  Stores visitor form submissions (contact, feedback, query) and lists
       them, together with the externally populated user profiles, for the
       admin views.
Who:   Called by the submissions and profiles route handlers.

Each create method performs exactly one insert; failures surface as
DatabaseError with no retry.
"""

import logging
from typing import List, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import Base
from app.exceptions import DatabaseError
from app.models.submission import ContactSubmission, FeedbackEntry, QueryEntry
from app.models.user_profile import UserProfile
from app.schemas.common import MessageResponse
from app.schemas.submission import (
    AdminInfo,
    ContactCreate,
    ContactResponse,
    ContactSubmissionResponse,
    FeedbackCreate,
    FeedbackResponse,
    QueryCreate,
    QueryResponse,
    UserProfileResponse,
)
from app.schemas.visit import Coordinates

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SubmissionService:
    """Create and list visitor submissions."""

    async def _insert(self, db: AsyncSession, row: Base, error_message: str) -> None:
        try:
            db.add(row)
            await db.flush()
        except Exception as e:
            logger.error("%s: %s", error_message, str(e), exc_info=True)
            raise DatabaseError(
                message=error_message,
                context={"error_type": type(e).__name__, "table": row.__tablename__},
            )

    async def _list(
        self, db: AsyncSession, model: Type[ModelT], error_message: str
    ) -> List[ModelT]:
        try:
            result = await db.execute(select(model).order_by(model.id))
            return list(result.scalars().all())
        except Exception as e:
            logger.error("%s: %s", error_message, str(e), exc_info=True)
            raise DatabaseError(
                message=error_message,
                context={"error_type": type(e).__name__, "table": model.__tablename__},
            )

    # ── Contact ───────────────────────────────────────────────────────────

    async def submit_contact(self, db: AsyncSession, payload: ContactCreate) -> ContactResponse:
        """Save a contact request and return the owner's contact details."""
        await self._insert(
            db,
            ContactSubmission(
                full_name=payload.full_name,
                wants_collaboration=payload.wants_collaboration,
                phone_number=payload.phone_number,
            ),
            "Error submitting contact",
        )
        logger.info("Contact submission stored (collaboration=%s)", payload.wants_collaboration)
        return ContactResponse(
            message="Contact submitted successfully",
            admin_info=AdminInfo(
                admin=settings.admin_name,
                contact_number=settings.admin_contact_number,
                address=settings.admin_address,
            ),
        )

    async def list_contacts(self, db: AsyncSession) -> List[ContactSubmissionResponse]:
        rows = await self._list(db, ContactSubmission, "Error fetching user details")
        return [
            ContactSubmissionResponse(
                id=r.id,
                full_name=r.full_name,
                wants_collaboration=r.wants_collaboration,
                phone_number=r.phone_number,
                created_at=r.created_at,
            )
            for r in rows
        ]

    # ── Feedback ──────────────────────────────────────────────────────────

    async def submit_feedback(self, db: AsyncSession, payload: FeedbackCreate) -> MessageResponse:
        await self._insert(
            db,
            FeedbackEntry(name=payload.name, email=payload.email, feedback=payload.feedback),
            "Error submitting feedback",
        )
        return MessageResponse(message="Feedback submitted successfully")

    async def list_feedback(self, db: AsyncSession) -> List[FeedbackResponse]:
        rows = await self._list(db, FeedbackEntry, "Error fetching feedbacks")
        return [
            FeedbackResponse(
                id=r.id, name=r.name, email=r.email, feedback=r.feedback, created_at=r.created_at
            )
            for r in rows
        ]

    # ── Query ─────────────────────────────────────────────────────────────

    async def submit_query(self, db: AsyncSession, payload: QueryCreate) -> MessageResponse:
        await self._insert(
            db,
            QueryEntry(name=payload.name, email=payload.email, query=payload.query),
            "Error submitting query",
        )
        return MessageResponse(message="Query submitted successfully")

    async def list_queries(self, db: AsyncSession) -> List[QueryResponse]:
        rows = await self._list(db, QueryEntry, "Error fetching queries")
        return [
            QueryResponse(
                id=r.id, name=r.name, email=r.email, query=r.query, created_at=r.created_at
            )
            for r in rows
        ]

    # ── User profiles ─────────────────────────────────────────────────────

    async def list_user_profiles(self, db: AsyncSession) -> List[UserProfileResponse]:
        rows = await self._list(db, UserProfile, "Error fetching user profiles")
        return [
            UserProfileResponse(
                id=r.id,
                email=r.email,
                username=r.username,
                location=(
                    Coordinates(latitude=r.latitude, longitude=r.longitude)
                    if r.latitude is not None and r.longitude is not None
                    else None
                ),
                last_sign_in_at=r.last_sign_in_at,
            )
            for r in rows
        ]


submission_service = SubmissionService()
