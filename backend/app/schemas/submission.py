"""
Portfolio Backend — Submission & Profile Schemas
==================================================

What:  Request bodies for the visitor forms (contact, feedback, query),
       their admin listings, user profiles and the admin password check.
Why:   Required-field presence is enforced here; FastAPI answers 422 when a
       field is missing before any handler runs.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.visit import Coordinates


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ContactCreate(CamelModel):
    full_name: str = Field(min_length=1, max_length=255)
    wants_collaboration: bool = Field(default=False)
    phone_number: str = Field(min_length=1, max_length=32)


class FeedbackCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=320)
    feedback: str = Field(min_length=1)


class QueryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=320)
    query: str = Field(min_length=1)


class AuthRequest(CamelModel):
    password: str


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AdminInfo(CamelModel):
    """Owner contact details shown after a contact submission."""
    admin: str
    contact_number: str
    address: str


class ContactResponse(CamelModel):
    message: str = Field(default="Contact submitted successfully")
    admin_info: AdminInfo


class ContactSubmissionResponse(CamelModel):
    id: int
    full_name: str
    wants_collaboration: bool
    phone_number: str
    created_at: datetime


class FeedbackResponse(CamelModel):
    id: int
    name: str
    email: str
    feedback: str
    created_at: datetime


class QueryResponse(CamelModel):
    id: int
    name: str
    email: str
    query: str
    created_at: datetime


class UserProfileResponse(CamelModel):
    id: int
    email: str
    username: str
    location: Optional[Coordinates] = None
    last_sign_in_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    authenticated: bool
