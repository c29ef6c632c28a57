"""
Portfolio Backend — Catalog Models (Certifications & Projects)
================================================================

What:  ORM models for the read-only showcase collections.
Who:   Read by CatalogService; rows are loaded by the site owner directly
       in the database (no creation endpoints exist).

Why JSON columns for image_urls / description / additional_details:
    Each is an ordered list of short strings that is always read whole and
    never queried into, so a child table would only add joins.
"""

import uuid
from typing import List

from sqlalchemy import JSON, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Certification(Base):
    """A certificate shown on the portfolio; looked up by its unique title."""

    __tablename__ = "certifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Display title, also the lookup key for /api/certifications/{title}",
    )

    image_urls: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered certificate image references",
    )

    def __repr__(self) -> str:
        return f"<Certification(id={self.id}, title='{self.title}')>"


class Project(Base):
    """
    A portfolio project.

    The UUID primary key is the opaque identifier exposed as `id` in the API;
    it is validated before lookup so malformed ids never reach the database.
    """

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    category: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    additional_details: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("idx_projects_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, category='{self.category}', title='{self.title}')>"
