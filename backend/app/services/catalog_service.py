"""
Portfolio Backend — Catalog Service (Certifications & Projects)
=================================================================

What:  Read-only access to the showcase collections.
Who:   Called by the /api/certifications and /api/projects route handlers.

Error Handling Strategy:
    Missing rows become NotFoundError (404). Malformed project ids become
    ValidationError (400) before any query runs. Anything raised by the
    database is wrapped in DatabaseError (500) so no driver detail reaches
    the client.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.catalog import Certification, Project
from app.schemas.catalog import CertificationResponse, ProjectResponse

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


def _certification_response(cert: Certification) -> CertificationResponse:
    return CertificationResponse(
        id=cert.id,
        title=cert.title,
        image_urls=list(cert.image_urls or []),
    )


def _project_response(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        category=project.category,
        title=project.title,
        description=list(project.description or []),
        additional_details=list(project.additional_details or []),
    )


def parse_project_id(raw: str) -> uuid.UUID:
    """
    Validate a project identifier from the URL.

    Raises:
        ValidationError: raw is not a well-formed UUID
    """
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        logger.info("Invalid project ID: %s", raw)
        raise ValidationError(message="Invalid project ID", field="project_id")


class CatalogService:
    """Lookups over certifications and projects."""

    async def list_certifications(self, db: AsyncSession) -> List[CertificationResponse]:
        try:
            result = await db.execute(select(Certification).order_by(Certification.id))
            certifications = list(result.scalars().all())
        except Exception as e:
            logger.error("Error fetching certifications: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching certifications",
                context={"error_type": type(e).__name__},
            )
        return [_certification_response(c) for c in certifications]

    async def get_certification(self, db: AsyncSession, title: str) -> CertificationResponse:
        """
        Fetch one certification by its exact title.

        Raises:
            NotFoundError: no certification has this title (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Certification).where(Certification.title == title)
            )
            certification = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error fetching certification details: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error",
                context={"title": title},
            )

        if certification is None:
            raise NotFoundError(resource="certification", resource_id=title)
        return _certification_response(certification)

    async def list_projects(self, db: AsyncSession, category: str) -> List[ProjectResponse]:
        """
        List projects in a category; the category "all" matches every project.
        """
        query = select(Project)
        if category != ALL_CATEGORIES:
            query = query.where(Project.category == category)
        query = query.order_by(Project.title)

        try:
            result = await db.execute(query)
            projects = list(result.scalars().all())
        except Exception as e:
            logger.error("Error fetching projects: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching projects",
                context={"category": category},
            )
        return [_project_response(p) for p in projects]

    async def get_project(self, db: AsyncSession, project_id: str) -> ProjectResponse:
        """
        Fetch one project by its identifier.

        Raises:
            ValidationError: project_id is malformed (→ 400)
            NotFoundError: no project has this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        pid = parse_project_id(project_id)

        try:
            result = await db.execute(select(Project).where(Project.id == pid))
            project = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error fetching project details: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching project details",
                context={"project_id": project_id},
            )

        if project is None:
            raise NotFoundError(resource="project", resource_id=project_id)
        return _project_response(project)


catalog_service = CatalogService()
