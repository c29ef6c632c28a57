"""
Portfolio Backend — Catalog Routes
====================================

What:  Read endpoints for certifications and projects.

Route Inventory:
    GET /api/certifications                    all certifications
    GET /api/certifications/{title}            one certification, 404 if missing
    GET /api/projects/category/{category}      projects in a category ("all" = every project)
    GET /api/projects/details/{project_id}     one project, 400 malformed id, 404 missing

Caching:
    Catalog rows only change when the owner edits the database, so responses
    may be cached briefly by the browser.
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.catalog import CertificationResponse, ProjectResponse
from app.schemas.common import ErrorResponse
from app.services.catalog_service import catalog_service

CATALOG_CACHE_CONTROL = "public, max-age=300"

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get(
    "/certifications",
    response_model=List[CertificationResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List certifications",
)
async def list_certifications(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[CertificationResponse]:
    result = await catalog_service.list_certifications(db)
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return result


@router.get(
    "/certifications/{title}",
    response_model=CertificationResponse,
    responses={
        404: {"description": "Certification not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a certification by title",
)
async def get_certification(
    title: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> CertificationResponse:
    result = await catalog_service.get_certification(db, title)
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return result


@router.get(
    "/projects/category/{category}",
    response_model=List[ProjectResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List projects in a category",
    description="Use the category `all` to list every project.",
)
async def list_projects(
    category: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[ProjectResponse]:
    result = await catalog_service.list_projects(db, category)
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return result


@router.get(
    "/projects/details/{project_id}",
    response_model=ProjectResponse,
    responses={
        400: {"description": "Malformed project ID", "model": ErrorResponse},
        404: {"description": "Project not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a project by ID",
)
async def get_project(
    project_id: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    """
    project_id is taken as a plain string and validated by the service, so a
    malformed id yields 400 (not FastAPI's 422 for a typed UUID parameter).
    """
    result = await catalog_service.get_project(db, project_id)
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return result
