"""
Portfolio Backend — Catalog Schemas
=====================================

What:  Response contracts for certifications and projects.
"""

import uuid
from typing import List

from pydantic import Field

from app.schemas.common import CamelModel


class CertificationResponse(CamelModel):
    id: int
    title: str
    image_urls: List[str] = Field(default_factory=list, description="Ordered image references")


class ProjectResponse(CamelModel):
    id: uuid.UUID = Field(description="Opaque project identifier")
    category: str
    title: str
    description: List[str] = Field(default_factory=list)
    additional_details: List[str] = Field(default_factory=list)
