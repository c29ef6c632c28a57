"""
Portfolio Backend — Resume Click Routes
=========================================

What:  POST /api/resume-clicks/increment and GET /api/resume-clicks.
       The count lives in memory and resets when the process restarts.
"""

from fastapi import APIRouter

from app.schemas.common import CountResponse
from app.services.resume_counter import resume_click_counter

router = APIRouter(prefix="/api/resume-clicks", tags=["Resume"])


@router.post(
    "/increment",
    response_model=CountResponse,
    summary="Count a resume click",
)
async def increment_resume_clicks() -> CountResponse:
    return CountResponse(count=resume_click_counter.increment())


@router.get(
    "",
    response_model=CountResponse,
    summary="Current resume click count",
)
async def get_resume_clicks() -> CountResponse:
    return CountResponse(count=resume_click_counter.value)
