"""
Liveness probe for the PlanVision API.
"""
from fastapi import APIRouter, Request
from planvision.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Report that the process is serving, with the running API version."""
    return HealthResponse(status="ok", version=request.app.version)
