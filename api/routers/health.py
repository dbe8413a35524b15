from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Response

from api.dependencies import health
from schemas import HealthResponse, LivenessResponse, ServiceHealthResponse

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(path="/liveness")
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get(path="/readiness")
async def readiness(
    response: Response,
    usecase: Annotated[
        health.HealthUsecase, Depends(dependency=health.get_health_usecase)
    ],
) -> HealthResponse:
    checks = await usecase.health()
    health_response = HealthResponse(
        services=[
            ServiceHealthResponse(name=name, status=status)
            for name, status in checks.items()
        ]
    )
    if not health_response.status:
        response.status_code = HTTPStatus.SERVICE_UNAVAILABLE

    return health_response
