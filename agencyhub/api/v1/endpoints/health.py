from fastapi import APIRouter, Depends
from pydantic import BaseModel

from agencyhub.api.dependencies import get_upstream_client
from agencyhub.services.upstream import AgencyHubClient

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    upstream: str


@router.get("", response_model=HealthResponse)
def health_check(client: AgencyHubClient = Depends(get_upstream_client)):
    """Check the service and the upstream API."""
    upstream_status = "healthy" if client.ping() else "unreachable"
    status = "healthy" if upstream_status == "healthy" else "degraded"
    return HealthResponse(status=status, upstream=upstream_status)
