"""Product API endpoints."""

from fastapi import APIRouter, Depends

from agencyhub.api.dependencies import get_upstream_client
from agencyhub.api.helpers import fetch_collections
from agencyhub.services.heat_map_service import build_heat_map
from agencyhub.services.upstream import AgencyHubClient
from agencyhub.schemas.dashboard import HeatMapResponse

router = APIRouter()


@router.get("/heat-map", response_model=HeatMapResponse)
def get_product_heat_map(
    client: AgencyHubClient = Depends(get_upstream_client),
):
    """Get per-product sales count, revenue and intensity."""
    collections = fetch_collections(client, ["products", "product_sales"])
    return HeatMapResponse(cells=build_heat_map(collections.products, collections.product_sales))
