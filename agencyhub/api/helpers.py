import logging
from typing import Iterable

from fastapi import HTTPException

from agencyhub.services.upstream import (
    AgencyHubClient,
    MetricsCollections,
    UpstreamError,
    load_collections,
)

logger = logging.getLogger(__name__)


def fetch_collections(client: AgencyHubClient, resources: Iterable[str]) -> MetricsCollections:
    """Load collections, turning upstream failures into 502 responses."""
    try:
        return load_collections(client, resources)
    except UpstreamError as e:
        logger.warning(f"Upstream fetch failed: {e}")
        raise HTTPException(status_code=502, detail=f"Error fetching {e.resource}: {e.message}")
