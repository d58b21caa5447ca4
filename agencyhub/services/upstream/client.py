"""HTTP client for the AgencyHub REST API."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ...schemas.records import (
    Client,
    FinancialRecord,
    Opportunity,
    Product,
    ProductSale,
    Task,
)
from .cache import ResponseCache, make_cache_key

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)

FINANCIAL = "/api/financial"
CLIENTS = "/api/clients"
OPPORTUNITIES = "/api/opportunities"
TASKS = "/api/tasks"
PRODUCTS = "/api/products"
PRODUCT_SALES = "/api/product-sales"

SESSION_COOKIE_NAME = "connect.sid"


class UpstreamError(Exception):
    """Raised when a collection cannot be fetched from the upstream API."""

    def __init__(self, resource: str, message: str, status_code: Optional[int] = None):
        self.resource = resource
        self.status_code = status_code
        self.message = message
        super().__init__(f"{resource}: {message}")


class AgencyHubClient:
    """
    Read-only client for AgencyHub collections.

    Only GET requests are issued. Successful payloads are stored in the
    injected cache, keyed by resource path and query params.
    """

    def __init__(
        self,
        base_url: str,
        cache: ResponseCache,
        http_client: Optional[httpx.Client] = None,
        session_cookie: str = "",
        api_token: str = "",
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self._headers: Dict[str, str] = {"Accept": "application/json"}
        if session_cookie:
            self._headers["Cookie"] = f"{SESSION_COOKIE_NAME}={session_cookie}"
        if api_token:
            self._headers["Authorization"] = f"Bearer {api_token}"

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "AgencyHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_collection(self, resource: str, params: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """
        Fetch a JSON collection, serving from cache when fresh.

        Raises:
            UpstreamError: on transport errors, non-2xx responses or
                payloads that are not JSON arrays
        """
        key = make_cache_key(resource, params)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        url = f"{self.base_url}{resource}"
        try:
            response = self._http.get(url, params=dict(params or {}), headers=self._headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Upstream returned error status", resource=resource, status_code=e.response.status_code)
            raise UpstreamError(resource, f"HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("Upstream request failed", resource=resource, error=str(e))
            raise UpstreamError(resource, f"request failed: {e}") from e
        except ValueError as e:
            logger.error("Upstream returned invalid JSON", resource=resource)
            raise UpstreamError(resource, "invalid JSON payload") from e

        if not isinstance(payload, list):
            raise UpstreamError(resource, f"expected a JSON array, got {type(payload).__name__}")

        self.cache.set(key, payload)
        logger.debug("Fetched upstream collection", resource=resource, rows=len(payload))
        return payload

    def _fetch_records(self, resource: str, model: Type[M]) -> List[M]:
        records = []
        for row in self.fetch_collection(resource):
            try:
                records.append(model.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid upstream row",
                    resource=resource,
                    row_id=row.get("id") if isinstance(row, dict) else None,
                    errors=e.error_count(),
                )
        return records

    def financial_records(self) -> List[FinancialRecord]:
        return self._fetch_records(FINANCIAL, FinancialRecord)

    def clients(self) -> List[Client]:
        return self._fetch_records(CLIENTS, Client)

    def opportunities(self) -> List[Opportunity]:
        return self._fetch_records(OPPORTUNITIES, Opportunity)

    def tasks(self) -> List[Task]:
        return self._fetch_records(TASKS, Task)

    def products(self) -> List[Product]:
        return self._fetch_records(PRODUCTS, Product)

    def product_sales(self) -> List[ProductSale]:
        return self._fetch_records(PRODUCT_SALES, ProductSale)

    def ping(self) -> bool:
        """Check that the upstream API answers a cheap collection request."""
        try:
            self._http.get(f"{self.base_url}{PRODUCTS}", headers=self._headers).raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning("Upstream health check failed", error=str(e))
            return False


@dataclass
class MetricsCollections:
    """Raw collections a metrics computation works on."""
    financial_records: List[FinancialRecord] = field(default_factory=list)
    clients: List[Client] = field(default_factory=list)
    opportunities: List[Opportunity] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)
    product_sales: List[ProductSale] = field(default_factory=list)


def load_collections(client: AgencyHubClient, resources: Iterable[str]) -> MetricsCollections:
    """Fetch only the named collections; the rest stay empty."""
    collections = MetricsCollections()
    for name in resources:
        loader = getattr(client, name, None)
        if loader is None or not hasattr(collections, name):
            raise ValueError(f"Unknown collection: {name}")
        setattr(collections, name, loader())
    return collections
