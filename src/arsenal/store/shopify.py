"""Shopify Admin GraphQL implementation of the customer store.

Customers are the records; metafields in the configured namespace are their
attributes. Values are always sent as GraphQL variables.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from arsenal.errors import FieldError, NotFoundError, UpstreamError
from arsenal.store.records import MetafieldEntry, RawRecord, RemoteStore, WriteResult

logger = structlog.get_logger()

CUSTOMER_GID_PREFIX = "gid://shopify/Customer/"

CUSTOMERS_QUERY = """
query getCustomers($first: Int!, $metafieldLimit: Int!, $namespace: String!) {
  customers(first: $first) {
    edges {
      node {
        id
        firstName
        createdAt
        metafields(first: $metafieldLimit, namespace: $namespace) {
          edges { node { key value } }
        }
      }
    }
  }
}
"""

CUSTOMER_QUERY = """
query getCustomer($id: ID!, $metafieldLimit: Int!, $namespace: String!) {
  customer(id: $id) {
    id
    firstName
    createdAt
    metafields(first: $metafieldLimit, namespace: $namespace) {
      edges { node { key value } }
    }
  }
}
"""

METAFIELDS_SET_MUTATION = """
mutation setCustomerMetafields($metafields: [MetafieldsSetInput!]!) {
  metafieldsSet(metafields: $metafields) {
    metafields { key value }
    userErrors { field message }
  }
}
"""


def to_customer_gid(record_id: str) -> str:
    """Accept a bare numeric id or a full customer GID."""
    record_id = str(record_id).strip()
    if record_id.startswith("gid://"):
        return record_id
    return f"{CUSTOMER_GID_PREFIX}{record_id}"


def _record_from_node(node: dict[str, Any]) -> RawRecord:
    metafield_edges = (node.get("metafields") or {}).get("edges") or []
    attributes = {
        edge["node"]["key"]: edge["node"]["value"]
        for edge in metafield_edges
        if edge.get("node") and edge["node"].get("key") is not None
    }
    return RawRecord(
        id=node["id"],
        display_name=node.get("firstName"),
        created_at=node.get("createdAt"),
        attributes=attributes,
    )


class ShopifyStore(RemoteStore):
    """RemoteStore backed by the Shopify Admin GraphQL endpoint."""

    def __init__(
        self,
        store_url: str,
        access_token: str,
        api_version: str = "2023-10",
        metafield_limit: int = 20,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = f"https://{store_url}/admin/api/{api_version}/graphql.json"
        self.metafield_limit = metafield_limit
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        }

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST one GraphQL document and return its ``data`` payload."""
        try:
            response = await self._client.post(
                self.endpoint,
                headers=self._headers,
                json={"query": query, "variables": variables},
            )
        except httpx.HTTPError as exc:
            logger.error("shopify_request_failed", endpoint=self.endpoint, error=str(exc))
            raise UpstreamError(f"Shopify API request failed: {exc}") from exc

        if response.status_code >= 400:
            logger.error("shopify_request_failed", endpoint=self.endpoint, status=response.status_code)
            raise UpstreamError(f"Shopify API error: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError("Shopify API returned a non-JSON body") from exc

        if payload.get("errors"):
            logger.error("shopify_graphql_errors", errors=payload["errors"])
            raise UpstreamError(f"GraphQL errors: {payload['errors']}")

        data = payload.get("data")
        if data is None:
            raise UpstreamError("GraphQL response carried no data")
        return data

    async def fetch_batch(self, count: int, namespace: str) -> list[RawRecord]:
        data = await self._request(
            CUSTOMERS_QUERY,
            {"first": count, "metafieldLimit": self.metafield_limit, "namespace": namespace},
        )
        edges = (data.get("customers") or {}).get("edges") or []
        return [_record_from_node(edge["node"]) for edge in edges]

    async def fetch_one(self, record_id: str, namespace: str) -> RawRecord:
        data = await self._request(
            CUSTOMER_QUERY,
            {
                "id": to_customer_gid(record_id),
                "metafieldLimit": self.metafield_limit,
                "namespace": namespace,
            },
        )
        node = data.get("customer")
        if node is None:
            raise NotFoundError(f"No customer with id {record_id}")
        return _record_from_node(node)

    async def write_attributes(
        self,
        record_id: str,
        namespace: str,
        entries: list[MetafieldEntry],
    ) -> WriteResult:
        owner_id = to_customer_gid(record_id)
        metafields = [
            {
                "ownerId": owner_id,
                "namespace": namespace,
                "key": entry.key,
                "value": entry.value,
                "type": entry.value_type,
            }
            for entry in entries
        ]
        data = await self._request(METAFIELDS_SET_MUTATION, {"metafields": metafields})
        result = data.get("metafieldsSet") or {}
        errors = [
            FieldError(field=err.get("field"), message=err.get("message", ""))
            for err in result.get("userErrors") or []
        ]
        return WriteResult(errors=errors)
