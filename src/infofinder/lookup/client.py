"""HTTP client for the per-category lookup services."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from infofinder.observability import Observability, get_observability
from infofinder.settings import Settings, get_settings

from .errors import EmptyLookupError, LookupHTTPError, LookupTransportError
from .registry import CategoryId, definition_for

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupRequest:
    """Validated identifier bound for one category endpoint."""

    category: CategoryId
    identifier: str


def is_empty_payload(payload: Any) -> bool:
    """Return True for ``null``, ``[]``, and ``{"data": []}`` style replies."""

    if isinstance(payload, dict):
        data = payload.get("data")
        return isinstance(data, list) and not data
    if isinstance(payload, list):
        return not payload
    return not payload


class LookupClient:
    """Issue a single GET per lookup and decode the JSON reply."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
        observability: Observability | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client()
        self.observability = observability or get_observability(component="lookup", settings=self.settings)

    def __enter__(self) -> "LookupClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def endpoint_for(self, category_id: CategoryId | str) -> str:
        """Return the configured base URL for ``category_id``."""

        definition = definition_for(category_id)
        return self.settings.lookup.endpoints.get(definition.id.value, definition.endpoint)

    def fetch(self, category_id: CategoryId | str, identifier: str) -> Any:
        """Fetch the raw JSON reply for ``identifier``.

        Args:
            category_id: Category whose endpoint should be queried.
            identifier: Already-validated identifier value.

        Returns:
            The decoded JSON body.

        Raises:
            LookupHTTPError: The service answered with a non-success status.
            EmptyLookupError: The body carried no data.
            LookupTransportError: The request failed or the body was not JSON.
        """

        request = LookupRequest(category=definition_for(category_id).id, identifier=identifier)
        return self._execute(request)

    def _execute(self, request: LookupRequest) -> Any:
        definition = definition_for(request.category)
        url = self.endpoint_for(request.category)
        tags = {"category": request.category.value}
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.settings.lookup.user_agent,
        }

        started = time.perf_counter()
        try:
            response = self._client.get(url, params={definition.query_param: request.identifier}, headers=headers)
        except httpx.HTTPError as exc:
            LOGGER.warning("Lookup transport failure for %s: %s", request.category.value, exc)
            self.observability.increment("lookup.errors", tags={**tags, "kind": "transport"})
            raise LookupTransportError(str(exc) or exc.__class__.__name__) from exc
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            self.observability.record_timing("lookup.latency_ms", elapsed_ms, tags=tags)

        self.observability.increment("lookup.requests", tags=tags)
        self.observability.emit_event(
            "lookup.fetch",
            category=request.category.value,
            status_code=response.status_code,
            elapsed_ms=round(elapsed_ms, 2),
        )

        if not response.is_success:
            self.observability.increment("lookup.errors", tags={**tags, "kind": "http"})
            raise LookupHTTPError(response.status_code)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self.observability.increment("lookup.errors", tags={**tags, "kind": "decode"})
            raise LookupTransportError(f"Invalid JSON in lookup response: {exc}") from exc

        if is_empty_payload(payload):
            self.observability.increment("lookup.errors", tags={**tags, "kind": "empty"})
            raise EmptyLookupError()
        return payload


__all__ = ["LookupClient", "LookupRequest", "is_empty_payload"]
