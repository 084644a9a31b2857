"""
Nominatim geocoding client.

Two lookups are used:
- reverse: coordinates -> address (``/reverse``)
- search: free text -> best matching address (``/search``, ``limit=1``)

Both share one `RateLimiter`, so the spacing holds across operations.
Failures are not retried here; they surface as `GeocodeError` and the
address resolver decides what to do.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from .config import OrganiserConfig
from .exceptions import GeocodeError
from .logging_config import get_logger
from .models import ResolvedAddress
from .ratelimit import RateLimiter

logger = get_logger(__name__)


class GeocodeClient:
    """Blocking, rate-limited Nominatim client.

    Args:
        config: Run configuration (endpoint, user agent, timeouts, spacing)
        session: HTTP session; a fresh `requests.Session` by default
        rate_limiter: Shared gate; built from `config.min_request_interval`
            when not given
    """

    def __init__(
        self,
        config: OrganiserConfig,
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.rate_limiter = rate_limiter or RateLimiter(config.min_request_interval)
        self.calls = 0
        self._headers = {"User-Agent": config.user_agent}

    def reverse(self, lat: float, lon: float) -> Optional[ResolvedAddress]:
        """Return the address at the given coordinates, or None."""
        query = f"{lat},{lon}"
        payload = self._get(
            "reverse",
            self.config.reverse_url,
            {"format": "json", "lat": lat, "lon": lon},
            query,
        )
        if not isinstance(payload, dict):
            raise GeocodeError("reverse", query, "expected a JSON object")

        # Nominatim answers {"error": "Unable to geocode"} over open sea etc.
        address = payload.get("address")
        if not isinstance(address, dict):
            logger.debug(f"reverse {query}: no address in response")
            return None
        return ResolvedAddress.from_json(address)

    def search(self, text: str) -> Optional[ResolvedAddress]:
        """Return the address of the best match for `text`, or None."""
        payload = self._get(
            "search",
            self.config.search_url,
            {"format": "json", "q": text, "addressdetails": 1, "limit": 1},
            text,
        )
        # Unlike reverse, search returns an array of results
        if not isinstance(payload, list):
            raise GeocodeError("search", text, "expected a JSON array")
        if not payload:
            logger.debug(f"search '{text}': no results")
            return None

        best = payload[0]
        if not isinstance(best, dict):
            raise GeocodeError("search", text, "result is not a JSON object")
        address = best.get("address")
        if not isinstance(address, dict):
            logger.debug(f"search '{text}': best result has no address")
            return None
        return ResolvedAddress.from_json(address)

    def _get(self, operation: str, url: str, params: dict[str, Any], query: str) -> Any:
        self.rate_limiter.acquire()
        self.calls += 1
        logger.debug(f"Nominatim {operation}: {query}")

        try:
            response = self.session.get(
                url,
                params=params,
                headers=self._headers,
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise GeocodeError(operation, query, str(e)) from e

        try:
            return response.json()
        except ValueError as e:
            raise GeocodeError(operation, query, f"malformed JSON: {e}") from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GeocodeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
