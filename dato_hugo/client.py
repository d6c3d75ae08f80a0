"""Minimal client for the DatoCMS Content Delivery (GraphQL) API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from .config import DEFAULT_API_URL

logger = logging.getLogger("dato_hugo")


class DatoApiError(RuntimeError):
    """Raised when the API answers with GraphQL errors."""

    def __init__(self, errors: List[Mapping[str, Any]]) -> None:
        self.errors = errors
        messages = "; ".join(str(err.get("message", err)) for err in errors)
        super().__init__(f"DatoCMS query failed: {messages}")


class DatoClient:
    """Thin wrapper around a ``requests`` session for GraphQL queries."""

    def __init__(
        self,
        api_token: str,
        api_url: str = DEFAULT_API_URL,
        environment: Optional[str] = None,
        include_drafts: bool = False,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )
        if environment:
            self.session.headers["X-Environment"] = environment
        if include_drafts:
            self.session.headers["X-Include-Drafts"] = "true"

    def query(self, query: str, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL query and return its ``data`` member."""
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)
        logger.debug("POST %s (variables=%s)", self.api_url, variables)
        resp = self.session.post(self.api_url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        body = resp.json()
        if body.get("errors"):
            raise DatoApiError(body["errors"])
        return body.get("data") or {}

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "DatoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
