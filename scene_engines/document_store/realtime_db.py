"""Realtime Database REST adapter for the document store."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from scene_engines.common.errors import MalformedDocument, UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.config import runtime_config
from scene_engines.document_store.repository import split_path

logger = logging.getLogger(__name__)


class RealtimeDbDocumentStore:
    """Addresses ``{database_url}/{path}.json?auth={id_token}``.

    Every call carries a bounded timeout; transport failures, timeouts and
    non-2xx answers surface as UpstreamUnavailable.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.database_url = (database_url or runtime_config.get_database_url() or "").rstrip("/")
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL config missing. "
                "Set DATABASE_URL to the realtime database root URL."
            )
        self._timeout = timeout or runtime_config.get_upstream_timeout_seconds()
        self._client = client or httpx.Client(timeout=self._timeout)

    def _url(self, path: str) -> str:
        segments = [quote(segment, safe="") for segment in split_path(path)]
        return f"{self.database_url}/{'/'.join(segments)}.json"

    def _send(self, ctx: SessionContext, method: str, path: str, body: Any = None) -> httpx.Response:
        url = self._url(path)
        kwargs: Dict[str, Any] = {"params": {"auth": ctx.id_token}, "timeout": self._timeout}
        if method in {"PATCH", "PUT"}:
            kwargs["json"] = body
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("document store %s %s timed out (request %s)", method, path, ctx.request_id)
            raise UpstreamUnavailable(f"{method} {path} timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("document store %s %s failed: %s", method, path, exc)
            raise UpstreamUnavailable(f"{method} {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            logger.warning(
                "document store %s %s answered %s (request %s)",
                method,
                path,
                resp.status_code,
                ctx.request_id,
            )
            raise UpstreamUnavailable(
                f"{method} {path} answered {resp.status_code}", status_code=resp.status_code
            )
        return resp

    def get(self, ctx: SessionContext, path: str) -> Any:
        resp = self._send(ctx, "GET", path)
        text = resp.text.strip()
        if not text or text == "null":
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedDocument(f"GET {path} returned non-JSON body") from exc

    def patch(self, ctx: SessionContext, path: str, fields: Dict[str, Any]) -> None:
        self._send(ctx, "PATCH", path, body=fields)

    def put(self, ctx: SessionContext, path: str, value: Any) -> None:
        self._send(ctx, "PUT", path, body=value)

    def delete(self, ctx: SessionContext, path: str) -> None:
        self._send(ctx, "DELETE", path)
