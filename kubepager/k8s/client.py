"""CollectionClient backed by a kubernetes-asyncio ApiClient.

The generated per-group APIs only cover built-in kinds, so requests go through
``ApiClient.call_api`` with paths derived from a ResourceMapping. Responses
are read unprocessed (``_preload_content=False``) and decoded as JSON dicts;
non-2xx responses are turned into ApiError from the server's Status body.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any

import kubernetes_asyncio.config as k8s_config  # type: ignore[import-untyped]
from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

from kubepager.models.config import KubeConfig
from kubepager.observability.logging import get_logger
from kubepager.resource.client import ListOptions
from kubepager.resource.errors import ApiError, Status, status_error_from_body
from kubepager.resource.mapping import ResourceMapping

_logger = get_logger("k8s.client")

_AUTH_SETTINGS = ["BearerToken"]
_HEADERS = {"Accept": "application/json"}


async def create_api_client(config: KubeConfig) -> k8s_client.ApiClient:
    """Load in-cluster credentials, falling back to kubeconfig, and return a client."""
    try:
        # load_incluster_config() is synchronous in kubernetes-asyncio
        k8s_config.load_incluster_config()
        _logger.info("k8s client configured from in-cluster service account")
    except k8s_config.ConfigException:
        await k8s_config.load_kube_config(
            config_file=config.kubeconfig or None,
            context=config.context or None,
        )
        _logger.info("k8s client configured from kubeconfig", context=config.context or "current")
    return k8s_client.ApiClient()


def _collection_path(mapping: ResourceMapping, group_version: str, namespace: str) -> str:
    prefix = f"/apis/{group_version}" if "/" in group_version else f"/api/{group_version}"
    if mapping.namespaced and namespace:
        return f"{prefix}/namespaces/{namespace}/{mapping.resource}"
    return f"{prefix}/{mapping.resource}"


@dataclass(frozen=True)
class WatchEvent:
    """A single change notification from a watch stream."""

    type: str
    object: dict[str, Any] = field(default_factory=dict)


class WatchStream:
    """Async iterator over WatchEvents read from an open watch response.

    The server reports in-stream failures (typically an expired resource
    version) as ``ERROR`` events; those are raised as ApiError. Use as an
    async context manager, or call ``close()``, to release the connection.
    """

    def __init__(self, response: Any, resource: str) -> None:
        self._response = response
        self._resource = resource
        self._closed = False

    def __aiter__(self) -> WatchStream:
        return self

    async def __anext__(self) -> WatchEvent:
        if self._closed:
            raise StopAsyncIteration
        line = b""
        while not line.strip():
            line = await self._response.content.readline()
            if not line:
                self.close()
                raise StopAsyncIteration
        raw = json.loads(line)
        obj = raw.get("object") or {}
        if raw.get("type") == "ERROR":
            self.close()
            raise ApiError.from_status(Status.from_dict(obj))
        return WatchEvent(type=raw.get("type", ""), object=obj)

    async def __aenter__(self) -> WatchStream:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._response.close()
            _logger.debug("watch_closed", resource=self._resource)


class KubernetesCollectionClient:
    """Lists and watches one resource collection through ``ApiClient.call_api``.

    Args:
        api_client: Configured kubernetes-asyncio ApiClient.
        mapping:    The collection this client is bound to.
    """

    def __init__(self, api_client: Any, mapping: ResourceMapping) -> None:
        self._api_client = api_client
        self._mapping = mapping

    async def list(
        self,
        namespace: str,
        group_version: str,
        export: bool,
        options: ListOptions,
    ) -> dict[str, Any]:
        query: list[tuple[str, str]] = []
        if options.label_selector:
            query.append(("labelSelector", options.label_selector))
        if options.include_uninitialized:
            query.append(("includeUninitialized", "true"))
        if options.limit > 0:
            query.append(("limit", str(options.limit)))
        if options.continue_token:
            query.append(("continue", options.continue_token))
        if export:
            query.append(("export", "true"))

        response = await self._get(_collection_path(self._mapping, group_version, namespace), query)
        try:
            body = await response.read()
        finally:
            response.close()
        return json.loads(body)

    async def watch(
        self,
        namespace: str,
        resource_version: str,
        group_version: str,
        label_selector: str,
    ) -> WatchStream:
        query = [("watch", "true")]
        if resource_version:
            query.append(("resourceVersion", resource_version))
        if label_selector:
            query.append(("labelSelector", label_selector))

        response = await self._get(_collection_path(self._mapping, group_version, namespace), query)
        return WatchStream(response, self._mapping.resource)

    async def _get(self, path: str, query: list[tuple[str, str]]) -> Any:
        response = await self._api_client.call_api(
            path,
            "GET",
            query_params=query,
            header_params=dict(_HEADERS),
            auth_settings=_AUTH_SETTINGS,
            _preload_content=False,
        )
        if 200 <= response.status <= 299:
            return response
        try:
            body = await response.read()
        finally:
            response.close()
        error = status_error_from_body(response.status, body, fallback=response.reason or "")
        _logger.debug("request_failed", path=path, status=response.status, reason=error.kind.value)
        raise error
