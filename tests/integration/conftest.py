"""Shared fixtures for kubepager integration tests.

Wires Selector to a real KubernetesCollectionClient whose ApiClient is a
scripted fake, so full traversals run without touching a cluster.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from kubepager.k8s.client import KubernetesCollectionClient
from kubepager.resource.mapping import GroupVersionKind, ResourceMapping
from kubepager.resource.selector import Selector

# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class ScriptedResponse:
    """Minimal stand-in for the aiohttp response returned by call_api."""

    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self.reason = "OK" if status < 300 else "Error"
        self._body = body
        self.closed = False

    async def read(self) -> bytes:
        return self._body

    def close(self) -> None:
        self.closed = True


class ScriptedApiClient:
    """Serves paginated pod lists keyed by the ``continue`` query parameter.

    ``pages`` maps a continue token ("" for the first request) to either a
    list of pod names plus the next token, or an (http_status, Status dict)
    failure.
    """

    def __init__(self, pages: dict[str, Any], resource_version: str = "5000") -> None:
        self._pages = pages
        self._resource_version = resource_version
        self.requests: list[dict[str, str]] = []

    async def call_api(self, resource_path: str, method: str, **kwargs: Any) -> ScriptedResponse:
        query = dict(kwargs.get("query_params") or [])
        self.requests.append({"path": resource_path, **query})
        entry = self._pages[query.get("continue", "")]
        if isinstance(entry, tuple) and isinstance(entry[0], int):
            status, body = entry
            return ScriptedResponse(status, json.dumps(body).encode())
        names, next_token = entry
        page = {
            "kind": "PodList",
            "apiVersion": "v1",
            "metadata": {"resourceVersion": self._resource_version, "continue": next_token},
            "items": [{"metadata": {"name": name, "namespace": "default"}} for name in names],
        }
        return ScriptedResponse(200, json.dumps(page).encode())


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def pod_mapping() -> ResourceMapping:
    return ResourceMapping(gvk=GroupVersionKind("", "v1", "Pod"), resource="pods")


@pytest.fixture()
def make_selector(pod_mapping: ResourceMapping) -> Callable[..., tuple[Selector, ScriptedApiClient]]:
    """Factory: build a Selector over a ScriptedApiClient serving *pages*."""

    def _make(pages: dict[str, Any], **selector_kwargs: Any) -> tuple[Selector, ScriptedApiClient]:
        api = ScriptedApiClient(pages)
        client = KubernetesCollectionClient(api, pod_mapping)
        return Selector(client, pod_mapping, **selector_kwargs), api

    return _make
