"""Environment-driven runner: list one collection page by page to stdout.

Startup order: config -> logging -> K8s client -> selector -> traversal.
Each page is written as one JSON line so output can be piped without ever
holding the whole collection in memory.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, TextIO

from kubepager.config import load_config
from kubepager.k8s.client import KubernetesCollectionClient, create_api_client
from kubepager.models.config import TargetConfig
from kubepager.observability.logging import get_logger, setup_logging
from kubepager.resource.errors import ApiError, ListError, is_resource_expired
from kubepager.resource.info import Info
from kubepager.resource.mapping import GroupVersionKind, MetadataAccessError, ResourceMapping
from kubepager.resource.selector import Selector


def mapping_for(target: TargetConfig) -> ResourceMapping:
    """Build the ResourceMapping described by *target*."""
    return ResourceMapping(
        gvk=GroupVersionKind.from_api_version(target.api_version, target.kind),
        resource=target.resource,
        namespaced=target.namespaced,
    )


async def dump_pages(selector: Selector, out: TextIO) -> tuple[int, int]:
    """Visit every page and write one JSON line per page to *out*.

    Returns (pages, items) written.
    """
    pages = 0
    items = 0

    async def _write_page(info: Info, _err: Exception | None) -> None:
        nonlocal pages, items
        obj: Any = info.object
        page_items = (obj.get("items") or []) if isinstance(obj, dict) else []
        try:
            next_token = info.mapping.metadata_accessor.continue_token(obj)
        except MetadataAccessError:
            next_token = ""
        out.write(
            json.dumps(
                {
                    "resource": info.mapping.resource,
                    "namespace": info.namespace,
                    "resource_version": info.resource_version,
                    "continue": next_token,
                    "items": page_items,
                }
            )
            + "\n"
        )
        pages += 1
        items += len(page_items)

    await selector.visit(_write_page)
    return pages, items


async def main() -> None:
    """Load config, connect, and dump the configured collection to stdout."""
    config = load_config()
    setup_logging(config.log.level, config.log.format)
    log = get_logger("app")

    mapping = mapping_for(config.target)
    api_client = await create_api_client(config.kube)
    try:
        selector = Selector.from_config(KubernetesCollectionClient(api_client, mapping), mapping, config.listing)
        log.info(
            "listing started",
            resource=mapping.resource,
            group_version=mapping.group_version,
            namespace=selector.namespace or "<all>",
            selector=selector.label_selector,
            chunk_size=selector.limit_chunks,
        )
        try:
            pages, items = await dump_pages(selector, sys.stdout)
        except (ApiError, ListError) as exc:
            log.error("listing failed", error=str(exc), expired=is_resource_expired(exc))
            raise SystemExit(1) from exc
        log.info("listing finished", resource=mapping.resource, pages=pages, items=items)
    finally:
        await api_client.close()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())
