"""Paginated traversal of a label-selected resource collection.

Selector drives fetch-page -> visitor -> continue until the server stops
returning a continuation token or the visitor raises. Pages are fetched one
at a time; the visitor for page n finishes before page n+1 is requested.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from kubepager.models.config import ListConfig
from kubepager.observability.logging import get_logger
from kubepager.observability.metrics import list_errors_total, pages_fetched_total, watches_opened_total
from kubepager.resource.client import CollectionClient, ListOptions
from kubepager.resource.errors import Disposition, classify, explain_list_error
from kubepager.resource.info import Info, VisitorFunc
from kubepager.resource.mapping import MetadataAccessError, ResourceMapping

_logger = get_logger("resource.selector")


class Selector:
    """Visits every page of resources that match a label selector.

    Args:
        client:                Collection client bound to ``mapping``.
        mapping:               Kind, REST resource and metadata accessor.
        namespace:             Namespace to list in; "" for all namespaces.
        label_selector:        Label selector; "" matches everything.
        export:                Ask the server to strip cluster-specific fields.
        include_uninitialized: Include objects that are not yet initialized.
        limit_chunks:          Maximum items per page; 0 disables chunking.

    A Selector holds no mutable state, so concurrent ``visit`` calls on one
    instance are independent of each other.
    """

    def __init__(
        self,
        client: CollectionClient,
        mapping: ResourceMapping,
        namespace: str = "",
        label_selector: str = "",
        export: bool = False,
        include_uninitialized: bool = False,
        limit_chunks: int = 0,
    ) -> None:
        self.client = client
        self.mapping = mapping
        self.namespace = namespace
        self.label_selector = label_selector
        self.export = export
        self.include_uninitialized = include_uninitialized
        self.limit_chunks = limit_chunks

    @classmethod
    def from_config(
        cls,
        client: CollectionClient,
        mapping: ResourceMapping,
        config: ListConfig,
        label_selector: str | None = None,
    ) -> Selector:
        """Build a Selector from ListConfig; *label_selector* overrides the config."""
        return cls(
            client,
            mapping,
            namespace=config.namespace,
            label_selector=config.label_selector if label_selector is None else label_selector,
            export=config.export,
            include_uninitialized=config.include_uninitialized,
            limit_chunks=config.chunk_size,
        )

    async def visit(self, fn: VisitorFunc) -> None:
        """Fetch pages until the continuation token runs out, calling *fn* on each.

        An expired continuation token is raised unchanged; the caller must
        restart from scratch. Bad-request and not-found failures are raised
        with a message naming the resource and selector. Anything raised by
        *fn* stops the traversal and propagates as-is.
        """
        continue_token = ""
        while True:
            try:
                page = await self.client.list(
                    self.namespace,
                    self.mapping.group_version,
                    self.export,
                    ListOptions(
                        label_selector=self.label_selector,
                        include_uninitialized=self.include_uninitialized,
                        limit=self.limit_chunks,
                        continue_token=continue_token,
                    ),
                )
            except Exception as exc:
                failure = self._list_failure(exc, has_cursor=bool(continue_token))
                if failure is exc:
                    raise
                raise failure from exc

            accessor = self.mapping.metadata_accessor
            resource_version = self._read_metadata(accessor.resource_version, page)
            next_token = self._read_metadata(accessor.continue_token, page)
            pages_fetched_total.labels(resource=self.mapping.resource).inc()
            _logger.debug(
                "page_fetched",
                resource=self.mapping.resource,
                namespace=self.namespace,
                resource_version=resource_version,
                has_more=bool(next_token),
            )

            info = Info(
                client=self.client,
                mapping=self.mapping,
                namespace=self.namespace,
                object=page,
                resource_version=resource_version,
            )
            await fn(info, None)

            if not next_token:
                return
            continue_token = next_token

    async def watch(self, resource_version: str) -> Any:
        """Open a watch from *resource_version* ("" for now) with the list's criteria.

        Errors are returned to the caller exactly as the client raised them.
        """
        stream = await self.client.watch(
            self.namespace,
            resource_version,
            self.mapping.group_version,
            self.label_selector,
        )
        watches_opened_total.labels(resource=self.mapping.resource).inc()
        return stream

    def resource_mapping(self) -> ResourceMapping:
        return self.mapping

    def _list_failure(self, exc: Exception, has_cursor: bool) -> Exception:
        disposition = classify(exc)
        list_errors_total.labels(resource=self.mapping.resource, disposition=disposition.value).inc()
        if disposition is Disposition.EXPIRED:
            _logger.warning(
                "list_expired",
                resource=self.mapping.resource,
                namespace=self.namespace,
                mid_traversal=has_cursor,
                error=str(exc),
            )
        elif disposition is Disposition.SELECTOR_MISMATCH:
            _logger.info(
                "list_selector_mismatch",
                resource=self.mapping.resource,
                selector=self.label_selector,
                error=str(exc),
            )
        return explain_list_error(exc, self.mapping.resource, self.label_selector)

    def _read_metadata(self, read: Callable[[Any], str], page: Any) -> str:
        # Missing list metadata reads as empty rather than failing the page.
        try:
            return read(page)
        except MetadataAccessError as exc:
            _logger.debug("metadata_access_failed", resource=self.mapping.resource, error=str(exc))
            return ""
