"""The collection client a Selector fetches pages through."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class ListOptions:
    """Per-request list options, forwarded verbatim to the server."""

    label_selector: str = ""
    include_uninitialized: bool = False
    limit: int = 0
    continue_token: str = ""


class CollectionClient(Protocol):
    """Fetches pages of one resource collection and opens watches on it.

    Implementations raise ApiError for server-reported failures so callers can
    classify them; transport errors may be raised as-is.
    """

    async def list(
        self,
        namespace: str,
        group_version: str,
        export: bool,
        options: ListOptions,
    ) -> Any: ...

    async def watch(
        self,
        namespace: str,
        resource_version: str,
        group_version: str,
        label_selector: str,
    ) -> Any: ...
