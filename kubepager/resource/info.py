"""Page envelope handed to visitor callbacks."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from kubepager.resource.client import CollectionClient
from kubepager.resource.mapping import ResourceMapping


@dataclass(frozen=True)
class Info:
    """One fetched page together with the context it was fetched in."""

    client: CollectionClient
    mapping: ResourceMapping
    namespace: str
    object: Any
    resource_version: str = ""


# A visitor receives each Info plus an upstream error slot (always None when
# called by Selector). Raising from the visitor aborts the traversal.
VisitorFunc = Callable[[Info, Exception | None], Awaitable[None]]
