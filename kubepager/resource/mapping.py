"""Resource kind descriptors and list-metadata access."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class MetadataAccessError(Exception):
    """Raised when a page object carries no readable list metadata."""


@dataclass(frozen=True)
class GroupVersionKind:
    """API group, version and kind of a resource."""

    group: str
    version: str
    kind: str

    @property
    def group_version(self) -> str:
        """``version`` for the core group, ``group/version`` otherwise."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        """Split an ``apiVersion`` string such as ``apps/v1`` or ``v1``."""
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind)


class MetadataAccessor(Protocol):
    """Extracts list metadata from a decoded page object."""

    def resource_version(self, obj: Any) -> str: ...

    def continue_token(self, obj: Any) -> str: ...


class ListMetaAccessor:
    """Reads ``metadata`` from plain JSON dicts or kubernetes-asyncio models.

    Dict pages use the wire names (``resourceVersion``, ``continue``); model
    objects use the generated attribute names (``resource_version``,
    ``_continue``). A page with no metadata at all raises
    MetadataAccessError; a metadata block missing the field yields "".
    """

    def resource_version(self, obj: Any) -> str:
        return self._field(obj, "resourceVersion", "resource_version")

    def continue_token(self, obj: Any) -> str:
        return self._field(obj, "continue", "_continue")

    @staticmethod
    def _field(obj: Any, wire_name: str, attr_name: str) -> str:
        if isinstance(obj, dict):
            metadata = obj.get("metadata")
            if not isinstance(metadata, dict):
                raise MetadataAccessError(f"object has no list metadata: {type(obj).__name__}")
            return str(metadata.get(wire_name) or "")
        metadata = getattr(obj, "metadata", None)
        if metadata is None:
            raise MetadataAccessError(f"object has no list metadata: {type(obj).__name__}")
        return str(getattr(metadata, attr_name, None) or "")


@dataclass(frozen=True)
class ResourceMapping:
    """Maps a kind to its REST resource and list-metadata accessor."""

    gvk: GroupVersionKind
    resource: str
    namespaced: bool = True
    metadata_accessor: MetadataAccessor = field(default_factory=ListMetaAccessor)

    @property
    def group_version(self) -> str:
        return self.gvk.group_version
