"""Paginated listing and watching of label-selected resources.

Submodules
----------
selector -- Selector: fetch-page -> visitor -> continue loop, plus watch.
errors   -- ApiError taxonomy, list-failure classification and rewriting.
mapping  -- GroupVersionKind, ResourceMapping and list-metadata accessors.
client   -- CollectionClient protocol and ListOptions.
info     -- Info page envelope and the VisitorFunc callback type.
"""

from kubepager.resource.client import CollectionClient, ListOptions
from kubepager.resource.errors import (
    ApiError,
    Disposition,
    ErrorKind,
    ListError,
    Status,
    classify,
    explain_list_error,
    is_bad_request,
    is_not_found,
    is_resource_expired,
)
from kubepager.resource.info import Info, VisitorFunc
from kubepager.resource.mapping import (
    GroupVersionKind,
    ListMetaAccessor,
    MetadataAccessError,
    MetadataAccessor,
    ResourceMapping,
)
from kubepager.resource.selector import Selector

__all__ = [
    "ApiError",
    "CollectionClient",
    "Disposition",
    "ErrorKind",
    "GroupVersionKind",
    "Info",
    "ListError",
    "ListMetaAccessor",
    "ListOptions",
    "MetadataAccessError",
    "MetadataAccessor",
    "ResourceMapping",
    "Selector",
    "Status",
    "VisitorFunc",
    "classify",
    "explain_list_error",
    "is_bad_request",
    "is_not_found",
    "is_resource_expired",
]
