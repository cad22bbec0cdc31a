"""kubernetes-asyncio implementation of the CollectionClient protocol."""

from kubepager.k8s.client import KubernetesCollectionClient, WatchEvent, WatchStream, create_api_client

__all__ = ["KubernetesCollectionClient", "WatchEvent", "WatchStream", "create_api_client"]
