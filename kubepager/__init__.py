"""kubepager: chunked listing and watching of Kubernetes resource collections."""

__version__ = "0.1.0"
