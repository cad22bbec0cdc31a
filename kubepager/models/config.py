"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ListConfig:
    """Selection criteria applied to every paginated list."""

    namespace: str = ""
    label_selector: str = ""
    chunk_size: int = 500
    export: bool = False
    include_uninitialized: bool = False


@dataclass
class TargetConfig:
    """The collection the runner traverses."""

    api_version: str = "v1"
    kind: str = "Pod"
    resource: str = "pods"
    namespaced: bool = True


@dataclass
class KubeConfig:
    """Kubernetes client configuration."""

    kubeconfig: str = ""
    context: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class KubePagerConfig:
    """Top-level kubepager configuration."""

    listing: ListConfig = field(default_factory=ListConfig)
    target: TargetConfig = field(default_factory=TargetConfig)
    kube: KubeConfig = field(default_factory=KubeConfig)
    log: LogConfig = field(default_factory=LogConfig)
