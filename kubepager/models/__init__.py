"""Configuration structures for kubepager."""

from kubepager.models.config import (
    KubeConfig,
    KubePagerConfig,
    ListConfig,
    LogConfig,
    TargetConfig,
)

__all__ = [
    "KubeConfig",
    "KubePagerConfig",
    "ListConfig",
    "LogConfig",
    "TargetConfig",
]
