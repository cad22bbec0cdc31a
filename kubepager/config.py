"""Configuration loading from environment variables."""

from __future__ import annotations

import os
import re

from kubepager.models.config import (
    KubeConfig,
    KubePagerConfig,
    ListConfig,
    LogConfig,
    TargetConfig,
)

_API_VERSION_RE = re.compile(r"^([a-z0-9.-]+/)?v[0-9]+((alpha|beta)[0-9]+)?$")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEPAGER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_api_version(value: str) -> str:
    if not _API_VERSION_RE.match(value):
        raise ValueError(f"Invalid API version: {value}")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    if value.lower() not in ("json", "console"):
        raise ValueError(f"Invalid log format: {value}. Must be 'json' or 'console'")
    return value.lower()


def load_config() -> KubePagerConfig:
    """Load configuration from KUBEPAGER_* environment variables."""
    return KubePagerConfig(
        listing=ListConfig(
            namespace=_env("NAMESPACE", ""),
            label_selector=_env("LABEL_SELECTOR", ""),
            chunk_size=_env_int("CHUNK_SIZE", 500, min_val=0),
            export=_env_bool("EXPORT", False),
            include_uninitialized=_env_bool("INCLUDE_UNINITIALIZED", False),
        ),
        target=TargetConfig(
            api_version=_validate_api_version(_env("API_VERSION", "v1")),
            kind=_env("KIND", "Pod"),
            resource=_env("RESOURCE", "pods"),
            namespaced=_env_bool("NAMESPACED", True),
        ),
        kube=KubeConfig(
            kubeconfig=_env("KUBECONFIG", ""),
            context=_env("CONTEXT", ""),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
