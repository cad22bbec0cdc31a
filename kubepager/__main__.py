"""Entry point for `python -m kubepager`.

Usage:
    KUBEPAGER_RESOURCE=deployments KUBEPAGER_API_VERSION=apps/v1 \
        KUBEPAGER_KIND=Deployment python -m kubepager
"""

from __future__ import annotations

from kubepager.app import run

run()
