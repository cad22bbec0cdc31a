"""Prometheus counters for paginated listing and watches."""

from __future__ import annotations

from prometheus_client import Counter

pages_fetched_total = Counter(
    "kubepager_pages_fetched_total",
    "Pages successfully fetched and handed to a visitor",
    ["resource"],
)

list_errors_total = Counter(
    "kubepager_list_errors_total",
    "Failed page fetches by error disposition",
    ["resource", "disposition"],
)

watches_opened_total = Counter(
    "kubepager_watches_opened_total",
    "Watch streams successfully opened",
    ["resource"],
)
