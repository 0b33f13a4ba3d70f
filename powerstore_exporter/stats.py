# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Operational metrics of the exporter process itself.

These live in the default prometheus_client registry and are served on
/performance, separate from the per-array registries.
"""

from prometheus_client import Counter, Gauge, Histogram

UPSTREAM_REQUESTS = Counter(
    "powerstore_exporter_upstream_requests_total",
    "REST calls issued to arrays, by response status",
    ["ip", "method", "status"])

UPSTREAM_LATENCY = Histogram(
    "powerstore_exporter_upstream_request_duration_seconds",
    "Latency of REST calls issued to arrays",
    ["ip"])

RELOGINS = Counter(
    "powerstore_exporter_relogins_total",
    "Re-authentications triggered by an expired session",
    ["ip"])

INFLIGHT_REQUESTS = Gauge(
    "powerstore_exporter_inflight_requests",
    "REST calls currently holding a request budget permit")

SCRAPE_DURATION = Histogram(
    "powerstore_exporter_scrape_duration_seconds",
    "Time to serve one /metrics/<ip>/<group> scrape",
    ["ip", "group"])

COLLECTOR_ERRORS = Counter(
    "powerstore_exporter_collector_errors_total",
    "Collector passes or per-resource fetches that failed",
    ["ip", "collector"])
