# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Prometheus exporter for Dell PowerStore arrays.

The application follows a modular architecture:
- connection: authenticated HTTP session per array
- client: read-only REST operations with a shared request budget
- cache: id -> name lookups built once per array at startup
- collectors: translate REST JSON into Prometheus samples
- registry/server: per-array, per-resource-group scrape endpoints
"""

__version__ = "1.0.0"
