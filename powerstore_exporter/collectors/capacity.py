# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import MetricTable, PerformanceCollector, label
from powerstore_exporter.metrics_config import CAPACITY_HELP, CAPACITY_PARAMS


class CapacityCollector(PerformanceCollector):
    """Hourly space report per appliance, last bucket only."""

    name = "capacity"
    resource_type = "appliance"
    table = MetricTable("powerstore_cap_", CAPACITY_PARAMS, ["appliance_id"], CAPACITY_HELP)

    def fetch(self, resource_id):
        return self.client.appliance_capacity(resource_id)

    def label_sets(self, resource_id, name, bucket):
        return [(label(bucket.get("appliance_id") or resource_id),)]
