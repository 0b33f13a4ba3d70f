# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import (
    BaseCollector, MetricDescriptor, Sample, StatusMap, label, records, status_value
)
from powerstore_exporter.metrics_config import NAS_HELP, OPERATIONAL_STATUS


class NasCollector(BaseCollector):
    """NAS server operational status, 1 when Started."""

    name = "nas"
    status_map = StatusMap(OPERATIONAL_STATUS)

    def build_descriptors(self):
        return {"operational_status": MetricDescriptor("powerstore_nas_server_operational_status",
                                                       NAS_HELP["operational_status"], ["name"])}

    def gather(self):
        for nas in records(self.client.nas_servers()):
            value = status_value(nas, "operational_status", self.status_map)
            if value is not None:
                yield Sample("operational_status", value, (label(nas.get("name")),))
