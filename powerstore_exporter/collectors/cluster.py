# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import (
    BaseCollector, MetricDescriptor, Sample, StatusMap, label, records,
    status_value
)
from powerstore_exporter.metrics_config import CLUSTER_HELP, CLUSTER_STATE

CLUSTER_LABELS = ["master_appliance_id", "global_id", "management_address", "name"]


class ClusterCollector(BaseCollector):
    """Cluster state, 1 when Configured."""

    name = "cluster"
    state_map = StatusMap(CLUSTER_STATE)

    def build_descriptors(self):
        return {"cluster": MetricDescriptor("powerstore_cluster", CLUSTER_HELP, CLUSTER_LABELS)}

    def gather(self):
        for cluster in records(self.client.cluster()):
            labels = tuple(label(cluster.get(field)) for field in CLUSTER_LABELS)
            state = status_value(cluster, "state", self.state_map)
            if state is not None:
                yield Sample("cluster", state, labels)
