# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Performance collectors.

Each one walks the cached ids of its resource type, requests a five minute
report per id through the shared worker pool and exposes the newest bucket.
"""

from powerstore_exporter.collectors.base import MetricDescriptor, MetricTable, PerformanceCollector, label
from powerstore_exporter.metrics_config import (
    APPLIANCE_PERF_HELP,
    APPLIANCE_PERF_PARAMS,
    BLOCK_PERF_HELP,
    DRIVE_WEAR_HELP,
    DRIVE_WEAR_PARAMS,
    ETH_PORT_PERF_HELP,
    ETH_PORT_PERF_PARAMS,
    FC_PORT_PERF_HELP,
    FC_PORT_PERF_PARAMS,
    FILE_PERF_HELP,
    FILE_SYSTEM_PERF_PARAMS,
    IO_PARAMS,
    NAS_PERF_PARAMS,
)


class AppliancePerformanceCollector(PerformanceCollector):
    name = "perf"
    resource_type = "appliance"
    table = MetricTable("powerstore_perf_", APPLIANCE_PERF_PARAMS, ["appliance_id"], APPLIANCE_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.appliance_performance(resource_id)

    def label_sets(self, resource_id, name, bucket):
        return [(resource_id,)]


class VolumePerformanceCollector(PerformanceCollector):
    name = "metricVolume"
    resource_type = "volume"
    table = MetricTable("powerstore_metricVolume_", IO_PARAMS, ["volume_id", "appliance_id"], BLOCK_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.volume_performance(resource_id)


class VolumeGroupPerformanceCollector(PerformanceCollector):
    """The report carries no appliance; one sample set per cached appliance id."""

    name = "metricVg"
    resource_type = "volume_group"
    table = MetricTable("powerstore_metricVg_", IO_PARAMS, ["volume_group_id", "appliance_id"], BLOCK_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.volume_group_performance(resource_id)

    def label_sets(self, resource_id, name, bucket):
        appliance_ids = self.cache.attribute(self.resource_type, resource_id, "appliance_ids") or []
        return [(name, label(appliance_id)) for appliance_id in appliance_ids]


class EthPortPerformanceCollector(PerformanceCollector):
    name = "metricEthPort"
    resource_type = "eth_port"
    table = MetricTable("powerstore_metricEthPort_", ETH_PORT_PERF_PARAMS, ["eth_port_id", "appliance_id"],
                        ETH_PORT_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.eth_port_performance(resource_id)


class FcPortPerformanceCollector(PerformanceCollector):
    name = "metricFcPort"
    resource_type = "fc_port"
    table = MetricTable("powerstore_metricFcPort_", FC_PORT_PERF_PARAMS, ["fc_port_id", "appliance_id"],
                        FC_PORT_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.fc_port_performance(resource_id)


class FileSystemPerformanceCollector(PerformanceCollector):
    name = "metricFilesystem"
    resource_type = "file_system"
    table = MetricTable("powerstore_metricFilesystem_", FILE_SYSTEM_PERF_PARAMS, ["name", "appliance_id"],
                        FILE_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.file_system_performance(resource_id)


class NasPerformanceCollector(PerformanceCollector):
    name = "metricNas"
    resource_type = "nas_server"
    table = MetricTable("powerstore_metricNas_", NAS_PERF_PARAMS, ["nas_id"], FILE_PERF_HELP)

    def fetch(self, resource_id):
        return self.client.nas_server_performance(resource_id)

    def label_sets(self, resource_id, name, bucket):
        return [(name,)]


class DriveWearCollector(PerformanceCollector):
    """Remaining endurance of each cached drive."""

    name = "wear"
    resource_type = "drive"
    table = MetricTable("", DRIVE_WEAR_PARAMS, ["name", "appliance_id"])

    def build_descriptors(self):
        return {"percent_endurance_remaining": MetricDescriptor(
            "powerstore_wear_metrics_by_drive", DRIVE_WEAR_HELP, self.table.labels)}

    def fetch(self, resource_id):
        return self.client.drive_wear(resource_id)
