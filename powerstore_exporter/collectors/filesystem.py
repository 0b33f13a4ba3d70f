# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import BaseCollector, MetricTable, label, records
from powerstore_exporter.metrics_config import FILE_SYSTEM_HELP, FILE_SYSTEM_PARAMS


class FileSystemCollector(BaseCollector):
    name = "file"

    def build_descriptors(self):
        return MetricTable("powerstore_filesystem_", FILE_SYSTEM_PARAMS, ["name", "appliance_id"],
                           FILE_SYSTEM_HELP).descriptors()

    def gather(self):
        for file_system in records(self.client.file_systems()):
            labels = (label(file_system.get("name")), label(file_system.get("appliance_id")))
            yield from self.table_samples(file_system, FILE_SYSTEM_PARAMS, labels)
