# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import BaseCollector, MetricTable, label, records
from powerstore_exporter.metrics_config import VOLUME_GROUP_HELP, VOLUME_GROUP_PARAMS


class VolumeGroupCollector(BaseCollector):
    """Volume group capacity, one sample per appliance the group spans."""

    name = "volumeGroup"

    def build_descriptors(self):
        return MetricTable("powerstore_volumegroup_", VOLUME_GROUP_PARAMS, ["name", "appliance_id"],
                           VOLUME_GROUP_HELP).descriptors()

    def gather(self):
        for group in records(self.client.volume_groups()):
            name = label(group.get("name"))
            for appliance_id in group.get("appliance_ids") or []:
                yield from self.table_samples(group, VOLUME_GROUP_PARAMS, (name, label(appliance_id)))
