# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import (
    BaseCollector, MetricTable, Sample, StatusMap, field_value, label, records, status_value
)
from powerstore_exporter.metrics_config import VOLUME_HELP, VOLUME_PARAMS, VOLUME_STATE


class VolumeCollector(BaseCollector):
    name = "volume"
    state_map = StatusMap(VOLUME_STATE)

    def build_descriptors(self):
        return MetricTable("powerstore_volume_", VOLUME_PARAMS, ["name", "appliance_id"], VOLUME_HELP).descriptors()

    def gather(self):
        for volume in records(self.client.volumes()):
            labels = (label(volume.get("name")), label(volume.get("appliance_id")))
            for field in VOLUME_PARAMS:
                if field == "state":
                    value = status_value(volume, field, self.state_map)
                else:
                    value = field_value(volume, field)
                if value is not None:
                    yield Sample(field, value, labels)
