# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import BaseCollector, MetricDescriptor, Sample, label, records
from powerstore_exporter.metrics_config import APPLIANCE_HELP


class ApplianceCollector(BaseCollector):
    """Appliance inventory; the service tag travels as a label on a constant 0."""

    name = "appliance"

    def build_descriptors(self):
        documentation = APPLIANCE_HELP.get("service_tag", "this is service_tag")
        return {"service_tag": MetricDescriptor("powerstore_appliance", documentation,
                                                ["service_tag", "appliance_id"])}

    def gather(self):
        for appliance in records(self.client.appliances()):
            tag = appliance.get("service_tag")
            if tag is None:
                continue
            yield Sample("service_tag", 0.0, (str(tag), label(appliance.get("id"))))
