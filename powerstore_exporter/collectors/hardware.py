# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import (
    RECOVERABLE_ERRORS, BaseCollector, MetricDescriptor, Sample, StatusMap, field_value, label, records,
    status_value
)
from powerstore_exporter.metrics_config import HARDWARE_HELP, HARDWARE_TYPES, LIFECYCLE_STATE
from powerstore_exporter.stats import COLLECTOR_ERRORS


class HardwareCollector(BaseCollector):
    """
    Node, drive, fan, power supply and battery health.

    Each hardware type is fetched separately; one type failing does not stop
    the others.
    """

    name = "hardware"
    state_map = StatusMap(LIFECYCLE_STATE)

    def build_descriptors(self):
        state_help = HARDWARE_HELP["lifecycle_state"]
        metrics = {
            "node_state": MetricDescriptor("powerstore_hardware_node_state", state_help,
                                           ["name", "serial_number", "state", "appliance_id"]),
            "drive_size": MetricDescriptor("powerstore_hardware_drive_size", HARDWARE_HELP["size"],
                                           ["name", "appliance_id", "drive_type"]),
        }
        for hardware_type in HARDWARE_TYPES:
            metrics[hardware_type + "_state"] = MetricDescriptor(
                f"powerstore_hardware_{hardware_type}_state", state_help, ["name", "appliance_id"])
        return metrics

    def gather(self):
        for hardware_type in ["Node"] + HARDWARE_TYPES:
            try:
                items = records(self.client.hardware(hardware_type))
                samples = self._node_samples(items) if hardware_type == "Node" \
                    else self._component_samples(hardware_type, items)
            except RECOVERABLE_ERRORS as e:
                COLLECTOR_ERRORS.labels(ip=self.ip, collector=self.name).inc()
                self.logger.warning(f"Failed to collect {hardware_type} hardware from {self.ip}: {e}")
                continue
            yield from samples

    def _node_samples(self, nodes):
        samples = []
        for node in nodes:
            state = node.get("lifecycle_state")
            labels = (label(node.get("name")), label(node.get("serial_number")),
                      label(state), label(node.get("appliance_id")))
            samples.append(Sample("node_state", self.state_map.value(state), labels))
        return samples

    def _component_samples(self, hardware_type, items):
        samples = []
        for item in items:
            name = label(item.get("name"))
            appliance_id = label(item.get("appliance_id"))
            state = status_value(item, "lifecycle_state", self.state_map)
            if state is not None:
                samples.append(Sample(hardware_type + "_state", state, (name, appliance_id)))
            if hardware_type == "Drive":
                details = item.get("extra_details") or {}
                size = field_value(details, "size")
                if size is not None:
                    samples.append(Sample("drive_size", size,
                                          (name, appliance_id, label(details.get("drive_type")))))
        return samples
