# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.collectors.base import (
    RECOVERABLE_ERRORS, BaseCollector, MetricTable, Sample, StatusMap, label, parse_speed, records,
    status_value
)
from powerstore_exporter.metrics_config import LINK_UP, PORT_HELP, PORT_PARAMS, PORT_TYPES
from powerstore_exporter.stats import COLLECTOR_ERRORS


class PortCollector(BaseCollector):
    """Link state and negotiated speed of front-end Ethernet and FC ports."""

    name = "port"
    link_map = StatusMap(LINK_UP)

    def build_descriptors(self):
        metrics = {}
        for port_type in PORT_TYPES:
            table = MetricTable(f"powerstore_{port_type}_", PORT_PARAMS,
                                ["appliance_id", f"{port_type}_id"], PORT_HELP)
            for field, descriptor in table.descriptors().items():
                metrics[f"{port_type}.{field}"] = descriptor
        return metrics

    def gather(self):
        for port_type in PORT_TYPES:
            try:
                ports = records(self.client.ports(port_type))
            except RECOVERABLE_ERRORS as e:
                COLLECTOR_ERRORS.labels(ip=self.ip, collector=self.name).inc()
                self.logger.warning(f"Failed to collect {port_type} from {self.ip}: {e}")
                continue
            for port in ports:
                labels = (label(port.get("appliance_id")), label(port.get("name")))
                link_up = status_value(port, "is_link_up", self.link_map)
                if link_up is not None:
                    yield Sample(f"{port_type}.is_link_up", link_up, labels)
                speed = parse_speed(port.get("current_speed"))
                if speed is None:
                    self.logger.debug(f"Unparseable speed {port.get('current_speed')!r} on {port.get('name')}")
                    continue
                yield Sample(f"{port_type}.current_speed", speed, labels)
