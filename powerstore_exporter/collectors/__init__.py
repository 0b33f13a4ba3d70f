# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Collectors for PowerStore resource families.

Inventory collectors issue one list call per pass:
    ClusterCollector, ApplianceCollector, HardwareCollector, PortCollector,
    VolumeCollector, VolumeGroupCollector, FileSystemCollector, NasCollector

Report collectors fan out one metrics/generate call per cached id:
    CapacityCollector and the classes in performance.py
"""

from powerstore_exporter.collectors.appliance import ApplianceCollector
from powerstore_exporter.collectors.capacity import CapacityCollector
from powerstore_exporter.collectors.cluster import ClusterCollector
from powerstore_exporter.collectors.filesystem import FileSystemCollector
from powerstore_exporter.collectors.hardware import HardwareCollector
from powerstore_exporter.collectors.nas import NasCollector
from powerstore_exporter.collectors.performance import (
    AppliancePerformanceCollector,
    DriveWearCollector,
    EthPortPerformanceCollector,
    FcPortPerformanceCollector,
    FileSystemPerformanceCollector,
    NasPerformanceCollector,
    VolumeGroupPerformanceCollector,
    VolumePerformanceCollector,
)
from powerstore_exporter.collectors.port import PortCollector
from powerstore_exporter.collectors.volume import VolumeCollector
from powerstore_exporter.collectors.volume_group import VolumeGroupCollector

__all__ = [
    "ApplianceCollector",
    "AppliancePerformanceCollector",
    "CapacityCollector",
    "ClusterCollector",
    "DriveWearCollector",
    "EthPortPerformanceCollector",
    "FcPortPerformanceCollector",
    "FileSystemCollector",
    "FileSystemPerformanceCollector",
    "HardwareCollector",
    "NasCollector",
    "NasPerformanceCollector",
    "PortCollector",
    "VolumeCollector",
    "VolumeGroupCollector",
    "VolumeGroupPerformanceCollector",
    "VolumePerformanceCollector",
]
