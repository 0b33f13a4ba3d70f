# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Per-array exposition: one CollectorRegistry per resource group.
"""

import logging
from typing import Dict

from prometheus_client import CollectorRegistry, generate_latest

from powerstore_exporter.cache import IdentityCache
from powerstore_exporter.client import RequestBudget, ResourceClient
from powerstore_exporter.collectors import (
    ApplianceCollector,
    AppliancePerformanceCollector,
    CapacityCollector,
    ClusterCollector,
    DriveWearCollector,
    EthPortPerformanceCollector,
    FcPortPerformanceCollector,
    FileSystemCollector,
    FileSystemPerformanceCollector,
    HardwareCollector,
    NasCollector,
    NasPerformanceCollector,
    PortCollector,
    VolumeCollector,
    VolumeGroupCollector,
    VolumeGroupPerformanceCollector,
    VolumePerformanceCollector,
)
from powerstore_exporter.config import DEFAULT_WORKERS, StorageConfig
from powerstore_exporter.connection import PowerStoreSession
from powerstore_exporter.errors import AuthError

LOG = logging.getLogger(__name__)

# URL group segment -> collectors registered in that group's registry
RESOURCE_GROUPS = {
    "cluster": [ClusterCollector],
    "port": [PortCollector, FcPortPerformanceCollector, EthPortPerformanceCollector],
    "file": [FileSystemCollector, FileSystemPerformanceCollector],
    "hardware": [HardwareCollector, DriveWearCollector],
    "volume": [VolumeCollector, VolumePerformanceCollector],
    "appliance": [ApplianceCollector, AppliancePerformanceCollector],
    "nas": [NasCollector, NasPerformanceCollector],
    "volumeGroup": [VolumeGroupCollector, VolumeGroupPerformanceCollector],
    "capacity": [CapacityCollector],
}


class TargetExporter:
    """
    Everything needed to serve one array: session, client, identity cache
    and the per-group registries.

    Args:
        storage: Array configuration
        budget: Process-wide request budget
        workers: Fan-out pool size per collector pass
        session: Optional pre-built session (tests)
    """

    def __init__(self, storage: StorageConfig, budget: RequestBudget,
                 workers: int = DEFAULT_WORKERS, session: PowerStoreSession = None):
        self.storage = storage
        self.ip = storage.ip
        self.session = session if session is not None else PowerStoreSession(storage, pool_size=budget.limit)
        self.client = ResourceClient(self.session, budget, storage.api_version, storage.api_limit)
        self.cache = IdentityCache(self.client)
        self.workers = workers
        self.registries: Dict[str, CollectorRegistry] = {}

    def setup(self) -> None:
        """
        Log in, build the identity cache and register every collector.

        A failed login is logged; the cache is still attempted so that a
        transient outage at startup only costs the types that fail.
        """
        try:
            self.session.authenticate()
        except AuthError as e:
            LOG.error(f"Initial login to {self.ip} failed: {e}")

        self.cache.build_all()

        for group, collector_classes in RESOURCE_GROUPS.items():
            registry = CollectorRegistry()
            for collector_class in collector_classes:
                registry.register(collector_class(self.client, self.cache, self.workers))
            self.registries[group] = registry
        LOG.info(f"Registered {len(self.registries)} metric groups for {self.ip}")

    def has_group(self, group: str) -> bool:
        return group in self.registries

    def render(self, group: str) -> bytes:
        """Run every collector of the group once and return the exposition text."""
        return generate_latest(self.registries[group])
