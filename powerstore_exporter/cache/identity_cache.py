# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

import logging
from typing import Any, Dict, List, Optional

from powerstore_exporter.errors import RequestError

LOG = logging.getLogger(__name__)

# resource type -> ResourceClient method returning id/name records
RESOURCE_TYPES = {
    "appliance": "appliance_ids",
    "volume": "volume_ids",
    "volume_group": "volume_group_ids",
    "eth_port": "eth_port_ids",
    "fc_port": "fc_port_ids",
    "drive": "drive_ids",
    "nas_server": "nas_server_ids",
    "file_system": "file_system_ids",
}

# extra fields retained per type besides the name
RETAINED_ATTRIBUTES = {
    "volume_group": ("appliance_ids",),
}


class IdentityCache:
    """
    Per-array id -> display name tables, one per resource type.

    Built once at startup and read-only afterwards. Each table is published
    by replacing the whole dict, so readers never see a partially built one.
    Resources created after startup are not resolved until restart.
    """

    def __init__(self, client):
        """
        Initialize identity cache

        Args:
            client: ResourceClient for the array
        """
        self.client = client
        self._names: Dict[str, Dict[str, str]] = {}
        self._attributes: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def build(self, resource_type: str) -> Dict[str, str]:
        """
        Fetch and publish the id/name table for one resource type.

        A failed fetch is logged and leaves an empty table for that type.

        Args:
            resource_type: One of RESOURCE_TYPES

        Returns:
            The published id -> name mapping
        """
        if resource_type not in RESOURCE_TYPES:
            raise KeyError(f"unknown resource type: {resource_type}")

        fetch = getattr(self.client, RESOURCE_TYPES[resource_type])
        retained = RETAINED_ATTRIBUTES.get(resource_type, ())
        names: Dict[str, str] = {}
        attributes: Dict[str, Dict[str, Any]] = {}
        try:
            records = fetch()
            if not isinstance(records, list):
                raise ValueError(f"expected a list, got {type(records).__name__}")
            for record in records:
                if not isinstance(record, dict) or record.get("id") is None:
                    continue
                resource_id = str(record["id"])
                names[resource_id] = record.get("name") or ""
                if retained:
                    attributes[resource_id] = {field: record.get(field) for field in retained}
        except (RequestError, ValueError) as e:
            LOG.error(f"Failed to build {resource_type} cache for {self.client.ip}: {e}")
            names, attributes = {}, {}

        self._names[resource_type] = names
        self._attributes[resource_type] = attributes
        LOG.info(f"Cached {len(names)} {resource_type} entries for {self.client.ip}")
        return names

    def build_all(self) -> None:
        for resource_type in RESOURCE_TYPES:
            self.build(resource_type)

    def lookup(self, resource_type: str, resource_id: str) -> Optional[str]:
        """Return the display name, or None when the id is unknown."""
        return self._names.get(resource_type, {}).get(resource_id)

    def entries(self, resource_type: str) -> Dict[str, str]:
        return self._names.get(resource_type, {})

    def ids(self, resource_type: str) -> List[str]:
        return list(self.entries(resource_type))

    def attribute(self, resource_type: str, resource_id: str, field: str) -> Any:
        return self._attributes.get(resource_type, {}).get(resource_id, {}).get(field)
