# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Read-only PowerStore REST operations used by the collectors.

Every call holds a permit from a process-wide RequestBudget for its whole
duration, including a re-login and the single retry that follows it.
"""

import json
import logging
import threading
import time
from typing import Any, Dict, Optional

import requests

from powerstore_exporter.connection import REQUEST_DEADLINE, REQUEST_TIMEOUT, PowerStoreSession, read_body
from powerstore_exporter.errors import AuthError, RequestError
from powerstore_exporter.stats import INFLIGHT_REQUESTS, RELOGINS, UPSTREAM_LATENCY, UPSTREAM_REQUESTS

LOG = logging.getLogger(__name__)

SUCCESS_STATUSES = (200, 201, 206)
STALE_SESSION_STATUSES = (401, 302)

FIVE_MINS = "Five_Mins"
ONE_HOUR = "One_Hour"

# metrics/generate entities
APPLIANCE_PERFORMANCE = "performance_metrics_by_appliance"
APPLIANCE_SPACE = "space_metrics_by_appliance"
VOLUME_PERFORMANCE = "performance_metrics_by_volume"
VOLUME_GROUP_PERFORMANCE = "performance_metrics_by_vg"
ETH_PORT_PERFORMANCE = "performance_metrics_by_fe_eth_port"
FC_PORT_PERFORMANCE = "performance_metrics_by_fe_fc_port"
FILE_SYSTEM_PERFORMANCE = "performance_metrics_by_file_system"
NAS_SERVER_PERFORMANCE = "performance_metrics_by_nas_server"
DRIVE_WEAR = "wear_metrics_by_drive"


class RequestBudget:
    """
    Bounded permit pool limiting in-flight upstream calls.

    Tracks the current in-flight count and its peak so the limit can be
    observed from tests and from /performance.
    """

    def __init__(self, limit: int):
        if limit < 1:
            raise ValueError("request budget must be at least 1")
        self.limit = limit
        self._semaphore = threading.BoundedSemaphore(limit)
        self._lock = threading.Lock()
        self.in_flight = 0
        self.peak = 0

    def __enter__(self):
        self._semaphore.acquire()
        with self._lock:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        INFLIGHT_REQUESTS.inc()
        return self

    def __exit__(self, exc_type, exc, tb):
        INFLIGHT_REQUESTS.dec()
        with self._lock:
            self.in_flight -= 1
        self._semaphore.release()
        return False


class ResourceClient:
    """
    Typed REST operations against one array.

    Args:
        session: Authenticated session state for the array
        budget: Shared request budget
        api_version: 'v3' selects the CMA view endpoint for volumes
        api_limit: Page size sent as ``limit`` on list calls (truncates, no paging)
    """

    def __init__(self, session: PowerStoreSession, budget: RequestBudget,
                 api_version: str = "v3", api_limit: int = 5000):
        self.session = session
        self.budget = budget
        self.api_version = api_version
        self.api_limit = api_limit

    @property
    def ip(self) -> str:
        return self.session.ip

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None,
                params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue one REST call and return the decoded JSON.

        A 401 or 302 means the session is stale: log in again and retry once.

        Raises:
            AuthError: Re-login failed
            RequestError: Any other unsuccessful outcome
        """
        with self.budget:
            generation = self.session.generation
            response = self._send(method, path, body, params)
            if response.status_code in STALE_SESSION_STATUSES:
                LOG.warning(f"Authentication token for {self.ip} is invalid (HTTP {response.status_code}), relogin...")
                self._reauthenticate(generation)
                response = self._send(method, path, body, params)
                if response.status_code in STALE_SESSION_STATUSES:
                    raise AuthError(f"{method} {path} still unauthorized after relogin",
                                    status=response.status_code, body=response.text)
            return self._decode(method, path, response)

    def _reauthenticate(self, generation: int) -> None:
        # Another caller already logged in since this request was sent
        if self.session.generation != generation:
            LOG.debug(f"Session for {self.ip} already refreshed, retrying with new token")
            return
        RELOGINS.labels(ip=self.ip).inc()
        try:
            self.session.authenticate()
        except AuthError as e:
            LOG.warning(f"Relogin to {self.ip} failed: {e}")
            raise

    def _send(self, method, path, body, params) -> requests.Response:
        url = self.session.base_url + path
        data = json.dumps(body) if body is not None else None
        start = time.time()
        deadline = time.monotonic() + REQUEST_DEADLINE
        try:
            response = self.session.http.request(
                method, url,
                params=params,
                data=data,
                headers=self.session.auth_headers(),
                cookies=self.session.auth_cookies(),
                timeout=REQUEST_TIMEOUT,
                allow_redirects=False,
                stream=True,
            )
            response._content = read_body(response, deadline)
        except requests.exceptions.RequestException as e:
            UPSTREAM_REQUESTS.labels(ip=self.ip, method=method, status="error").inc()
            raise RequestError(f"{method} {path} to {self.ip} failed: {e}") from e
        finally:
            UPSTREAM_LATENCY.labels(ip=self.ip).observe(time.time() - start)
        UPSTREAM_REQUESTS.labels(ip=self.ip, method=method, status=str(response.status_code)).inc()
        return response

    def _decode(self, method, path, response) -> Any:
        if response.status_code not in SUCCESS_STATUSES:
            raise RequestError(f"{method} {path} on {self.ip} failed",
                               status=response.status_code, body=response.text)
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(f"{method} {path} on {self.ip} returned invalid JSON",
                               status=response.status_code, body=response.text) from e

    def _list(self, resource: str, select: str = "*", **filters) -> Any:
        params = {"select": select, "limit": self.api_limit}
        for key, value in filters.items():
            params[key] = f"eq.{value}"
        return self.request("GET", resource, params=params)

    # Inventory lists

    def cluster(self):
        return self._list("cluster")

    def appliances(self):
        return self._list("appliance")

    def volumes(self):
        return self._list(self._volume_resource())

    def volume_groups(self):
        return self._list("volume_group_list_cma_view")

    def ports(self, port_type: str):
        return self._list(port_type)

    def hardware(self, hardware_type: str):
        return self._list("hardware", type=hardware_type)

    def file_systems(self):
        return self._list("file_system")

    def nas_servers(self):
        return self._list("nas_server")

    # Identity lists (id and name only)

    def appliance_ids(self):
        return self._list("appliance", "id,name")

    def volume_ids(self):
        return self._list(self._volume_resource(), "id,name")

    def volume_group_ids(self):
        return self._list("volume_group_list_cma_view", "id,name,appliance_ids")

    def eth_port_ids(self):
        return self._list("eth_port", "id,name")

    def fc_port_ids(self):
        return self._list("fc_port", "id,name")

    def drive_ids(self):
        return self._list("hardware", "id,name", type="Drive")

    def nas_server_ids(self):
        return self._list("nas_server", "id,name")

    def file_system_ids(self):
        return self._list("file_system", "id,name")

    def _volume_resource(self) -> str:
        return "volume_list_cma_view" if self.api_version == "v3" else "volume"

    # Time series reports

    def generate_metrics(self, entity: str, entity_id: str, interval: str = FIVE_MINS):
        """Request a metric series; the response is a time-ordered list of buckets."""
        body = {"entity": entity, "entity_id": entity_id, "interval": interval}
        return self.request("POST", "metrics/generate", body=body)

    def appliance_performance(self, appliance_id: str):
        return self.generate_metrics(APPLIANCE_PERFORMANCE, appliance_id, FIVE_MINS)

    def appliance_capacity(self, appliance_id: str):
        return self.generate_metrics(APPLIANCE_SPACE, appliance_id, ONE_HOUR)

    def volume_performance(self, volume_id: str):
        return self.generate_metrics(VOLUME_PERFORMANCE, volume_id, FIVE_MINS)

    def volume_group_performance(self, volume_group_id: str):
        return self.generate_metrics(VOLUME_GROUP_PERFORMANCE, volume_group_id, FIVE_MINS)

    def eth_port_performance(self, port_id: str):
        return self.generate_metrics(ETH_PORT_PERFORMANCE, port_id, FIVE_MINS)

    def fc_port_performance(self, port_id: str):
        return self.generate_metrics(FC_PORT_PERFORMANCE, port_id, FIVE_MINS)

    def file_system_performance(self, file_system_id: str):
        return self.generate_metrics(FILE_SYSTEM_PERFORMANCE, file_system_id, FIVE_MINS)

    def nas_server_performance(self, nas_server_id: str):
        return self.generate_metrics(NAS_SERVER_PERFORMANCE, nas_server_id, FIVE_MINS)

    def drive_wear(self, drive_id: str):
        return self.generate_metrics(DRIVE_WEAR, drive_id, FIVE_MINS)
