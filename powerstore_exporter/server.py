# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
HTTP front end.

    /metrics/<array-ip>/<group>   one scrape of that array's group registry
    /performance                  the exporter's own metrics
    /health                       liveness
"""

import logging
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from powerstore_exporter.stats import SCRAPE_DURATION

LOG = logging.getLogger(__name__)


class ExporterHandler(BaseHTTPRequestHandler):
    """HTTP handler for the scrape endpoints."""

    def do_GET(self):
        path = self.path.split("?", 1)[0]
        if path == "/health":
            self._reply(200, b"OK", "text/plain")
        elif path == "/performance":
            self._reply(200, generate_latest(REGISTRY), CONTENT_TYPE_LATEST)
        elif path.startswith("/metrics/"):
            self._scrape(path)
        else:
            self._reply(404, b"Not Found", "text/plain")

    def _scrape(self, path):
        parts = path[len("/metrics/"):].strip("/").split("/")
        if len(parts) != 2:
            self._reply(404, b"Not Found", "text/plain")
            return
        ip, group = parts
        target = self.server.targets.get(ip)
        if target is None or not target.has_group(group):
            self._reply(404, f"Unknown target or group: {ip}/{group}".encode(), "text/plain")
            return

        start = time.time()
        try:
            output = target.render(group)
        except Exception as e:
            LOG.error(f"Failed to render {group} metrics for {ip}: {e}")
            self._reply(500, b"Internal Server Error", "text/plain")
            return
        finally:
            SCRAPE_DURATION.labels(ip=ip, group=group).observe(time.time() - start)
        self._reply(200, output, CONTENT_TYPE_LATEST)

    def _reply(self, status: int, body: bytes, content_type: str):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format_string, *args):
        LOG.debug(f"{self.address_string()} {format_string % args}")


class ExporterServer(ThreadingHTTPServer):
    """One thread per scrape; targets maps array ip -> TargetExporter."""

    daemon_threads = True

    def __init__(self, address, targets: Dict[str, object]):
        self.targets = targets
        super().__init__(address, ExporterHandler)


def create_server(port: int, targets: Dict[str, object], host: str = "") -> ExporterServer:
    server = ExporterServer((host, port), targets)
    LOG.info(f"Metrics server listening on port {server.server_address[1]}")
    return server
