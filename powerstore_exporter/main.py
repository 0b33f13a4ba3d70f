#!/usr/bin/env python3

# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Entry point for the PowerStore metrics exporter.

Startup order:
- load and validate the YAML configuration
- configure logging
- per array: log in, build the identity cache, register collectors
- serve /metrics/<ip>/<group>, /performance and /health until interrupted
"""

import argparse
import concurrent.futures
import json
import logging
import os
import sys
import time

from powerstore_exporter import __version__
from powerstore_exporter.client import RequestBudget
from powerstore_exporter.config import DEFAULT_CONFIG_PATH, load_settings
from powerstore_exporter.errors import ConfigError
from powerstore_exporter.registry import TargetExporter
from powerstore_exporter.server import create_server

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

DATEFMT = '%Y-%m-%dT%H:%M:%SZ'


class LogfmtFormatter(logging.Formatter):
    """key=value lines: ts, level, caller, msg."""

    def format(self, record):
        message = record.getMessage()
        if record.exc_info:
            message = f"{message} {self.formatException(record.exc_info)}"
        escaped = message.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
        return (f'ts={self.formatTime(record, DATEFMT)} level={record.levelname.lower()} '
                f'caller={record.module}:{record.lineno} msg="{escaped}"')


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, DATEFMT),
            "level": record.levelname.lower(),
            "caller": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: str = "info", path: str = None, fmt: str = "logfmt") -> None:
    """
    Install console and optional file handlers on the root logger.

    Args:
        level: debug, info, warn or error; anything else means info
        path: Log file; unusable paths fall back to console only
        fmt: 'logfmt' or 'json'
    """
    log_level = LOG_LEVELS.get(str(level).lower(), logging.INFO)
    formatter = JsonFormatter() if fmt == "json" else LogfmtFormatter()

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(log_level)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if path:
        logfile_dir = os.path.dirname(path) or '.'
        if os.path.isdir(logfile_dir) and os.access(logfile_dir, os.W_OK):
            try:
                file_handler = logging.FileHandler(path)
                file_handler.setFormatter(formatter)
                root.addHandler(file_handler)
                logging.info(f'Logging to file: {path}')
            except OSError as e:
                logging.error(f'Failed to configure file logging to {path}: {e}')
                logging.warning('Falling back to console logging only')
        else:
            logging.error(f'Logfile directory {logfile_dir} does not exist or is not writable')
            logging.warning('Falling back to console logging only')

    # Never allow requests/urllib3 to log below INFO: URLs and headers carry credentials
    requests_level = max(log_level, logging.INFO)
    logging.getLogger("requests").setLevel(level=requests_level)
    logging.getLogger("urllib3").setLevel(level=requests_level)


def build_targets(settings, budget):
    """Create and set up one TargetExporter per configured array, in parallel."""
    targets = {}
    for storage in settings.storage_list:
        targets[storage.ip] = TargetExporter(storage, budget, settings.exporter.workers)
    if not targets:
        return targets

    with concurrent.futures.ThreadPoolExecutor(max_workers=len(targets)) as executor:
        futures = {executor.submit(target.setup): ip for ip, target in targets.items()}
        for future in concurrent.futures.as_completed(futures):
            future.result()
    return targets


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export PowerStore metrics for Prometheus")
    parser.add_argument('-c', '--config', type=str, default=DEFAULT_CONFIG_PATH,
                        help=f'Path to YAML configuration file (default: {DEFAULT_CONFIG_PATH}).')
    parser.add_argument('--port', type=int, default=None,
                        help='Listening port, overrides exporter.port.')
    parser.add_argument('--loglevel', type=str, choices=['debug', 'info', 'warn', 'error'], default=None,
                        help='Log level, overrides log.level.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    CMD = parser.parse_args(argv)

    try:
        settings = load_settings(CMD.config)
    except ConfigError as e:
        configure_logging("info")
        logging.error(str(e))
        sys.exit(1)

    configure_logging(CMD.loglevel or settings.log.level, settings.log.path, settings.log.type)
    LOG = logging.getLogger(__name__)

    port = CMD.port if CMD.port is not None else settings.exporter.port
    LOG.info(f"Starting PowerStore exporter {__version__}: {len(settings.storage_list)} arrays, "
             f"reqLimit={settings.exporter.req_limit}, workers={settings.exporter.workers}")

    budget = RequestBudget(settings.exporter.req_limit)
    start = time.time()
    targets = build_targets(settings, budget)
    LOG.info(f"Initialized {len(targets)} arrays in {time.time() - start:.1f}s")

    try:
        server = create_server(port, targets)
    except OSError as e:
        LOG.error(f"Cannot listen on port {port}: {e}")
        sys.exit(1)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        LOG.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
