# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""Exception types shared across the exporter."""

from typing import Optional


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ConfigError(ExporterError):
    """Configuration file is missing, unreadable or invalid. Fatal at startup."""


class RequestError(ExporterError):
    """
    An upstream REST call did not produce usable data.

    Args:
        message: Human readable description
        status: HTTP status code, if a response was received
        body: Response body text, if any
    """

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self):
        text = super().__str__()
        if self.status is not None:
            text = f"{text} (HTTP {self.status})"
        if self.body:
            text = f"{text}: {self.body[:512]}"
        return text


class AuthError(RequestError):
    """Login to the array failed."""
