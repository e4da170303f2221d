"""
Error kinds for the routing relay.
Instances are returned as values from validation and upstream calls; only the
request boundary deals with raised exceptions.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for all relay errors."""

    status_code = 500

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(RelayError):
    """
    The inbound request cannot be relayed.
    Examples: malformed JSON, missing or unknown action, missing required fields.
    """

    status_code = 400


class UpstreamError(RelayError):
    """
    A single upstream attempt failed and the next key may succeed.
    Examples: connection errors, timeouts, HTTP 429 or any other status >= 400.
    """

    def __init__(
        self,
        message: str,
        http_status: Optional[int] = None,
        original_error: Exception = None,
    ):
        super().__init__(message, original_error)
        self.http_status = http_status


class ConfigurationError(RelayError):
    """The relay has no API keys to try."""

    pass
