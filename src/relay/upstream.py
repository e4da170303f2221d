"""
HTTP client for the OpenRouteService API.
Performs one blocking call per call spec and normalizes the outcome into a
(payload, error) pair.
"""

import json
from typing import Any, Optional, Tuple

import requests

from common.logging import get_logger
from config.config import Relay_Messages, Upstream_Call_Config
from relay.call_spec import CallSpec
from relay.exceptions import UpstreamError

logger = get_logger(__name__)


def extract_error_message(body: str) -> str:
    """
    Pull a human-readable message out of an upstream error body.

    Checks the JSON keys 'error', 'message' and 'error_message' in that order;
    the first string value wins. Falls back to a prefix of the raw body, or to a
    generic message when the body is empty.

    Args:
        body (str): Raw response body.

    Returns:
        str: Message to report to the client.
    """
    message = ""
    try:
        details = json.loads(body) if body else None
    except ValueError:
        details = None

    if isinstance(details, dict):
        for key in Upstream_Call_Config.ERROR_MESSAGE_KEYS:
            if isinstance(details.get(key), str):
                message = details[key]
                break

    if not message and body:
        message = body[: Upstream_Call_Config.RAW_BODY_ERROR_LIMIT]
    elif not message:
        message = Relay_Messages.UNEXPECTED_RESPONSE
    return message


class UpstreamCaller:
    """
    Stateless caller for the upstream routing API.
    Holds only the HTTP session and the per-call timeout.
    """

    def __init__(self, timeout: int = 30, session: requests.Session = None):
        """
        Args:
            timeout (int): Seconds to wait for the upstream before giving up.
            session (requests.Session, optional): Session to send requests with.
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def call(self, spec: CallSpec) -> Tuple[Any, Optional[UpstreamError]]:
        """
        Execute one outbound call.

        Args:
            spec (CallSpec): URL, method, body and headers of the call.

        Returns:
            tuple: (payload, None) when the upstream answered with a status below 400,
                   (None, UpstreamError) on transport failure or an error status.
        """
        try:
            response = self.session.request(
                spec.method,
                spec.url,
                data=spec.body.encode("utf-8") if spec.body is not None else None,
                headers=spec.header_dict(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Upstream request failed", extra={"error": str(e)})
            return None, UpstreamError(
                Relay_Messages.TRANSPORT_ERROR.format(error=e), original_error=e
            )

        body = response.text or ""
        logger.info(
            "Upstream response received",
            extra={
                "status": response.status_code,
                "body_preview": body[: Upstream_Call_Config.RAW_BODY_LOG_LIMIT],
            },
        )

        if response.status_code >= 400:
            message = extract_error_message(body)
            return None, UpstreamError(
                f"HTTP {response.status_code}: {message}", http_status=response.status_code
            )

        try:
            return response.json(), None
        except ValueError:
            logger.warning("Upstream success body is not JSON", extra={"status": response.status_code})
            return None, None

    def close(self):
        self.session.close()
