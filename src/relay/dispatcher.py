"""
Request dispatcher for the routing relay.
Validates the inbound action once, then walks the ordered API keys until one
upstream attempt succeeds or the keys run out.
"""

import json
from typing import Any, Sequence, Tuple

from common.logging import get_logger
from config.config import Relay_Messages
from relay.call_spec import OrsOptions, build_call_spec, parse_body, validate_request
from relay.exceptions import ConfigurationError, RelayError, UpstreamError
from relay.upstream import UpstreamCaller

logger = get_logger(__name__)


def mask_key(api_key: str) -> str:
    """Keep only the last four characters of a key for log output."""
    return f"***{api_key[-4:]}" if len(api_key) > 4 else "***"


def _json_response(status: int, payload: Any) -> Tuple[int, bytes]:
    return status, json.dumps(payload).encode("utf-8")


def _error_response(error: RelayError) -> Tuple[int, bytes]:
    return _json_response(error.status_code, {"error": error.message})


class Dispatcher:
    """
    Relays one inbound request through the key-rotation loop.
    Holds no per-request state; the key list is fixed at construction.
    """

    def __init__(
        self,
        api_keys: Sequence[str],
        caller: UpstreamCaller,
        options: OrsOptions = None,
    ):
        """
        Args:
            api_keys (Sequence[str]): Credentials in retry priority order.
            caller (UpstreamCaller): Executes outbound calls.
            options (OrsOptions, optional): Upstream endpoint settings.
        """
        self.api_keys = tuple(api_keys)
        self.caller = caller
        self.options = options or OrsOptions()

    def handle(self, raw_body: bytes) -> Tuple[int, bytes]:
        """
        Relay one inbound request.

        Args:
            raw_body (bytes): Raw inbound JSON body.

        Returns:
            tuple: (http_status, json_body_bytes)
        """
        data, error = parse_body(raw_body)
        if error:
            logger.warning("Rejected inbound request", extra={"error": error.message})
            return _error_response(error)

        request, error = validate_request(data)
        if error:
            logger.warning(
                "Rejected inbound request",
                extra={"action": data.get("action"), "error": error.message},
            )
            return _error_response(error)

        if not self.api_keys:
            logger.error("No API keys configured", extra={"action": request.action.value})
            return _error_response(ConfigurationError(Relay_Messages.NO_KEYS_CONFIGURED))

        total = len(self.api_keys)
        last_error = None
        for index, api_key in enumerate(self.api_keys, start=1):
            spec = build_call_spec(request, api_key, self.options)
            payload, upstream_error = self.caller.call(spec)

            if upstream_error is None:
                logger.info(
                    "Relayed request",
                    extra={"action": request.action.value, "attempt": index, "keys": total},
                )
                return _json_response(200, payload)

            suffix = Relay_Messages.KEY_ATTEMPT_SUFFIX.format(index=index, total=total)
            last_error = UpstreamError(
                f"{upstream_error.message} {suffix}",
                http_status=upstream_error.http_status,
                original_error=upstream_error,
            )
            logger.warning(
                "Upstream attempt failed",
                extra={
                    "action": request.action.value,
                    "key": mask_key(api_key),
                    "attempt": index,
                    "keys": total,
                    "http_status": last_error.http_status,
                    "error": last_error.message,
                },
            )

        return _error_response(last_error)


def handle_request(
    dispatcher: Dispatcher, raw_body: bytes, expose_debug: bool = True
) -> Tuple[int, bytes]:
    """
    Boundary around Dispatcher.handle that turns any unexpected fault into a 500.

    Args:
        dispatcher (Dispatcher): Dispatcher to run.
        raw_body (bytes): Raw inbound JSON body.
        expose_debug (bool): Include the fault message as 'debug_message'.

    Returns:
        tuple: (http_status, json_body_bytes)
    """
    try:
        return dispatcher.handle(raw_body)
    except Exception as e:
        logger.error("Unhandled error while relaying request", extra={"error": str(e)}, exc_info=True)
        payload = {"error": Relay_Messages.INTERNAL_ERROR}
        if expose_debug:
            payload["debug_message"] = str(e)
        return _json_response(500, payload)
