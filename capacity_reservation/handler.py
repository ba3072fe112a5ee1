# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Entrypoint invoked by the orchestration host.

The host sends one event per invocation and stores the callbackContext of
an IN_PROGRESS response so it can send it back on the next call.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from .clients import ClientFactory
from .config import settings
from .models import HandlerErrorCode, HandlerEvent, ProgressEvent
from .services import ReconciliationEngine
from .utils.cloudwatch_logger import configure_logging
from .utils.correlation import set_correlation_id

logger = logging.getLogger(__name__)

# Process-wide client factory (lazy loaded) so warm invocations reuse clients
_client_factory: Optional[ClientFactory] = None
_logging_configured = False


def get_client_factory() -> ClientFactory:
    """Return the process-wide client factory, creating it on first use."""
    global _client_factory
    if _client_factory is None:
        config = settings()
        _client_factory = ClientFactory(
            default_region=config.aws_region,
            max_attempts=config.boto_max_attempts,
            retry_mode=config.boto_retry_mode,
        )
    return _client_factory


def _ensure_logging() -> None:
    global _logging_configured
    if _logging_configured:
        return
    config = settings()
    configure_logging(
        level=config.log_level,
        cloudwatch_enabled=config.cloudwatch_enabled,
        log_group=config.cloudwatch_log_group,
        log_stream=config.cloudwatch_log_stream,
        region=config.aws_region,
    )
    _logging_configured = True


def handle(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """
    Handle one host invocation.

    Args:
        event: Host payload with action, region, requestData, nextToken and
               callbackContext
        context: Runtime context supplied by the host (unused)

    Returns:
        Serialized ProgressEvent
    """
    _ensure_logging()

    try:
        handler_event = HandlerEvent.model_validate(event)
    except ValidationError as e:
        logger.error(f"Rejected malformed handler event: {e.error_count()} validation errors")
        return ProgressEvent.failed(
            HandlerErrorCode.INVALID_REQUEST,
            f"Invalid handler request: {e}",
        ).to_response()

    correlation_id = set_correlation_id(handler_event.client_request_token)
    logger.info(f"Received {handler_event.action.value} request (correlation_id={correlation_id})")

    client = get_client_factory().get_client(
        region=handler_event.region,
        credentials=handler_event.request_data.caller_credentials,
    )
    engine = ReconciliationEngine.from_settings(client, settings())

    progress = engine.handle(
        handler_event.action,
        handler_event.to_handler_request(),
        handler_event.callback_context,
    )
    logger.info(f"{handler_event.action.value} finished with status {progress.status.value}")
    return progress.to_response()
