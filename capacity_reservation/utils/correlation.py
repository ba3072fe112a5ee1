# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Correlation ID management for handler invocation tracing.

Each invocation is tagged with a correlation ID (the host's client request
token when present) so that every log line emitted while handling it can
be tied back to the originating stack operation.
"""

import contextvars
import logging
import uuid

logger = logging.getLogger(__name__)

# Context variable to store correlation ID per invocation
_correlation_id_context: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def generate_correlation_id() -> str:
    """
    Generate a unique correlation ID using UUID4.

    Returns:
        A unique correlation ID string in UUID4 format
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None) -> str:
    """
    Set the correlation ID in the current context.

    Args:
        correlation_id: The ID to use; a new one is generated when empty

    Returns:
        The correlation ID now in effect
    """
    correlation_id = correlation_id or generate_correlation_id()
    _correlation_id_context.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """
    Get the correlation ID from the current context.

    Returns:
        The correlation ID if set, or an empty string if not set
    """
    return _correlation_id_context.get()


class CorrelationIdFilter(logging.Filter):
    """Logging filter that stamps records with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True
