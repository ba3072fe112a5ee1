"""Mapping of failures onto the handler error taxonomy."""

import logging

from ..clients.ec2_client import EC2APIError
from ..models import Fault, FaultKind, HandlerErrorCode, ProgressEvent, ResourceModel

logger = logging.getLogger(__name__)


def fault_from_exception(exc: Exception) -> Fault:
    """
    Capture an exception raised by a remote call as a Fault value.

    Args:
        exc: Exception raised by the EC2 client or during translation

    Returns:
        SERVICE fault for EC2 API errors, UNEXPECTED otherwise
    """
    if isinstance(exc, EC2APIError):
        return Fault(
            kind=FaultKind.SERVICE,
            message=exc.message,
            status_code=exc.status_code,
            error_code=exc.error_code,
        )
    return Fault(kind=FaultKind.UNEXPECTED, message=str(exc) or type(exc).__name__)


def classify(fault: Fault) -> HandlerErrorCode:
    """
    Map a fault onto a handler error code.

    Evaluated in order:
    1. Local precondition (missing ID, absent reservation) -> NotFound
    2. Invalid caller input -> InvalidRequest
    3. Service status 5xx -> ServiceInternalError
    4. Service status 4xx -> InvalidRequest
    5. Anything else -> GeneralServiceException
    """
    if fault.is_local_precondition:
        return HandlerErrorCode.NOT_FOUND
    if fault.kind == FaultKind.INVALID_INPUT:
        return HandlerErrorCode.INVALID_REQUEST
    if fault.kind == FaultKind.SERVICE and fault.status_code is not None:
        if 500 <= fault.status_code < 600:
            return HandlerErrorCode.SERVICE_INTERNAL_ERROR
        if 400 <= fault.status_code < 500:
            return HandlerErrorCode.INVALID_REQUEST
    return HandlerErrorCode.GENERAL_SERVICE_EXCEPTION


def failure_event(
    fault: Fault,
    model: ResourceModel | None = None,
    error_code: HandlerErrorCode | None = None,
) -> ProgressEvent:
    """
    Build the FAILED event for a fault.

    Args:
        fault: The captured failure
        model: Resource model to return alongside the failure
        error_code: Overrides the classified code (used by Delete's
                   existence check)

    Returns:
        FAILED ProgressEvent carrying the fault message verbatim
    """
    code = error_code or classify(fault)
    logger.error(f"Operation failed with {code.value}: {fault.message}")
    return ProgressEvent.failed(code, fault.message, model=model)
