"""Data models for the capacity reservation handler."""

from .enums import (
    Action,
    OperationStatus,
    HandlerErrorCode,
    ReservationState,
    EndDateType,
)
from .resource import (
    TYPE_NAME,
    CR_RESOURCE_TYPE,
    Tag,
    TagSpecification,
    ResourceModel,
)
from .context import CallbackContext
from .fault import Fault, FaultKind
from .progress import ProgressEvent
from .request import Credentials, ResourceHandlerRequest, RequestData, HandlerEvent

__all__ = [
    "Action",
    "OperationStatus",
    "HandlerErrorCode",
    "ReservationState",
    "EndDateType",
    "TYPE_NAME",
    "CR_RESOURCE_TYPE",
    "Tag",
    "TagSpecification",
    "ResourceModel",
    "CallbackContext",
    "Fault",
    "FaultKind",
    "ProgressEvent",
    "Credentials",
    "ResourceHandlerRequest",
    "RequestData",
    "HandlerEvent",
]
