"""Enumerations shared by the handler models."""

from enum import Enum


class Action(str, Enum):
    """Lifecycle operations the host can invoke."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST = "LIST"


class OperationStatus(str, Enum):
    """Status reported back to the host after each invocation."""

    IN_PROGRESS = "IN_PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class HandlerErrorCode(str, Enum):
    """Standardized failure kinds surfaced to the host."""

    NOT_FOUND = "NotFound"
    INVALID_REQUEST = "InvalidRequest"
    SERVICE_INTERNAL_ERROR = "ServiceInternalError"
    GENERAL_SERVICE_EXCEPTION = "GeneralServiceException"


class ReservationState(str, Enum):
    """Lifecycle states reported by DescribeCapacityReservations."""

    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"

    @classmethod
    def matches(cls, raw: str | None, state: "ReservationState") -> bool:
        """Compare a raw API state against a known state, ignoring case."""
        return raw is not None and raw.lower() == state.value


class EndDateType(str, Enum):
    """Expiry policy of a capacity reservation."""

    UNLIMITED = "unlimited"
    LIMITED = "limited"
