"""Structured failure values threaded through the reconciliation engine."""

from enum import Enum

from pydantic import BaseModel, Field


class FaultKind(str, Enum):
    """Where a failure originated."""

    # Local precondition: no identifier on the model
    MISSING_IDENTIFIER = "missing_identifier"
    # Describe succeeded but the reservation is cancelled, expired or unknown
    RESOURCE_ABSENT = "resource_absent"
    # Local validation of caller input
    INVALID_INPUT = "invalid_input"
    # EC2 answered with an error
    SERVICE = "service"
    UNEXPECTED = "unexpected"


class Fault(BaseModel):
    """A failure captured as a value rather than a raised exception."""

    kind: FaultKind = Field(..., description="Origin of the failure")
    message: str = Field(..., description="Message surfaced to the host verbatim")
    status_code: int | None = Field(
        None, description="HTTP status of the service response, if any"
    )
    error_code: str | None = Field(None, description="Service error code, if any")

    @property
    def is_local_precondition(self) -> bool:
        return self.kind in (FaultKind.MISSING_IDENTIFIER, FaultKind.RESOURCE_ABSENT)
