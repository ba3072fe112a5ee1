"""Callback context carried across handler invocations."""

from pydantic import BaseModel, ConfigDict, Field


class CallbackContext(BaseModel):
    """
    Engine-private state persisted by the host between invocations.

    Empty on the first invocation of any operation. Only the reconciliation
    engine reads or writes it; the host stores it verbatim.
    """

    model_config = ConfigDict(populate_by_name=True)

    reservation_id: str | None = Field(
        None,
        alias="reservationId",
        description="ID returned by CreateCapacityReservation while stabilizing",
    )
    instance_match_criteria: str | None = Field(
        None,
        alias="instanceMatchCriteria",
        description="Instance match criteria from the create response",
    )
    tenancy: str | None = Field(
        None, alias="tenancy", description="Tenancy from the create response"
    )
    stabilization_attempts: int = Field(
        0,
        alias="stabilizationAttempts",
        description="Number of stabilization checks performed so far",
        ge=0,
    )

    @property
    def is_stabilizing(self) -> bool:
        """Whether a create call was already issued in an earlier invocation."""
        return self.reservation_id is not None
