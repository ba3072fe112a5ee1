"""Stabilization predicates for mutating operations.

Each predicate answers whether the reservation has reached the state the
step requires, given the request and the most recent response. Predicates
never wait or retry; the reconciliation engine turns a False result into
an IN_PROGRESS event and the host decides when to call back.
"""

import logging
from typing import Any

from ..models import ReservationState

logger = logging.getLogger(__name__)


def reservation_state(response: dict[str, Any] | None) -> str | None:
    """
    Extract the lifecycle state from a create or describe response.

    Returns:
        The raw state string, or None if the response carries none
    """
    if not response:
        return None
    if "CapacityReservation" in response:
        return response["CapacityReservation"].get("State")
    reservations = response.get("CapacityReservations") or []
    if reservations:
        return reservations[0].get("State")
    return None


def create_stabilized(request: dict[str, Any], response: dict[str, Any]) -> bool:
    """A created reservation is stable once it is active."""
    state = reservation_state(response)
    logger.info(f"Capacity reservation is in {state} state")
    return ReservationState.matches(state, ReservationState.ACTIVE)


def update_stabilized(request: dict[str, Any], response: dict[str, Any]) -> bool:
    # ModifyCapacityReservation is applied synchronously
    return True


def delete_stabilized(request: dict[str, Any], response: dict[str, Any]) -> bool:
    # CancelCapacityReservation is applied synchronously
    return True
