# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Reconciliation engine for AWS::EC2::CapacityReservation.

Each operation runs as one synchronous sequence of EC2 calls and returns a
ProgressEvent. A create that has not stabilized returns IN_PROGRESS with a
callback context; the host re-invokes create with that context after the
suggested delay and the engine resumes from the stabilization check
instead of issuing a second create call.

Failures are carried as Fault values and mapped to error codes by the
error classifier; the engine only catches EC2APIError at the call sites.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from ..clients.ec2_client import EC2APIError, EC2Client
from ..config import Settings
from ..models import (
    TYPE_NAME,
    Action,
    CallbackContext,
    Fault,
    FaultKind,
    HandlerErrorCode,
    ProgressEvent,
    ReservationState,
    ResourceHandlerRequest,
    ResourceModel,
)
from . import translator
from .error_classifier import failure_event, fault_from_exception
from .stabilization import create_stabilized, delete_stabilized, update_stabilized

logger = logging.getLogger(__name__)

# States in which a described reservation counts as no longer existing
ABSENT_STATES = (ReservationState.CANCELLED, ReservationState.EXPIRED)


@dataclass
class DescribeOutcome:
    """Result of describing one reservation: a response or a fault."""

    response: dict[str, Any] | None = None
    fault: Fault | None = None


def describe_reservation(client: EC2Client, model: ResourceModel) -> DescribeOutcome:
    """
    Describe the reservation identified by the model.

    Shared by Read and by the Update/Delete existence checks. A missing ID
    fails before any remote call; a reservation that is cancelled, expired
    or not returned at all fails as absent even though the call succeeded.

    Args:
        client: EC2 client
        model: Resource model carrying the reservation ID

    Returns:
        DescribeOutcome with either the describe response or a fault
    """
    if model.id is None:
        logger.info("Capacity reservation ID is missing")
        return DescribeOutcome(fault=Fault(
            kind=FaultKind.MISSING_IDENTIFIER,
            message=f"Resource of type '{TYPE_NAME}' cannot be found: no identifier given",
        ))

    try:
        response = client.describe_capacity_reservations(
            **translator.translate_to_read_request(model)
        )
    except EC2APIError as e:
        logger.error(f"Error while describing capacity reservation {model.id}")
        return DescribeOutcome(fault=fault_from_exception(e))

    reservations = response.get("CapacityReservations") or []
    state = reservations[0].get("State") if reservations else None
    if not reservations or any(ReservationState.matches(state, s) for s in ABSENT_STATES):
        logger.info(f"Capacity reservation {model.id} is absent (state={state})")
        return DescribeOutcome(fault=Fault(
            kind=FaultKind.RESOURCE_ABSENT,
            message=f"Resource of type '{TYPE_NAME}' with identifier '{model.id}' was not found.",
        ))

    logger.info(f"{TYPE_NAME} {model.id} has successfully been read.")
    return DescribeOutcome(response=response)


class ReconciliationEngine:
    """
    Drives a capacity reservation through Create, Read, Update, Delete and
    List.

    The engine holds no state between invocations; everything needed to
    resume a stabilizing create travels in the CallbackContext.
    """

    def __init__(
        self,
        client: EC2Client,
        callback_delay_seconds: int = 30,
        max_stabilization_attempts: int = 60,
    ):
        """
        Initialize the engine.

        Args:
            client: EC2 client for the target account and region
            callback_delay_seconds: Delay suggested to the host while a
                                   create is stabilizing
            max_stabilization_attempts: Stabilization checks allowed before
                                       the create is failed
        """
        self.client = client
        self.callback_delay_seconds = callback_delay_seconds
        self.max_stabilization_attempts = max_stabilization_attempts

        self._operations: dict[Action, Callable[..., ProgressEvent]] = {
            Action.CREATE: self.create,
            Action.READ: self.read,
            Action.UPDATE: self.update,
            Action.DELETE: self.delete,
            Action.LIST: self.list,
        }

    @classmethod
    def from_settings(cls, client: EC2Client, config: Settings) -> "ReconciliationEngine":
        return cls(
            client,
            callback_delay_seconds=config.callback_delay_seconds,
            max_stabilization_attempts=config.max_stabilization_attempts,
        )

    def handle(
        self,
        action: Action | str,
        request: ResourceHandlerRequest,
        context: CallbackContext | None = None,
    ) -> ProgressEvent:
        """
        Dispatch one host invocation.

        Args:
            action: Operation to run
            request: Desired state and invocation context
            context: Callback context from the previous invocation, if any

        Returns:
            ProgressEvent for the host
        """
        try:
            action = Action(action)
        except ValueError:
            return ProgressEvent.failed(
                HandlerErrorCode.INVALID_REQUEST,
                f"Unsupported action: {action}",
            )

        logger.info(f"Handling {action.value} for {TYPE_NAME}")
        try:
            return self._operations[action](request, context or CallbackContext())
        except Exception as e:
            logger.exception(f"Unexpected error during {action.value}")
            return failure_event(
                fault_from_exception(e),
                model=request.desired_resource_state,
            )

    def create(
        self,
        request: ResourceHandlerRequest,
        context: CallbackContext | None = None,
    ) -> ProgressEvent:
        """
        Create a reservation and wait for it to become active.

        The first invocation issues CreateCapacityReservation and records
        the returned ID, instance match criteria and tenancy. Later
        invocations (context carries the ID) only re-describe the
        reservation. Once active, the result comes from read().
        """
        context = context or CallbackContext()
        model = request.desired_model().model_copy(deep=True)

        if context.is_stabilizing:
            model.id = context.reservation_id
            model.instance_match_criteria = context.instance_match_criteria
            model.tenancy = context.tenancy
            check_request = translator.translate_to_read_request(model)
            try:
                response = self.client.describe_capacity_reservations(**check_request)
            except EC2APIError as e:
                return failure_event(fault_from_exception(e), model=model)
        else:
            fault = translator.end_date_fault(model)
            if fault is not None:
                return failure_event(fault, model=model)

            check_request = translator.translate_to_create_request(model, request)
            logger.info(f"Creating {TYPE_NAME} in {model.availability_zone}")
            try:
                response = self.client.create_capacity_reservation(**check_request)
            except EC2APIError as e:
                return failure_event(fault_from_exception(e), model=model)

            reservation = response.get("CapacityReservation") or {}
            model.id = reservation.get("CapacityReservationId")
            model.instance_match_criteria = reservation.get("InstanceMatchCriteria")
            model.tenancy = reservation.get("Tenancy")
            logger.info(f"{TYPE_NAME} {model.id} successfully created.")
            context = CallbackContext(
                reservation_id=model.id,
                instance_match_criteria=model.instance_match_criteria,
                tenancy=model.tenancy,
            )

        attempts = context.stabilization_attempts + 1
        if not create_stabilized(check_request, response):
            if attempts >= self.max_stabilization_attempts:
                return failure_event(
                    Fault(
                        kind=FaultKind.UNEXPECTED,
                        message=(
                            f"{TYPE_NAME} {model.id} did not become active "
                            f"after {attempts} stabilization checks"
                        ),
                    ),
                    model=model,
                )
            logger.info(f"{TYPE_NAME} {model.id} is not active yet (check {attempts})")
            return ProgressEvent.progress(
                model,
                context.model_copy(update={"stabilization_attempts": attempts}),
                self.callback_delay_seconds,
            )

        logger.info(f"{TYPE_NAME} {model.id} has stabilized")
        return self.read(
            request.model_copy(update={"desired_resource_state": model}),
            CallbackContext(),
        )

    def read(
        self,
        request: ResourceHandlerRequest,
        context: CallbackContext | None = None,
    ) -> ProgressEvent:
        """Describe the reservation and return the fully hydrated model."""
        outcome = describe_reservation(self.client, request.desired_model())
        if outcome.fault is not None:
            return failure_event(outcome.fault)

        return ProgressEvent.success(translator.translate_from_read_response(outcome.response))

    def update(
        self,
        request: ResourceHandlerRequest,
        context: CallbackContext | None = None,
    ) -> ProgressEvent:
        """
        Modify the end date policy and/or instance count.

        The end date is validated locally, then the reservation must exist
        (same check as read) before the modify call is made. Only supplied
        fields are sent.
        """
        model = request.desired_model()

        # A missing ID is reported as NotFound ahead of input errors
        if model.id is not None:
            fault = translator.end_date_fault(model)
            if fault is not None:
                return failure_event(fault, model=model)

        outcome = describe_reservation(self.client, model)
        if outcome.fault is not None:
            return failure_event(outcome.fault, model=model)

        update_request = translator.translate_to_update_request(model)
        try:
            response = self.client.modify_capacity_reservation(**update_request)
        except EC2APIError as e:
            logger.error(f"{TYPE_NAME} has thrown error in Update.")
            return failure_event(fault_from_exception(e), model=model)

        logger.info(f"{TYPE_NAME} {model.id} has successfully been updated.")
        stabilized = update_stabilized(update_request, response)
        logger.info(f"{TYPE_NAME} [{model.id}] update has stabilized: {stabilized}")

        return self.read(request, CallbackContext())

    def delete(
        self,
        request: ResourceHandlerRequest,
        context: CallbackContext | None = None,
    ) -> ProgressEvent:
        """
        Cancel the reservation.

        A reservation that cannot be verified to exist is reported as an
        invalid request. Deleted reservations carry no model.
        """
        model = request.desired_model()

        outcome = describe_reservation(self.client, model)
        if outcome.fault is not None:
            return failure_event(
                outcome.fault,
                model=model,
                error_code=HandlerErrorCode.INVALID_REQUEST,
            )

        delete_request = translator.translate_to_delete_request(model)
        try:
            response = self.client.cancel_capacity_reservation(**delete_request)
        except EC2APIError as e:
            logger.error(f"Error occurred during cancellation: {e.message}")
            return failure_event(fault_from_exception(e), model=model)

        if not response.get("Return", True):
            logger.warning(f"CancelCapacityReservation returned false for {model.id}")
        logger.info(f"Successfully cancelled capacity reservation: {model.id}")

        stabilized = delete_stabilized(delete_request, response)
        logger.info(f"{TYPE_NAME} [{model.id}] deletion has stabilized: {stabilized}")

        return ProgressEvent.success(None)

    def list(
        self,
        request: ResourceHandlerRequest,
        context: CallbackContext | None = None,
    ) -> ProgressEvent:
        """
        List one page of reservations as identifier-only models.

        Cancelled reservations are left out; the next token is passed
        through unchanged.
        """
        list_request = translator.translate_to_list_request(request.next_token)
        try:
            response = self.client.describe_capacity_reservations(**list_request)
        except EC2APIError as e:
            return failure_event(fault_from_exception(e))

        models = translator.translate_from_list_response(response)
        next_token = response.get("NextToken")
        logger.info(f"Listed {len(models)} capacity reservations (more pages: {next_token is not None})")

        return ProgressEvent.listed(models, next_token)
