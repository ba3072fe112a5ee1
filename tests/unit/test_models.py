"""Unit tests for resource, context, progress and request models."""

import pytest
from pydantic import ValidationError

from capacity_reservation.models import (
    Action,
    CallbackContext,
    HandlerErrorCode,
    HandlerEvent,
    OperationStatus,
    ProgressEvent,
    ReservationState,
    ResourceModel,
    TagSpecification,
)


class TestResourceModel:
    """Tests for ResourceModel."""

    def test_parses_schema_property_names(self):
        model = ResourceModel.model_validate({
            "Id": "cr-1",
            "AvailabilityZone": "us-east-1a",
            "InstanceType": "t2.micro",
            "InstanceCount": 2,
            "OutPostArn": "arn:aws:outposts:us-east-1:123456789012:outpost/op-1",
            "TagSpecifications": [
                {"ResourceType": "capacity-reservation", "Tags": [{"Key": "k", "Value": "v"}]}
            ],
        })

        assert model.id == "cr-1"
        assert model.instance_count == 2
        assert model.out_post_arn.endswith("op-1")
        assert model.tag_specifications[0].tags[0].key == "k"

    def test_to_properties_drops_unset(self):
        model = ResourceModel(id="cr-1", instance_type="t2.micro")

        assert model.to_properties() == {"Id": "cr-1", "InstanceType": "t2.micro"}

    def test_primary_identifier(self):
        assert ResourceModel(id="cr-1").primary_identifier() == {"Id": "cr-1"}

    def test_negative_instance_count_rejected(self):
        with pytest.raises(ValidationError):
            ResourceModel(instance_count=-1)

    def test_applies_to_reservation(self):
        assert TagSpecification(resource_type="capacity-reservation").applies_to_reservation()
        assert not TagSpecification(resource_type="instance").applies_to_reservation()


class TestReservationState:
    def test_matches_ignores_case(self):
        assert ReservationState.matches("Active", ReservationState.ACTIVE)
        assert ReservationState.matches("CANCELLED", ReservationState.CANCELLED)

    def test_matches_none(self):
        assert not ReservationState.matches(None, ReservationState.ACTIVE)


class TestCallbackContext:
    def test_empty_context_is_not_stabilizing(self):
        context = CallbackContext()

        assert not context.is_stabilizing
        assert context.stabilization_attempts == 0

    def test_round_trips_through_host_json(self):
        context = CallbackContext(reservation_id="cr-1", tenancy="default", stabilization_attempts=4)

        restored = CallbackContext.model_validate(context.model_dump(by_alias=True))

        assert restored == context
        assert restored.is_stabilizing


class TestProgressEvent:
    """Tests for ProgressEvent builders and serialization."""

    def test_success_response(self):
        event = ProgressEvent.success(ResourceModel(id="cr-1"))

        assert event.is_success
        assert event.to_response() == {
            "status": "SUCCESS",
            "resourceModel": {"Id": "cr-1"},
            "callbackDelaySeconds": 0,
        }

    def test_progress_response(self):
        event = ProgressEvent.progress(
            ResourceModel(id="cr-1"),
            CallbackContext(reservation_id="cr-1", stabilization_attempts=1),
            30,
        )

        response = event.to_response()

        assert response["status"] == "IN_PROGRESS"
        assert response["callbackDelaySeconds"] == 30
        assert response["callbackContext"] == {"reservationId": "cr-1", "stabilizationAttempts": 1}

    def test_failed_response(self):
        event = ProgressEvent.failed(HandlerErrorCode.NOT_FOUND, "gone")

        assert event.is_failed
        assert event.to_response() == {
            "status": "FAILED",
            "callbackDelaySeconds": 0,
            "errorCode": "NotFound",
            "message": "gone",
        }

    def test_listed_response_keeps_null_next_token(self):
        event = ProgressEvent.listed([ResourceModel(id="cr-1")], None)

        response = event.to_response()

        assert response["resourceModels"] == [{"Id": "cr-1"}]
        assert "nextToken" in response
        assert response["nextToken"] is None


class TestHandlerEvent:
    """Tests for the host payload envelope."""

    def test_builds_handler_request(self):
        event = HandlerEvent.model_validate({
            "action": "CREATE",
            "region": "us-west-2",
            "awsAccountId": "123456789012",
            "clientRequestToken": "tok",
            "requestData": {
                "resourceProperties": {"InstanceType": "t2.micro"},
                "stackTags": {"env": "prod"},
                "systemTags": {"aws:cloudformation:stack-name": "s"},
                "logicalResourceId": "MyReservation",
            },
            "callbackContext": {"reservationId": "cr-1"},
        })

        request = event.to_handler_request()

        assert event.action == Action.CREATE
        assert event.callback_context.reservation_id == "cr-1"
        assert request.desired_resource_state.instance_type == "t2.micro"
        assert request.desired_resource_tags == {"env": "prod"}
        assert request.system_tags == {"aws:cloudformation:stack-name": "s"}
        assert request.client_request_token == "tok"
        assert request.region == "us-west-2"
        assert request.logical_resource_identifier == "MyReservation"

    def test_minimal_event(self):
        event = HandlerEvent.model_validate({"action": "LIST", "nextToken": "t"})

        request = event.to_handler_request()

        assert request.next_token == "t"
        assert request.desired_model() == ResourceModel()

    def test_unknown_action_rejected(self):
        with pytest.raises(ValidationError):
            HandlerEvent.model_validate({"action": "PATCH"})


def test_status_values():
    assert {status.value for status in OperationStatus} == {"IN_PROGRESS", "SUCCESS", "FAILED"}
