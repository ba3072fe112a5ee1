# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Translation between the resource model and EC2 request/response shapes.

This module is the single place where:
- EC2 API requests are built from a resource model
- describe responses are turned back into resource models
- List responses are filtered and reduced to primary identifiers
"""

import logging
from datetime import datetime
from typing import Any

from ..models import (
    CR_RESOURCE_TYPE,
    EndDateType,
    Fault,
    FaultKind,
    ReservationState,
    ResourceHandlerRequest,
    ResourceModel,
    TagSpecification,
)
from ..utils.date_parser import format_end_date, parse_end_date
from .tag_service import consolidate_tags, from_aws_tags

logger = logging.getLogger(__name__)


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def end_date_fault(model: ResourceModel) -> Fault | None:
    """
    Check that a limited reservation carries a usable end date.

    An end date that cannot be parsed is treated as absent, which is only
    acceptable when the reservation does not expire at a fixed date.

    Returns:
        INVALID_INPUT fault, or None when the end date is acceptable
    """
    if model.end_date is None or parse_end_date(model.end_date) is not None:
        return None
    if (model.end_date_type or "").lower() != EndDateType.LIMITED.value:
        return None
    return Fault(
        kind=FaultKind.INVALID_INPUT,
        message=(
            f"EndDate '{model.end_date}' is not a valid ISO-8601 or "
            f"'EEE MMM dd HH:mm:ss zzz yyyy' date and EndDateType is limited"
        ),
    )


def translate_to_create_request(
    model: ResourceModel,
    request: ResourceHandlerRequest,
) -> dict[str, Any]:
    """
    Build a CreateCapacityReservation request.

    Args:
        model: Desired resource state
        request: Handler request carrying stack tags, system tags and the
                client request token

    Returns:
        Keyword arguments for create_capacity_reservation
    """
    create_request = _without_none({
        "AvailabilityZone": model.availability_zone,
        "ClientToken": request.client_request_token,
        "EbsOptimized": model.ebs_optimized,
        "EndDate": parse_end_date(model.end_date),
        "EndDateType": model.end_date_type,
        "EphemeralStorage": model.ephemeral_storage,
        "InstanceCount": model.instance_count,
        "InstanceMatchCriteria": model.instance_match_criteria,
        "InstancePlatform": model.instance_platform,
        "Tenancy": model.tenancy,
        "InstanceType": model.instance_type,
        "PlacementGroupArn": model.placement_group_arn,
        "OutpostArn": model.out_post_arn,
    })

    tag_specifications = consolidate_tags(
        request.desired_resource_tags,
        request.system_tags,
        model.tag_specifications,
    )
    if tag_specifications:
        create_request["TagSpecifications"] = tag_specifications

    return create_request


def translate_to_read_request(model: ResourceModel) -> dict[str, Any]:
    """Build a DescribeCapacityReservations request for one reservation."""
    logger.info(f"Capacity reservation ID = {model.id}")
    return {"CapacityReservationIds": [model.id]}


def translate_from_reservation(reservation: dict[str, Any]) -> ResourceModel:
    """
    Build a fully hydrated resource model from a described reservation.

    Tags come back as a single capacity-reservation group.
    """
    end_date = reservation.get("EndDate")
    if isinstance(end_date, datetime):
        end_date = format_end_date(end_date)

    return ResourceModel(
        id=reservation.get("CapacityReservationId"),
        availability_zone=reservation.get("AvailabilityZone"),
        available_instance_count=reservation.get("AvailableInstanceCount"),
        ebs_optimized=reservation.get("EbsOptimized"),
        end_date=end_date,
        end_date_type=reservation.get("EndDateType"),
        ephemeral_storage=reservation.get("EphemeralStorage"),
        total_instance_count=reservation.get("TotalInstanceCount"),
        instance_match_criteria=reservation.get("InstanceMatchCriteria"),
        instance_platform=reservation.get("InstancePlatform"),
        instance_type=reservation.get("InstanceType"),
        tenancy=reservation.get("Tenancy"),
        placement_group_arn=reservation.get("PlacementGroupArn"),
        out_post_arn=reservation.get("OutpostArn"),
        tag_specifications=[
            TagSpecification(
                resource_type=CR_RESOURCE_TYPE,
                tags=from_aws_tags(reservation.get("Tags")),
            )
        ],
    )


def translate_from_read_response(response: dict[str, Any]) -> ResourceModel:
    """Translate the first reservation of a describe response."""
    return translate_from_reservation(response["CapacityReservations"][0])


def translate_to_update_request(model: ResourceModel) -> dict[str, Any]:
    """
    Build a ModifyCapacityReservation request.

    Only the mutable fields the caller actually supplied are included;
    unset fields are omitted rather than defaulted.
    """
    return _without_none({
        "CapacityReservationId": model.id,
        "EndDate": parse_end_date(model.end_date),
        "EndDateType": model.end_date_type,
        "InstanceCount": model.instance_count,
    })


def translate_to_delete_request(model: ResourceModel) -> dict[str, Any]:
    """Build a CancelCapacityReservation request."""
    return {"CapacityReservationId": model.id}


def translate_to_list_request(next_token: str | None) -> dict[str, Any]:
    """Build a DescribeCapacityReservations request for one page."""
    return _without_none({"NextToken": next_token})


def translate_from_list_response(response: dict[str, Any]) -> list[ResourceModel]:
    """
    Reduce a describe page to primary-identifier-only models.

    Cancelled reservations are dropped.
    """
    return [
        ResourceModel(id=reservation.get("CapacityReservationId"))
        for reservation in response.get("CapacityReservations") or []
        if not ReservationState.matches(reservation.get("State"), ReservationState.CANCELLED)
    ]
