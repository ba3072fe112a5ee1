# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Tag consolidation for CreateCapacityReservation requests."""

import logging
from typing import Any

from ..models import CR_RESOURCE_TYPE, Tag, TagSpecification

logger = logging.getLogger(__name__)


def to_aws_tags(tags: dict[str, str]) -> list[dict[str, str]]:
    """Convert a tag dictionary to the AWS ``[{"Key", "Value"}]`` list form."""
    return [{"Key": key, "Value": value} for key, value in tags.items()]


def from_aws_tags(tag_list: list[dict[str, str]] | None) -> list[Tag]:
    """
    Convert an AWS tag list into Tag models.

    Args:
        tag_list: Tags in AWS format [{"Key": "...", "Value": "..."}]

    Returns:
        Tag models in the order given; entries without a key are skipped
    """
    if not tag_list:
        return []
    return [
        Tag(key=tag["Key"], value=tag.get("Value", ""))
        for tag in tag_list
        if tag.get("Key")
    ]


def consolidate_tags(
    stack_tags: dict[str, str] | None,
    system_tags: dict[str, str] | None,
    tag_specifications: list[TagSpecification] | None,
) -> list[dict[str, Any]]:
    """
    Build the TagSpecifications list for a create request.

    Stack tags, system tags and the user's capacity-reservation groups are
    merged into one flat tag set, in that order. When a key appears more
    than once the last value wins and the key keeps the position of its
    first occurrence. Groups for any other resource type are copied through
    unchanged.

    Args:
        stack_tags: Stack-level tags from the orchestration host
        system_tags: System tags injected by the orchestration host
        tag_specifications: Tag groups declared on the resource model

    Returns:
        AWS-shaped tag specifications: pass-through groups first, then at
        most one capacity-reservation group
    """
    merged: dict[str, str] = {}
    passthrough: list[dict[str, Any]] = []

    merged.update(stack_tags or {})
    merged.update(system_tags or {})

    if not merged:
        logger.debug("No stack-level or system tags to apply")

    for spec in tag_specifications or []:
        if spec.applies_to_reservation():
            for tag in spec.tags:
                merged[tag.key] = tag.value
        else:
            passthrough.append({
                "ResourceType": spec.resource_type,
                "Tags": [{"Key": tag.key, "Value": tag.value} for tag in spec.tags],
            })

    if not merged:
        return passthrough

    specifications = passthrough + [{
        "ResourceType": CR_RESOURCE_TYPE,
        "Tags": to_aws_tags(merged),
    }]
    logger.info(
        f"Consolidated {len(merged)} reservation tags and "
        f"{len(passthrough)} pass-through tag groups"
    )
    return specifications
