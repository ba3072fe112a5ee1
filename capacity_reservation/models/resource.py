# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Capacity reservation resource model.

Field aliases follow the resource schema property names (PascalCase), which
is the shape the host sends and expects back.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TYPE_NAME = "AWS::EC2::CapacityReservation"

# Tag specification resource type scoping tags to the reservation itself
CR_RESOURCE_TYPE = "capacity-reservation"


class Tag(BaseModel):
    """A single key/value tag."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., alias="Key", description="Tag key")
    value: str = Field(..., alias="Value", description="Tag value")


class TagSpecification(BaseModel):
    """A group of tags scoped to one resource type."""

    model_config = ConfigDict(populate_by_name=True)

    resource_type: str = Field(
        ...,
        alias="ResourceType",
        description="Resource type the tags apply to (e.g., capacity-reservation)",
    )
    tags: list[Tag] = Field(default_factory=list, alias="Tags", description="Tags in this group")

    def applies_to_reservation(self) -> bool:
        """Whether this group targets the capacity reservation itself."""
        return self.resource_type.lower() == CR_RESOURCE_TYPE


class ResourceModel(BaseModel):
    """Declarative view of an EC2 capacity reservation."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "Id": "cr-0123456789abcdef0",
                "AvailabilityZone": "us-east-1a",
                "InstanceType": "t2.micro",
                "InstancePlatform": "Windows",
                "InstanceCount": 1,
                "EndDateType": "unlimited",
            }
        },
    )

    id: str | None = Field(None, alias="Id", description="Capacity reservation ID")
    availability_zone: str | None = Field(None, alias="AvailabilityZone")
    instance_type: str | None = Field(None, alias="InstanceType")
    instance_platform: str | None = Field(None, alias="InstancePlatform")
    tenancy: str | None = Field(None, alias="Tenancy")
    instance_count: int | None = Field(None, alias="InstanceCount", ge=0)
    ebs_optimized: bool | None = Field(None, alias="EbsOptimized")
    ephemeral_storage: bool | None = Field(None, alias="EphemeralStorage")
    instance_match_criteria: str | None = Field(None, alias="InstanceMatchCriteria")
    placement_group_arn: str | None = Field(None, alias="PlacementGroupArn")
    out_post_arn: str | None = Field(None, alias="OutPostArn")
    end_date: str | None = Field(
        None,
        alias="EndDate",
        description="Expiry as ISO-8601, or the legacy 'EEE MMM dd HH:mm:ss zzz yyyy' form",
    )
    end_date_type: str | None = Field(
        None, alias="EndDateType", description="unlimited or limited"
    )
    tag_specifications: list[TagSpecification] | None = Field(
        None, alias="TagSpecifications"
    )

    # Observed only; never sent on mutation
    available_instance_count: int | None = Field(None, alias="AvailableInstanceCount")
    total_instance_count: int | None = Field(None, alias="TotalInstanceCount")

    def primary_identifier(self) -> dict[str, Any]:
        """Return the primary identifier in schema form."""
        return {"Id": self.id}

    def to_properties(self) -> dict[str, Any]:
        """Serialize using schema property names, dropping unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)
