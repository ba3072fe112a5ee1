"""Request payload handed to the engine by the host."""

from pydantic import BaseModel, ConfigDict, Field

from .context import CallbackContext
from .enums import Action
from .resource import ResourceModel


class Credentials(BaseModel):
    """Session credentials supplied by the host for the target account."""

    model_config = ConfigDict(populate_by_name=True)

    access_key_id: str = Field(..., alias="accessKeyId")
    secret_access_key: str = Field(..., alias="secretAccessKey")
    session_token: str | None = Field(None, alias="sessionToken")


class ResourceHandlerRequest(BaseModel):
    """Desired state and invocation context for one operation."""

    model_config = ConfigDict(populate_by_name=True)

    desired_resource_state: ResourceModel | None = Field(None, alias="desiredResourceState")
    previous_resource_state: ResourceModel | None = Field(None, alias="previousResourceState")
    desired_resource_tags: dict[str, str] | None = Field(
        None, alias="desiredResourceTags", description="Stack-level tags"
    )
    system_tags: dict[str, str] | None = Field(
        None, alias="systemTags", description="Tags injected by the orchestration system"
    )
    client_request_token: str | None = Field(None, alias="clientRequestToken")
    next_token: str | None = Field(None, alias="nextToken")
    region: str | None = Field(None, description="Target AWS region")
    aws_account_id: str | None = Field(None, alias="awsAccountId")
    logical_resource_identifier: str | None = Field(None, alias="logicalResourceIdentifier")

    def desired_model(self) -> ResourceModel:
        """Return the desired state, or an empty model when none was sent."""
        return self.desired_resource_state or ResourceModel()


class RequestData(BaseModel):
    """The requestData section of a host event."""

    model_config = ConfigDict(populate_by_name=True)

    resource_properties: ResourceModel | None = Field(None, alias="resourceProperties")
    previous_resource_properties: ResourceModel | None = Field(
        None, alias="previousResourceProperties"
    )
    caller_credentials: Credentials | None = Field(None, alias="callerCredentials")
    stack_tags: dict[str, str] | None = Field(None, alias="stackTags")
    system_tags: dict[str, str] | None = Field(None, alias="systemTags")
    logical_resource_id: str | None = Field(None, alias="logicalResourceId")


class HandlerEvent(BaseModel):
    """Envelope of a single host invocation."""

    model_config = ConfigDict(populate_by_name=True)

    action: Action = Field(..., description="Operation to perform")
    region: str | None = Field(None, description="Target AWS region")
    aws_account_id: str | None = Field(None, alias="awsAccountId")
    client_request_token: str | None = Field(None, alias="clientRequestToken")
    request_data: RequestData = Field(default_factory=RequestData, alias="requestData")
    next_token: str | None = Field(None, alias="nextToken")
    callback_context: CallbackContext | None = Field(None, alias="callbackContext")

    def to_handler_request(self) -> ResourceHandlerRequest:
        return ResourceHandlerRequest(
            desired_resource_state=self.request_data.resource_properties,
            previous_resource_state=self.request_data.previous_resource_properties,
            desired_resource_tags=self.request_data.stack_tags,
            system_tags=self.request_data.system_tags,
            client_request_token=self.client_request_token,
            next_token=self.next_token,
            region=self.region,
            aws_account_id=self.aws_account_id,
            logical_resource_identifier=self.request_data.logical_resource_id,
        )
