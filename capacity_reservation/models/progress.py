# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Progress event returned to the host after every invocation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .context import CallbackContext
from .enums import HandlerErrorCode, OperationStatus
from .resource import ResourceModel


class ProgressEvent(BaseModel):
    """
    Outcome of one handler invocation.

    IN_PROGRESS events carry a callback context and a delay after which the
    host should re-invoke the same operation. SUCCESS and FAILED are
    terminal.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: OperationStatus = Field(..., description="Operation status")
    resource_model: ResourceModel | None = Field(None, alias="resourceModel")
    resource_models: list[ResourceModel] | None = Field(None, alias="resourceModels")
    callback_context: CallbackContext | None = Field(None, alias="callbackContext")
    callback_delay_seconds: int = Field(0, alias="callbackDelaySeconds", ge=0)
    error_code: HandlerErrorCode | None = Field(None, alias="errorCode")
    message: str | None = Field(None, description="Failure message, verbatim")
    next_token: str | None = Field(None, alias="nextToken")

    @classmethod
    def success(cls, model: ResourceModel | None) -> "ProgressEvent":
        return cls(status=OperationStatus.SUCCESS, resource_model=model)

    @classmethod
    def progress(
        cls,
        model: ResourceModel | None,
        context: CallbackContext,
        delay_seconds: int = 0,
    ) -> "ProgressEvent":
        return cls(
            status=OperationStatus.IN_PROGRESS,
            resource_model=model,
            callback_context=context,
            callback_delay_seconds=delay_seconds,
        )

    @classmethod
    def failed(
        cls,
        error_code: HandlerErrorCode,
        message: str,
        model: ResourceModel | None = None,
    ) -> "ProgressEvent":
        return cls(
            status=OperationStatus.FAILED,
            resource_model=model,
            error_code=error_code,
            message=message,
        )

    @classmethod
    def listed(cls, models: list[ResourceModel], next_token: str | None) -> "ProgressEvent":
        return cls(
            status=OperationStatus.SUCCESS,
            resource_models=models,
            next_token=next_token,
        )

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == OperationStatus.FAILED

    def to_response(self) -> dict[str, Any]:
        """Serialize for the host, dropping fields that are not set."""
        response = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        # exclude_none would also drop an explicit end-of-pagination marker
        if self.resource_models is not None:
            response["nextToken"] = self.next_token
        return response
