"""EC2 client wrapper for capacity reservation API calls."""

import logging
from typing import Any, Callable

import boto3
from botocore.exceptions import ClientError, BotoCoreError
from botocore.config import Config

from ..models.request import Credentials

logger = logging.getLogger(__name__)


class EC2APIError(Exception):
    """Raised when an EC2 API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


def default_boto_config(region: str, max_attempts: int = 3, retry_mode: str = "adaptive") -> Config:
    """Build the botocore configuration applied to every EC2 client."""
    return Config(
        region_name=region,
        retries={
            'max_attempts': max_attempts,
            'mode': retry_mode
        }
    )


class EC2Client:
    """
    Thin synchronous wrapper around the boto3 EC2 client.

    Exposes only the four capacity reservation calls the handler needs and
    converts every botocore failure into an EC2APIError carrying the HTTP
    status and service error code, so callers never depend on botocore
    exception types.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        boto_config: Config | None = None,
        credentials: Credentials | None = None,
        client: Any | None = None,
    ):
        """
        Initialize the EC2 client.

        Args:
            region: AWS region the reservation lives in
            boto_config: Optional botocore Config; defaults to adaptive retries
            credentials: Optional session credentials supplied by the host.
                        When absent the default boto3 credential chain is used.
            client: Pre-built boto3 EC2 client (used by tests with Stubber)
        """
        self.region = region
        if client is None:
            config = boto_config or default_boto_config(region)
            if credentials is not None:
                session = boto3.session.Session(
                    aws_access_key_id=credentials.access_key_id,
                    aws_secret_access_key=credentials.secret_access_key,
                    aws_session_token=credentials.session_token,
                    region_name=region,
                )
                client = session.client('ec2', config=config)
            else:
                client = boto3.client('ec2', region_name=region, config=config)
        self.ec2 = client

    def _call(self, operation: str, func: Callable[..., dict], **kwargs) -> dict[str, Any]:
        """
        Invoke an EC2 operation, translating botocore failures.

        Raises:
            EC2APIError: If the call fails for any reason
        """
        try:
            response = func(**kwargs)
        except ClientError as e:
            error = e.response.get('Error', {})
            status_code = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            error_code = error.get('Code')
            logger.error(f"{operation} failed: status={status_code}, code={error_code}")
            raise EC2APIError(str(e), status_code=status_code, error_code=error_code) from e
        except BotoCoreError as e:
            logger.error(f"{operation} failed before reaching EC2: {e}")
            raise EC2APIError(str(e)) from e

        logger.debug(f"{operation} succeeded")
        return response

    def describe_capacity_reservations(self, **request) -> dict[str, Any]:
        """Describe reservations by ID, or page through all of them."""
        return self._call(
            "DescribeCapacityReservations",
            self.ec2.describe_capacity_reservations,
            **request
        )

    def create_capacity_reservation(self, **request) -> dict[str, Any]:
        """Create a reservation; the response carries its ID and state."""
        return self._call(
            "CreateCapacityReservation",
            self.ec2.create_capacity_reservation,
            **request
        )

    def modify_capacity_reservation(self, **request) -> dict[str, Any]:
        return self._call(
            "ModifyCapacityReservation",
            self.ec2.modify_capacity_reservation,
            **request
        )

    def cancel_capacity_reservation(self, **request) -> dict[str, Any]:
        return self._call(
            "CancelCapacityReservation",
            self.ec2.cancel_capacity_reservation,
            **request
        )
