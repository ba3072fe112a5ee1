# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Factory for creating and caching regional EC2 clients."""

import logging

from botocore.config import Config

from ..models.request import Credentials
from .ec2_client import EC2Client, default_boto_config

logger = logging.getLogger(__name__)


class ClientFactory:
    """
    Factory for creating and caching EC2 clients.

    Clients on the default credential chain are cached per region, so a
    warm process reuses them across invocations. Clients built from
    host-supplied credentials are never cached: those credentials are
    temporary and differ on every invocation.
    Every client receives the same botocore retry configuration.
    """

    def __init__(
        self,
        default_region: str = "us-east-1",
        max_attempts: int = 3,
        retry_mode: str = "adaptive",
    ):
        """
        Initialize with default region and retry settings.

        Args:
            default_region: Region used when a request carries none
            max_attempts: botocore max_attempts for every client
            retry_mode: botocore retry mode for every client
        """
        self._default_region = default_region
        self._max_attempts = max_attempts
        self._retry_mode = retry_mode
        self._clients: dict[str, EC2Client] = {}

        logger.debug(f"ClientFactory initialized with default_region={default_region}")

    @property
    def default_region(self) -> str:
        return self._default_region

    def boto_config(self, region: str) -> Config:
        """Build the botocore configuration for a region."""
        return default_boto_config(region, self._max_attempts, self._retry_mode)

    def get_client(
        self,
        region: str | None = None,
        credentials: Credentials | None = None,
    ) -> EC2Client:
        """
        Get or create an EC2 client.

        Args:
            region: AWS region code; falls back to the default region
            credentials: Optional host-supplied session credentials

        Returns:
            EC2Client for the region (same instance on repeated calls
            without credentials)
        """
        region = region or self._default_region

        # Host credentials are short-lived and change per invocation
        if credentials is not None:
            logger.debug(f"Creating EC2 client with caller credentials for region {region}")
            return EC2Client(
                region=region,
                boto_config=self.boto_config(region),
                credentials=credentials,
            )

        if region in self._clients:
            logger.debug(f"Reusing cached EC2 client for region {region}")
            return self._clients[region]

        logger.info(f"Creating new EC2 client for region {region}")
        client = EC2Client(region=region, boto_config=self.boto_config(region))
        self._clients[region] = client
        return client

    def clear_clients(self) -> None:
        """Drop every cached client."""
        client_count = len(self._clients)
        self._clients.clear()
        logger.info(f"Cleared {client_count} cached EC2 clients")

    def get_client_count(self) -> int:
        return len(self._clients)
