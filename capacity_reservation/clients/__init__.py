"""EC2 client wrapper module."""

from .ec2_client import EC2Client, EC2APIError
from .client_factory import ClientFactory

__all__ = ["EC2Client", "EC2APIError", "ClientFactory"]
