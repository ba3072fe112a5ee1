"""Logging configuration, with optional shipping to CloudWatch Logs."""

import logging
import sys
import time
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from .correlation import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


class CloudWatchHandler(logging.Handler):
    """Logging handler that sends records to a CloudWatch Logs stream."""

    def __init__(
        self,
        log_group: str,
        log_stream: str,
        region: str = "us-east-1",
        client=None,
    ):
        """
        Initialize CloudWatch logging handler.

        Args:
            log_group: CloudWatch log group name
            log_stream: CloudWatch log stream name
            region: AWS region for CloudWatch
            client: Pre-built boto3 logs client (optional)
        """
        super().__init__()
        self.log_group = log_group
        self.log_stream = log_stream
        self.region = region
        self.client = client or boto3.client("logs", region_name=region)
        self._ensure_log_group_and_stream()

    def _ensure_log_group_and_stream(self) -> None:
        """Create log group and stream if they don't exist."""
        for create, kwargs in (
            (self.client.create_log_group, {"logGroupName": self.log_group}),
            (
                self.client.create_log_stream,
                {"logGroupName": self.log_group, "logStreamName": self.log_stream},
            ),
        ):
            try:
                create(**kwargs)
            except ClientError as e:
                if e.response["Error"]["Code"] != "ResourceAlreadyExistsException":
                    print(f"Failed to setup CloudWatch logging: {e}", file=sys.stderr)
                    return

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record to CloudWatch.

        Args:
            record: The log record to emit
        """
        try:
            self.client.put_log_events(
                logGroupName=self.log_group,
                logStreamName=self.log_stream,
                logEvents=[
                    {
                        "message": self.format(record),
                        "timestamp": int(record.created * 1000),
                    }
                ],
            )
        except Exception as e:
            # Never raise from emit
            print(f"Failed to send log to CloudWatch: {e}", file=sys.stderr)


def configure_logging(
    level: str = "INFO",
    cloudwatch_enabled: bool = False,
    log_group: Optional[str] = None,
    log_stream: Optional[str] = None,
    region: str = "us-east-1",
) -> None:
    """
    Configure root logging for the handler process.

    Console logging is always configured; a CloudWatch handler is added
    when enabled. Every handler stamps records with the correlation ID.

    Args:
        level: Logging level name
        cloudwatch_enabled: Whether to also ship logs to CloudWatch
        log_group: CloudWatch log group name
        log_stream: CloudWatch log stream name (default: handler-<epoch>)
        region: AWS region for CloudWatch
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters):
            handler.addFilter(CorrelationIdFilter())

    if not cloudwatch_enabled:
        return

    log_group = log_group or "/aws/cloudformation/capacity-reservation"
    log_stream = log_stream or f"handler-{int(time.time())}"

    try:
        handler = CloudWatchHandler(log_group=log_group, log_stream=log_stream, region=region)
    except Exception as e:
        print(f"Failed to configure CloudWatch logging: {e}", file=sys.stderr)
        return

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        f"CloudWatch logging configured: group={log_group}, stream={log_stream}"
    )
