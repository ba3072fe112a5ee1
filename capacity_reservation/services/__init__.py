"""Service layer for the capacity reservation handler."""

from .reconciler import ReconciliationEngine, DescribeOutcome, describe_reservation
from .error_classifier import classify, failure_event, fault_from_exception
from .tag_service import consolidate_tags
from .stabilization import create_stabilized, update_stabilized, delete_stabilized

__all__ = [
    "ReconciliationEngine",
    "DescribeOutcome",
    "describe_reservation",
    "classify",
    "failure_event",
    "fault_from_exception",
    "consolidate_tags",
    "create_stabilized",
    "update_stabilized",
    "delete_stabilized",
]
