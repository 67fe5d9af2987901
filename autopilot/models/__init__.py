"""Resource models returned by the services."""

from autopilot.models.asset import Asset, Queue
from autopilot.models.base import ResourceModel
from autopilot.models.bucket import BucketFile
from autopilot.models.entity import EntityRecord
from autopilot.models.process_instance import ProcessInstance
from autopilot.models.task import Task, TaskAssignmentResult

__all__ = [
    "Asset",
    "BucketFile",
    "EntityRecord",
    "ProcessInstance",
    "Queue",
    "ResourceModel",
    "Task",
    "TaskAssignmentResult",
]
