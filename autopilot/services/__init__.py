"""Resource services."""

from autopilot.services.assets import AssetService
from autopilot.services.base import BaseService, FolderScopedService
from autopilot.services.buckets import BucketService
from autopilot.services.entities import EntityService
from autopilot.services.process_instances import ProcessInstanceService
from autopilot.services.queues import QueueService
from autopilot.services.tasks import TaskService

__all__ = [
    "AssetService",
    "BaseService",
    "BucketService",
    "EntityService",
    "FolderScopedService",
    "ProcessInstanceService",
    "QueueService",
    "TaskService",
]
