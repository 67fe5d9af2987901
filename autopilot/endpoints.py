"""REST endpoint paths, relative to ``{base_url}/{org}/{tenant}/``."""

from __future__ import annotations

FOLDER_ID_HEADER = "X-OrganizationUnitId"
FOLDER_KEY_HEADER = "X-UIPATH-FolderKey"

# Identity endpoints live at ``{base_url}/{org}/`` (no tenant segment).
IDENTITY_TOKEN = "identity_/connect/token"

_ORCHESTRATOR = "orchestrator_"
_ODATA = f"{_ORCHESTRATOR}/odata"


class AssetEndpoints:
    GET_ALL = f"{_ODATA}/Assets/Server.Configuration.OData.GetAssetsAcrossFolders"
    GET_BY_FOLDER = f"{_ODATA}/Assets/Server.Configuration.OData.GetFiltered"

    @staticmethod
    def get_by_id(asset_id: int) -> str:
        return f"{_ODATA}/Assets({asset_id})"


class QueueEndpoints:
    GET_ALL = f"{_ODATA}/QueueDefinitions/Server.Configuration.OData.GetQueuesAcrossFolders"
    GET_BY_FOLDER = f"{_ODATA}/QueueDefinitions"

    @staticmethod
    def get_by_id(queue_id: int) -> str:
        return f"{_ODATA}/QueueDefinitions({queue_id})"


class TaskEndpoints:
    GET_ALL = f"{_ORCHESTRATOR}/tasks/GenericTasks/GetTasksAcrossFolders"
    ASSIGN = f"{_ODATA}/Tasks/Server.Configuration.OData.AssignTasks"
    COMPLETE = f"{_ORCHESTRATOR}/tasks/GenericTasks/CompleteTask"

    @staticmethod
    def get_by_id(task_id: int) -> str:
        return f"{_ODATA}/Tasks({task_id})"


class EntityEndpoints:
    @staticmethod
    def read_records(entity_id: str) -> str:
        return f"datafabric_/api/EntityService/entity/{entity_id}/read"

    @staticmethod
    def get_record(entity_id: str, record_id: str) -> str:
        return f"datafabric_/api/EntityService/entity/{entity_id}/read/{record_id}"

    @staticmethod
    def insert_record(entity_id: str) -> str:
        return f"datafabric_/api/EntityService/entity/{entity_id}/insert"


class BucketEndpoints:
    @staticmethod
    def list_files(bucket_id: int) -> str:
        return f"{_ORCHESTRATOR}/api/Buckets/{bucket_id}/ListFiles"


class ProcessInstanceEndpoints:
    GET_ALL = "pims_/api/v1/instances"

    @staticmethod
    def get_by_id(instance_id: str) -> str:
        return f"pims_/api/v1/instances/{instance_id}"

    @staticmethod
    def cancel(instance_id: str) -> str:
        return f"pims_/api/v1/instances/{instance_id}/cancel"
