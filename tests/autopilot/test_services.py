"""Tests for the resource services against a fake backend."""

from __future__ import annotations

import json

import httpx
import pytest

from autopilot.errors import InvalidParameterError, UnsupportedOperationError
from autopilot.models import Asset, BucketFile, EntityRecord, ProcessInstance, Queue, Task
from autopilot.pagination import NonPaginatedResponse, PaginatedResponse
from autopilot.services import (
    AssetService,
    BucketService,
    EntityService,
    ProcessInstanceService,
    QueueService,
    TaskService,
)


def _params(request: httpx.Request) -> dict[str, str]:
    return dict(request.url.params)


def _path(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/acme/default/")


# ── models ────────────────────────────────────────────────────────────────


class TestResourceModels:
    def test_folder_fields_renamed(self):
        queue = Queue.from_api(
            {
                "Id": 2,
                "Name": "Orders",
                "OrganizationUnitId": 8,
                "OrganizationUnitFullyQualifiedName": "Shared/Finance",
            }
        )
        assert queue.folder_id == 8
        assert queue.folder_name == "Shared/Finance"
        assert not hasattr(queue, "organization_unit_id")

    def test_unmapped_model_keeps_keys(self):
        record = EntityRecord.from_api({"Id": "r1", "OrganizationUnitId": 3})
        assert record.organization_unit_id == 3


# ── assets / queues ───────────────────────────────────────────────────────


class TestAssetService:
    @pytest.mark.anyio
    async def test_get_all_paginated(self, make_api):
        body = {
            "value": [
                {"Id": 1, "Name": "Mail", "ValueType": "Text", "OrganizationUnitId": 5, "Custom": "x"}
            ],
            "@odata.count": 3,
        }
        api, backend = make_api(lambda r: httpx.Response(200, json=body))

        page = await AssetService(api).get_all(page_size=1, filter="Name eq 'Mail'")

        assert isinstance(page, PaginatedResponse)
        assert page.has_next_page
        assert page.total_count == 3
        asset = page.items[0]
        assert isinstance(asset, Asset)
        assert asset.id == 1
        assert asset.folder_id == 5
        assert asset.value_type == "Text"
        assert asset.custom == "x"

        request = backend.last
        assert _path(request).endswith("GetAssetsAcrossFolders")
        assert _params(request) == {"$top": "1", "$count": "true", "$filter": "Name eq 'Mail'"}
        assert "X-OrganizationUnitId" not in request.headers

    @pytest.mark.anyio
    async def test_get_all_in_folder(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={"value": [{"Id": 2, "Name": "B"}]}))

        result = await AssetService(api).get_all(folder_id=5)

        assert isinstance(result, NonPaginatedResponse)
        assert [a.name for a in result.items] == ["B"]
        assert _path(backend.last).endswith("GetFiltered")
        assert backend.last.headers["X-OrganizationUnitId"] == "5"

    @pytest.mark.anyio
    async def test_get_by_id(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={"Id": 4, "Name": "Key"}))

        asset = await AssetService(api).get_by_id(4, folder_id=9)

        assert asset.name == "Key"
        assert _path(backend.last) == "orchestrator_/odata/Assets(4)"
        assert backend.last.headers["X-OrganizationUnitId"] == "9"

    @pytest.mark.anyio
    async def test_get_by_id_requires_folder(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={}))
        with pytest.raises(InvalidParameterError):
            await AssetService(api).get_by_id(4, folder_id=None)
        assert backend.requests == []

    @pytest.mark.anyio
    async def test_queue_by_id(self, make_api):
        api, backend = make_api(
            lambda r: httpx.Response(200, json={"Id": 8, "Name": "Invoices", "MaxNumberOfRetries": 2})
        )
        queue = await QueueService(api).get_by_id(8, 1)
        assert queue.max_number_of_retries == 2
        assert _path(backend.last) == "orchestrator_/odata/QueueDefinitions(8)"


# ── tasks ─────────────────────────────────────────────────────────────────


class TestTaskService:
    @pytest.mark.anyio
    async def test_get_all_folder_header_only(self, make_api):
        api, backend = make_api(
            lambda r: httpx.Response(200, json={"value": [{"Id": 1, "Title": "Review", "Status": "Pending"}]})
        )

        result = await TaskService(api).get_all(folder_id=7)

        assert isinstance(result.items[0], Task)
        assert result.items[0].title == "Review"
        assert _path(backend.last) == "orchestrator_/tasks/GenericTasks/GetTasksAcrossFolders"
        assert backend.last.headers["X-OrganizationUnitId"] == "7"

    @pytest.mark.anyio
    async def test_assign(self, make_api):
        api, backend = make_api(
            lambda r: httpx.Response(
                200, json={"value": [{"TaskId": 1, "ErrorCode": 1001, "ErrorMessage": "locked"}]}
            )
        )

        results = await TaskService(api).assign(1, 2)

        assert json.loads(backend.last.content) == {"TaskAssignments": [{"TaskId": 1, "UserId": 2}]}
        assert results[0].task_id == 1
        assert results[0].error_message == "locked"

    @pytest.mark.anyio
    async def test_complete(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(204))

        await TaskService(api).complete(3, 7, action="Approve", data={"amount": 10})

        request = backend.last
        assert request.method == "POST"
        assert _path(request) == "orchestrator_/tasks/GenericTasks/CompleteTask"
        assert request.headers["X-OrganizationUnitId"] == "7"
        assert json.loads(request.content) == {
            "taskId": 3,
            "action": "Approve",
            "data": {"amount": 10},
        }


# ── entities ──────────────────────────────────────────────────────────────


class TestEntityService:
    @pytest.mark.anyio
    async def test_get_all_records(self, make_api):
        body = {"value": [{"Id": "r1", "FirstName": "Ada"}], "totalRecordCount": 3}
        api, backend = make_api(lambda r: httpx.Response(200, json=body))

        page = await EntityService(api).get_all_records(
            "e1", page_size=1, expansion_level=1, filter="x"
        )

        record = page.items[0]
        assert isinstance(record, EntityRecord)
        assert record.id == "r1"
        assert record.first_name == "Ada"
        assert page.has_next_page
        assert _path(backend.last) == "datafabric_/api/EntityService/entity/e1/read"
        assert _params(backend.last) == {"limit": "1", "expansionLevel": "1", "$filter": "x"}

    @pytest.mark.anyio
    async def test_insert_record(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={"Id": "new", "Name": "a"}))

        record = await EntityService(api).insert_record("e1", {"Name": "a"})

        assert record.id == "new"
        assert _params(backend.last) == {}
        assert json.loads(backend.last.content) == {"Name": "a"}

    @pytest.mark.anyio
    async def test_get_record_by_id(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={"Id": "r1"}))
        await EntityService(api).get_record_by_id("e1", "r1", expansion_level=2)
        assert _path(backend.last) == "datafabric_/api/EntityService/entity/e1/read/r1"
        assert _params(backend.last) == {"expansionLevel": "2"}


# ── buckets ───────────────────────────────────────────────────────────────


class TestBucketService:
    @pytest.mark.anyio
    async def test_file_metadata_page(self, make_api):
        body = {
            "items": [{"FullPath": "/docs/a.pdf", "Size": 10, "IsDirectory": False}],
            "continuationToken": "abc",
        }
        api, backend = make_api(lambda r: httpx.Response(200, json=body))

        page = await BucketService(api).get_file_metadata(3, 7, prefix="/docs", page_size=10)

        assert isinstance(page.items[0], BucketFile)
        assert page.items[0].full_path == "/docs/a.pdf"
        assert page.has_next_page
        assert _path(backend.last) == "orchestrator_/api/Buckets/3/ListFiles"
        assert _params(backend.last) == {"prefix": "/docs", "takeHint": "10"}
        assert backend.last.headers["X-OrganizationUnitId"] == "7"

    @pytest.mark.anyio
    async def test_jump_rejected_before_request(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200, json={}))
        with pytest.raises(UnsupportedOperationError):
            await BucketService(api).get_file_metadata(3, 7, jump_to_page=2)
        assert backend.requests == []

    @pytest.mark.anyio
    async def test_folder_required(self, make_api):
        api, _ = make_api(lambda r: httpx.Response(200, json={}))
        with pytest.raises(InvalidParameterError):
            await BucketService(api).get_file_metadata(3, None)


# ── process instances ─────────────────────────────────────────────────────


class TestProcessInstanceService:
    @pytest.mark.anyio
    async def test_get_all_unprefixed(self, make_api):
        body = {"instances": [{"instanceId": "i1", "processKey": "p"}], "nextPage": "n2"}
        api, backend = make_api(lambda r: httpx.Response(200, json=body))

        page = await ProcessInstanceService(api).get_all(processKey="p", page_size=5)

        assert isinstance(page.items[0], ProcessInstance)
        assert page.items[0].instance_id == "i1"
        assert page.has_next_page
        assert _params(backend.last) == {"processKey": "p", "pageSize": "5"}

    @pytest.mark.anyio
    async def test_cancel(self, make_api):
        api, backend = make_api(lambda r: httpx.Response(200))

        await ProcessInstanceService(api).cancel("i1", "folder-key", comment="stop")

        request = backend.last
        assert _path(request) == "pims_/api/v1/instances/i1/cancel"
        assert request.headers["X-UIPATH-FolderKey"] == "folder-key"
        assert json.loads(request.content) == {"comment": "stop"}

    @pytest.mark.anyio
    async def test_folder_key_required(self, make_api):
        api, _ = make_api(lambda r: httpx.Response(200, json={}))
        with pytest.raises(InvalidParameterError):
            await ProcessInstanceService(api).get_by_id("i1", "")
