"""BucketService — storage bucket file listings."""

from __future__ import annotations

from typing import Any

from autopilot.endpoints import BucketEndpoints
from autopilot.errors import InvalidParameterError
from autopilot.models import BucketFile
from autopilot.pagination import (
    NonPaginatedResponse,
    PaginatedResponse,
    PaginationConfig,
    PaginationType,
    get_all,
)
from autopilot.services.base import FolderScopedService

BUCKET_FILE_PAGINATION = PaginationConfig(pagination_type=PaginationType.TOKEN)


class BucketService(FolderScopedService):
    async def get_file_metadata(
        self, bucket_id: int, folder_id: int, **options: Any
    ) -> PaginatedResponse[BucketFile] | NonPaginatedResponse[BucketFile]:
        """List the files of a bucket.

        Query options such as ``prefix`` are sent as-is. ``jump_to_page`` is
        not available: the listing is continuation-token paged.
        """
        if not bucket_id:
            raise InvalidParameterError("bucket_id is required")
        options["folder_id"] = self.require_folder(folder_id)
        return await get_all(
            self,
            get_endpoint=lambda _folder_id: BucketEndpoints.list_files(bucket_id),
            pagination=BUCKET_FILE_PAGINATION,
            transform=BucketFile.from_api,
            exclude_from_prefix=tuple(options),
            options=options,
        )
