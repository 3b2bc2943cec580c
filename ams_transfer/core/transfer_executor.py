# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.common.error import AmsResponseError, describe_error
from ams_transfer.core.file_structures import (
    DEFAULT_CONTENT_TYPE,
    AttachmentRequest,
    FileViewDescriptor,
    MaterializedFile,
    StoredFileReference,
    file_type_tag,
)
from ams_transfer.telemetry.scenario_events import AMSFileManagerEvent, TransferFailure
from ams_transfer.telemetry.scenario_logger import BaseScenarioLogger

logger = logging.getLogger(__name__)


def _response_text(response: Any, operation: str, field: str) -> str:
    value = response.get(field) if isinstance(response, dict) else None
    if not isinstance(value, str) or not value:
        raise AmsResponseError(operation, field)
    return value


class FileTransferExecutor:
    """
    Runs the upload or download sequence for exactly one file.

    A failing step ends the sequence for that file only: the scenario is
    failed with the step tag and None is returned. Nothing is retried and
    nothing done by earlier steps is rolled back (an object registered
    before a failed upload stays registered).
    """

    def __init__(
        self,
        blob_client: BaseBlobClient,
        session_token: str,
        scenario_logger: BaseScenarioLogger,
    ):
        self.blob_client = blob_client
        self.session_token = session_token
        self.scenario_logger = scenario_logger

    def _fail(
        self,
        event: AMSFileManagerEvent,
        step: TransferFailure,
        file_name: Optional[str],
        error: Exception,
    ) -> None:
        exception_details = {
            "response": step.value,
            "fileName": f"{file_name}",
            "errorObject": describe_error(error),
        }
        logger.warning(
            "[AMS][%s] %s for %s: %s",
            event.value,
            step.value,
            file_name,
            exception_details["errorObject"],
        )
        self.scenario_logger.fail_scenario(
            event, {"ExceptionDetails": json.dumps(exception_details)}
        )

    def _skip(self, event: AMSFileManagerEvent, reason: str) -> None:
        logger.debug("[AMS][%s] skipped: %s", event.value, reason)
        self.scenario_logger.complete_scenario(event, {"Skipped": reason})

    async def upload(self, request: AttachmentRequest) -> Optional[StoredFileReference]:
        event = AMSFileManagerEvent.AMS_UPLOAD
        self.scenario_logger.start_scenario(event)

        name, content_url = request.name, request.content_url
        if not name or not content_url:
            self._skip(event, "name and contentUrl are required")
            return None

        try:
            blob = await self.blob_client.fetch_blob(content_url)
            file = MaterializedFile(
                name=name,
                content_type=request.content_type or DEFAULT_CONTENT_TYPE,
                content=blob,
            )
        except Exception as e:
            self._fail(event, TransferFailure.FETCH_BLOB, name, e)
            return None

        try:
            response = await self.blob_client.create_object(self.session_token, file)
            object_id = _response_text(response, "create_object", "id")
        except Exception as e:
            self._fail(event, TransferFailure.CREATE_OBJECT, name, e)
            return None

        try:
            await self.blob_client.upload_document(object_id, file)
        except Exception as e:
            self._fail(event, TransferFailure.UPLOAD_DOCUMENT, name, e)
            return None

        self.scenario_logger.complete_scenario(event)
        logger.info(
            "[AMS][UPLOAD] %s stored as %s (%d bytes)",
            name,
            object_id,
            file.size_bytes,
        )

        metadata: Dict[str, str] = {"fileName": name}
        if request.content_type is not None:
            metadata["contentType"] = request.content_type
        return StoredFileReference(file_id=object_id, metadata=metadata)

    async def download(self, reference: StoredFileReference) -> Optional[MaterializedFile]:
        event = AMSFileManagerEvent.AMS_DOWNLOAD
        self.scenario_logger.start_scenario(event)

        file_name = reference.file_name
        if not reference.file_id or not file_name:
            self._skip(event, "fileId and metadata.fileName are required")
            return None

        descriptor = FileViewDescriptor(
            id=reference.file_id, type=file_type_tag(reference.content_type)
        )

        try:
            response = await self.blob_client.get_view_status(descriptor)
            view_location = _response_text(response, "get_view_status", "view_location")
        except Exception as e:
            self._fail(event, TransferFailure.GET_VIEW_STATUS, file_name, e)
            return None

        try:
            blob = await self.blob_client.get_view(descriptor, view_location)
            file = MaterializedFile(
                name=file_name,
                content_type=reference.content_type or DEFAULT_CONTENT_TYPE,
                content=blob,
            )
        except Exception as e:
            self._fail(event, TransferFailure.GET_VIEW, file_name, e)
            return None

        self.scenario_logger.complete_scenario(event)
        logger.info(
            "[AMS][DOWNLOAD] %s fetched from %s (%d bytes)",
            file_name,
            reference.file_id,
            file.size_bytes,
        )
        return file
