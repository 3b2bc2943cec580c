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

import asyncio
import logging
from typing import List, Mapping, Optional, Sequence

from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.core.file_structures import (
    AttachmentRequest,
    FileMetadata,
    MaterializedFile,
    StoredFileReference,
)
from ams_transfer.core.metadata_codec import MetadataCodec, PropertyBag
from ams_transfer.core.transfer_executor import FileTransferExecutor
from ams_transfer.telemetry.scenario_logger import BaseScenarioLogger, NoOpScenarioLogger

logger = logging.getLogger(__name__)


class AMSFileManager:
    """
    Moves chat attachments in and out of the attachment storage service.

    Batch calls fan out one pipeline per file and never fail as a whole: the
    returned list has one entry per input, in input order, with None where
    that file was skipped or failed. Each entry must be checked on its own.

    The property-bag helpers flatten file ids and per-file metadata into the
    string-only fields of a message envelope and back.
    """

    def __init__(
        self,
        blob_client: BaseBlobClient,
        *,
        session_token: str,
        scenario_logger: Optional[BaseScenarioLogger] = None,
    ):
        self.blob_client = blob_client
        self.session_token = session_token
        self.scenario_logger = scenario_logger or NoOpScenarioLogger()
        self._executor = FileTransferExecutor(
            blob_client=blob_client,
            session_token=session_token,
            scenario_logger=self.scenario_logger,
        )
        self._codec = MetadataCodec(self.scenario_logger)

    async def upload_files(
        self, files: Sequence[AttachmentRequest]
    ) -> List[Optional[StoredFileReference]]:
        results = await asyncio.gather(*(self._executor.upload(f) for f in files))
        logger.info(
            "[AMS][UPLOAD] batch done: %d/%d stored",
            sum(1 for r in results if r is not None),
            len(results),
        )
        return list(results)

    async def download_files(
        self, files: Sequence[StoredFileReference]
    ) -> List[Optional[MaterializedFile]]:
        results = await asyncio.gather(*(self._executor.download(f) for f in files))
        logger.info(
            "[AMS][DOWNLOAD] batch done: %d/%d fetched",
            sum(1 for r in results if r is not None),
            len(results),
        )
        return list(results)

    async def update_permissions(self) -> None:
        # Extension point: sharing rules are not applied by this layer.
        return None

    def decode_file_ids(self, bag: Optional[Mapping[str, str]]) -> Optional[List[str]]:
        return self._codec.decode_file_ids(bag)

    def encode_file_ids(self, file_ids: List[str]) -> Optional[PropertyBag]:
        return self._codec.encode_file_ids(file_ids)

    def decode_metadata(
        self, bag: Optional[Mapping[str, str]]
    ) -> Optional[List[FileMetadata]]:
        return self._codec.decode_metadata(bag)

    def encode_metadata(self, records: List[FileMetadata]) -> Optional[PropertyBag]:
        return self._codec.encode_metadata(records)
