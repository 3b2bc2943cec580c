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

from ams_transfer.application_context import ApplicationContext, get_app_context
from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.clients.http_blob_client import HttpBlobClient
from ams_transfer.common.error import (
    AmsConfigurationError,
    AmsResponseError,
    AmsTransferError,
)
from ams_transfer.common.structures import (
    AmsConfig,
    AppConfig,
    Configuration,
    TelemetryConfig,
)
from ams_transfer.core.ams_file_manager import AMSFileManager
from ams_transfer.core.file_structures import (
    AttachmentRequest,
    FileMetadata,
    FilePermission,
    FileViewDescriptor,
    MaterializedFile,
    PermissionsSpec,
    StoredFileReference,
)
from ams_transfer.core.metadata_codec import (
    AMS_METADATA_KEY,
    AMS_REFERENCES_KEY,
    MetadataCodec,
)
from ams_transfer.logs.log_setup import log_setup
from ams_transfer.telemetry import (
    AMSFileManagerEvent,
    BaseScenarioLogger,
    LogScenarioLogger,
    NoOpScenarioLogger,
    TransferFailure,
)

__all__ = [
    "AMSFileManager",
    "AMSFileManagerEvent",
    "AMS_METADATA_KEY",
    "AMS_REFERENCES_KEY",
    "AmsConfig",
    "AmsConfigurationError",
    "AmsResponseError",
    "AmsTransferError",
    "AppConfig",
    "ApplicationContext",
    "AttachmentRequest",
    "BaseBlobClient",
    "BaseScenarioLogger",
    "Configuration",
    "FileMetadata",
    "FilePermission",
    "FileViewDescriptor",
    "HttpBlobClient",
    "LogScenarioLogger",
    "MaterializedFile",
    "MetadataCodec",
    "NoOpScenarioLogger",
    "PermissionsSpec",
    "StoredFileReference",
    "TelemetryConfig",
    "TransferFailure",
    "get_app_context",
    "log_setup",
]
