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

from enum import Enum


class AMSFileManagerEvent(str, Enum):
    AMS_UPLOAD = "AMSUpload"
    AMS_DOWNLOAD = "AMSDownload"
    GET_FILE_IDS = "GetFileIds"
    CREATE_FILE_ID_PROPERTY = "CreateFileIdProperty"
    GET_FILE_METADATA = "GetFileMetadata"
    CREATE_FILE_METADATA_PROPERTY = "CreateFileMetadataProperty"


class TransferFailure(str, Enum):
    """Tag of the transfer step that failed, reported in failure diagnostics."""

    FETCH_BLOB = "AMSFetchBlobFailure"
    CREATE_OBJECT = "AMSCreateObjectFailure"
    UPLOAD_DOCUMENT = "AMSUploadDocumentFailure"
    GET_VIEW_STATUS = "AMSGetViewStatusFailure"
    GET_VIEW = "AMSGetViewFailure"
