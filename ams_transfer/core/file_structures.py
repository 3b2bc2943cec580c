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

from enum import Enum
from typing import Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

FileMetadata = Dict[str, str]

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FilePermission(int, Enum):
    READ = 0
    WRITE = 1


class PermissionsSpec(BaseModel):
    """
    Sharing intent attached to an upload request.

    Carried through untouched: nothing in the transfer path applies it.
    """

    users: Set[str] = Field(default_factory=set)
    permission: FilePermission = FilePermission.READ


class _AliasedModel(BaseModel):
    # Accept both the camelCase names used in message envelopes and the
    # Python attribute names.
    model_config = ConfigDict(populate_by_name=True)


class AttachmentRequest(_AliasedModel):
    name: Optional[str] = None
    content_type: Optional[str] = Field(default=None, alias="contentType")
    content_url: Optional[str] = Field(default=None, alias="contentUrl")
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")
    permissions: Optional[PermissionsSpec] = None


class StoredFileReference(_AliasedModel):
    file_id: Optional[str] = Field(default=None, alias="fileId")
    metadata: Optional[FileMetadata] = None

    @property
    def file_name(self) -> Optional[str]:
        return (self.metadata or {}).get("fileName")

    @property
    def content_type(self) -> Optional[str]:
        return (self.metadata or {}).get("contentType")


class MaterializedFile(BaseModel):
    """
    Raw bytes bound to a file name and a MIME type.

    Wraps the fetched bytes on upload and carries the view bytes on download.
    """

    name: str
    content_type: str = DEFAULT_CONTENT_TYPE
    content: bytes = b""

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class FileViewDescriptor(BaseModel):
    id: str
    type: str


def file_type_tag(content_type: Optional[str]) -> str:
    """`image/png` -> `png`. A type without a slash is returned as is."""
    if not content_type:
        return ""
    return content_type.rsplit("/", 1)[-1]
