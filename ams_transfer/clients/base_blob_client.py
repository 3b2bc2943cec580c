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

from abc import ABC, abstractmethod
from typing import Any, Dict

from ams_transfer.core.file_structures import FileViewDescriptor, MaterializedFile


class BaseBlobClient(ABC):
    """
    Contract of the attachment storage service as seen by the file manager.

    Each call is a single attempt: it returns or raises. Retries, timeouts
    and authentication are the implementation's business.
    """

    @abstractmethod
    async def fetch_blob(self, url: str) -> bytes:  # pragma: no cover - interface
        pass

    @abstractmethod
    async def create_object(
        self, session_token: str, file: MaterializedFile
    ) -> Dict[str, Any]:  # pragma: no cover - interface
        """Register a new object for `file`. The returned mapping carries its `id`."""
        pass

    @abstractmethod
    async def upload_document(
        self, object_id: str, file: MaterializedFile
    ) -> None:  # pragma: no cover - interface
        pass

    @abstractmethod
    async def get_view_status(
        self, descriptor: FileViewDescriptor
    ) -> Dict[str, Any]:  # pragma: no cover - interface
        """The returned mapping carries the `view_location` of the content."""
        pass

    @abstractmethod
    async def get_view(
        self, descriptor: FileViewDescriptor, view_location: str
    ) -> bytes:  # pragma: no cover - interface
        pass

    async def aclose(self) -> None:
        return
