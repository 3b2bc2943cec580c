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

import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.clients.http_transport import TransportTuning, compute_transport_tuning
from ams_transfer.common.error import AmsResponseError
from ams_transfer.common.structures import AmsConfig
from ams_transfer.core.file_structures import FileViewDescriptor, MaterializedFile

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="")


class HttpBlobClient(BaseBlobClient):
    """
    Single-attempt HTTP client for the attachment storage service.

    The bearer token is only sent to URLs under `base_url`: content URLs and
    view locations may point at third-party hosts (CDN, pre-signed storage).

    Usage:
        async with HttpBlobClient.from_config(configuration.ams) as client:
            manager = AMSFileManager(client, session_token=chat_id)
    """

    def __init__(
        self,
        base_url: str,
        *,
        access_token: Optional[str] = None,
        tuning: Optional[TransportTuning] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._access_token = access_token
        if client is None:
            tuning = tuning or compute_transport_tuning()
            client = httpx.AsyncClient(limits=tuning.limits, timeout=tuning.timeout)
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    @classmethod
    def from_config(cls, cfg: AmsConfig) -> "HttpBlobClient":
        tuning = compute_transport_tuning(cfg.timeout, cfg.http_client_limits)
        logger.info(
            "[AMS][NET] HTTP blob client base_url=%s auth=%s "
            "limits(max_conn=%s keepalive=%s) timeout(connect=%ss read=%ss write=%ss pool=%ss)",
            cfg.base_url,
            "bearer" if cfg.access_token else "none",
            tuning.limits.max_connections,
            tuning.limits.max_keepalive_connections,
            tuning.timeout.connect,
            tuning.timeout.read,
            tuning.timeout.write,
            tuning.timeout.pool,
        )
        return cls(cfg.base_url, access_token=cfg.access_token, tuning=tuning)

    async def __aenter__(self) -> "HttpBlobClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ---------------------------
    # Internal helpers
    # ---------------------------

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        if path_or_url.startswith("/"):
            return f"{self.base_url}{path_or_url}"
        # blob:, data: and mistyped schemes are not reachable from here.
        raise httpx.UnsupportedProtocol(
            f"Cannot fetch '{path_or_url}': expected an http(s) URL or an AMS path"
        )

    def _is_ams_url(self, url: str) -> bool:
        return url == self.base_url or url.startswith(f"{self.base_url}/")

    async def _request(self, method: str, path_or_url: str, **kwargs: Any) -> httpx.Response:
        url = self._url(path_or_url)
        headers: Dict[str, str] = kwargs.pop("headers", {})
        if self._access_token and self._is_ams_url(url):
            headers["Authorization"] = f"Bearer {self._access_token}"

        start = time.monotonic()
        r = await self._client.request(method, url, headers=headers, **kwargs)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[AMS][HTTP] %s %s -> %d in %dms",
                method,
                url,
                r.status_code,
                int((time.monotonic() - start) * 1000),
            )
        r.raise_for_status()
        return r

    @staticmethod
    def _json_with(r: httpx.Response, operation: str, field: str) -> Dict[str, Any]:
        body = r.json()
        value = body.get(field) if isinstance(body, dict) else None
        if not isinstance(value, str) or not value:
            raise AmsResponseError(operation, field)
        return body

    # ---------------------------
    # Blob client contract
    # ---------------------------

    async def fetch_blob(self, url: str) -> bytes:
        r = await self._request("GET", url)
        return r.content

    async def create_object(self, session_token: str, file: MaterializedFile) -> Dict[str, Any]:
        r = await self._request(
            "POST",
            "/v1/objects",
            json={
                "chatId": session_token,
                "fileName": file.name,
                "contentType": file.content_type,
            },
        )
        return self._json_with(r, "create_object", "id")

    async def upload_document(self, object_id: str, file: MaterializedFile) -> None:
        await self._request(
            "PUT",
            f"/v1/objects/{_segment(object_id)}/content",
            content=file.content,
            headers={"Content-Type": file.content_type},
        )

    async def get_view_status(self, descriptor: FileViewDescriptor) -> Dict[str, Any]:
        r = await self._request(
            "GET",
            f"/v1/objects/{_segment(descriptor.id)}/views/{_segment(descriptor.type)}/status",
        )
        return self._json_with(r, "get_view_status", "view_location")

    async def get_view(self, descriptor: FileViewDescriptor, view_location: str) -> bytes:
        r = await self._request("GET", view_location)
        return r.content
