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

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest

from ams_transfer.application_context import ApplicationContext
from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.core.file_structures import FileViewDescriptor, MaterializedFile
from ams_transfer.telemetry.scenario_logger import BaseScenarioLogger

SESSION_TOKEN = "chat-42"


class RecordingScenarioLogger(BaseScenarioLogger):
    """Keeps every signal in order: (signal, scenario name, details)."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Optional[Dict[str, str]]]] = []

    def start_scenario(self, event) -> None:
        self.events.append(("start", _value(event), None))

    def complete_scenario(self, event, details=None) -> None:
        self.events.append(("complete", _value(event), dict(details) if details else None))

    def fail_scenario(self, event, details) -> None:
        self.events.append(("fail", _value(event), dict(details)))

    def signals(self, name: str) -> List[str]:
        return [signal for signal, scenario, _ in self.events if scenario == name]

    def failures(self, name: str) -> List[Dict[str, str]]:
        return [d for signal, scenario, d in self.events if signal == "fail" and scenario == name and d]

    def assert_paired(self) -> None:
        names = {scenario for _, scenario, _ in self.events}
        for name in names:
            signals = self.signals(name)
            starts = signals.count("start")
            ends = signals.count("complete") + signals.count("fail")
            assert starts == ends, f"{name}: {starts} starts for {ends} outcomes"
            # An outcome never precedes its start.
            open_count = 0
            for signal in signals:
                open_count += 1 if signal == "start" else -1
                assert open_count >= 0, f"{name}: outcome without start"


def _value(event) -> str:
    return getattr(event, "value", str(event))


class FakeBlobClient(BaseBlobClient):
    def __init__(
        self,
        blobs: Optional[Dict[str, bytes]] = None,
        *,
        views: Optional[Dict[str, bytes]] = None,
        delays: Optional[Dict[str, float]] = None,
        fail_fetch: Iterable[str] = (),
        fail_create: Iterable[str] = (),
        fail_upload: Iterable[str] = (),
        fail_view_status: Iterable[str] = (),
        fail_view: Iterable[str] = (),
        create_response: Optional[Dict[str, Any]] = None,
        view_status_response: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.blobs = blobs or {}
        self.views = views or {}
        self.delays = delays or {}
        self.fail_fetch = set(fail_fetch)
        self.fail_create = set(fail_create)
        self.fail_upload = set(fail_upload)
        self.fail_view_status = set(fail_view_status)
        self.fail_view = set(fail_view)
        self.create_response = create_response
        self.view_status_response = view_status_response
        self.calls: List[Tuple[str, Any]] = []

    async def fetch_blob(self, url: str) -> bytes:
        self.calls.append(("fetch_blob", url))
        await asyncio.sleep(self.delays.get(url, 0))
        if url in self.fail_fetch:
            raise ConnectionError(f"cannot reach {url}")
        return self.blobs.get(url, b"")

    async def create_object(self, session_token: str, file: MaterializedFile) -> Dict[str, Any]:
        self.calls.append(("create_object", (session_token, file.name)))
        if file.name in self.fail_create:
            raise RuntimeError("create rejected")
        if self.create_response is not None:
            return self.create_response
        return {"id": f"obj-{file.name}"}

    async def upload_document(self, object_id: str, file: MaterializedFile) -> None:
        self.calls.append(("upload_document", (object_id, file.name, file.content)))
        if file.name in self.fail_upload:
            raise RuntimeError("upload rejected")

    async def get_view_status(self, descriptor: FileViewDescriptor) -> Dict[str, Any]:
        self.calls.append(("get_view_status", descriptor))
        await asyncio.sleep(self.delays.get(descriptor.id, 0))
        if descriptor.id in self.fail_view_status:
            raise RuntimeError("view status unavailable")
        if self.view_status_response is not None:
            return self.view_status_response
        return {"view_location": f"https://views.example.com/{descriptor.id}/{descriptor.type}"}

    async def get_view(self, descriptor: FileViewDescriptor, view_location: str) -> bytes:
        self.calls.append(("get_view", (descriptor, view_location)))
        if descriptor.id in self.fail_view:
            raise RuntimeError("view unavailable")
        return self.views.get(descriptor.id, b"")

    def called(self, name: str) -> List[Any]:
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def scenario_logger() -> RecordingScenarioLogger:
    return RecordingScenarioLogger()


@pytest.fixture(autouse=True)
def reset_app_context():
    ApplicationContext._instance = None
    yield
    ApplicationContext._instance = None
