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

"""
Process-wide wiring of configuration, telemetry and the storage client.

Session-scoped objects (file managers) are created per chat; everything
they share is built once here and reused.
"""

import logging
from typing import Optional

from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.clients.http_blob_client import HttpBlobClient
from ams_transfer.common.structures import Configuration
from ams_transfer.core.ams_file_manager import AMSFileManager
from ams_transfer.telemetry.scenario_logger import (
    BaseScenarioLogger,
    LogScenarioLogger,
    NoOpScenarioLogger,
)

logger = logging.getLogger(__name__)


def _mask(value: Optional[str], left: int = 4, right: int = 4) -> str:
    if not value:
        return "<empty>"
    if len(value) <= left + right:
        return "<hidden>"
    return f"{value[:left]}…{value[-right:]}"


def get_app_context() -> "ApplicationContext":
    if ApplicationContext._instance is None:
        raise RuntimeError("ApplicationContext is not yet initialized")
    return ApplicationContext._instance


class ApplicationContext:
    _instance: Optional["ApplicationContext"] = None

    def __init__(
        self,
        configuration: Configuration,
        *,
        blob_client: Optional[BaseBlobClient] = None,
        scenario_logger: Optional[BaseScenarioLogger] = None,
    ):
        self.configuration = configuration
        self._blob_client = blob_client
        self._scenario_logger = scenario_logger
        ApplicationContext._instance = self

    def get_scenario_logger(self) -> BaseScenarioLogger:
        if self._scenario_logger is None:
            if self.configuration.telemetry.type == "log":
                self._scenario_logger = LogScenarioLogger()
            else:
                self._scenario_logger = NoOpScenarioLogger()
        return self._scenario_logger

    def get_blob_client(self) -> BaseBlobClient:
        if self._blob_client is None:
            self._blob_client = HttpBlobClient.from_config(self.configuration.ams)
        return self._blob_client

    def create_file_manager(self, session_token: str) -> AMSFileManager:
        return AMSFileManager(
            self.get_blob_client(),
            session_token=session_token,
            scenario_logger=self.get_scenario_logger(),
        )

    async def aclose(self) -> None:
        if self._blob_client is not None:
            await self._blob_client.aclose()
            self._blob_client = None

    def _log_config_summary(self) -> None:
        cfg = self.configuration
        logger.info("  🗂️  AMS base_url: %s", cfg.ams.base_url)
        logger.info("  🔑 AMS access token: %s", _mask(cfg.ams.access_token))
        logger.info("  📈 Scenario telemetry: %s", cfg.telemetry.type)
