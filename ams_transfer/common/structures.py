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

import os
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    name: str = Field(default="ams-transfer", description="Service name used in logs.")
    log_level: str = Field(default="INFO", description="Root logging level.")
    log_json: bool = Field(
        default=False, description="Emit compact JSON lines instead of console text."
    )


class AmsConfig(BaseModel):
    base_url: str = Field(..., description="Base URL of the attachment storage service.")
    access_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AMS_ACCESS_TOKEN"),
        description="Bearer token sent to the storage service, from env by default.",
    )
    timeout: Optional[Union[float, Dict[str, float]]] = Field(
        default=None,
        description="Seconds for every phase, or a {connect, read, write, pool} mapping.",
    )
    http_client_limits: Optional[Dict[str, Any]] = Field(
        default=None,
        description="max_connections / max_keepalive_connections / keepalive_expiry_seconds.",
    )


class TelemetryConfig(BaseModel):
    type: Literal["log", "none"] = Field(
        default="log", description="Scenario sink: python logging, or nothing."
    )


class Configuration(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    ams: AmsConfig
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
