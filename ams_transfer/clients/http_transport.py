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
Connection limits and timeouts for the AMS HTTP client.

Settings come from `ams.http_client_limits` and `ams.timeout`. Partial
mappings are merged over the defaults below. A value of the wrong kind
raises ValueError, a section of the wrong type is ignored with a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

logger = logging.getLogger(__name__)

TimeoutSetting = Union[int, float, Dict[str, Any], None]


@dataclass(frozen=True)
class TransportTuning:
    """Safe to log (no secrets)."""

    limits: httpx.Limits
    timeout: httpx.Timeout


# config key -> (httpx.Limits argument, conversion, default)
_LIMIT_FIELDS: Dict[str, tuple] = {
    "max_connections": ("max_connections", int, 100),
    "max_keepalive_connections": ("max_keepalive_connections", int, 20),
    "keepalive_expiry_seconds": ("keepalive_expiry", float, 10.0),
}

# Attachments can be large: reads and writes get more room than connects.
_TIMEOUT_PHASES: Dict[str, float] = {
    "connect": 10.0,
    "read": 60.0,
    "write": 60.0,
    "pool": 5.0,
}


def _setting(value: Any, name: str, kind: type = float) -> Any:
    try:
        converted = kind(value)
    except (TypeError, ValueError) as e:
        article = "an" if kind is int else "a"
        raise ValueError(f"{name} must be {article} {kind.__name__}") from e
    if converted < 0:
        raise ValueError(f"{name} must be >= 0")
    return converted


def _parse_limits(section: Any) -> httpx.Limits:
    if section is not None and not isinstance(section, dict):
        logger.warning(
            "[AMS][NET] http_client_limits ignored (expected dict, got %s).",
            type(section).__name__,
        )
        section = None
    section = section or {}

    arguments = {}
    for key, (argument, kind, default) in _LIMIT_FIELDS.items():
        arguments[argument] = _setting(
            section.get(key, default), f"http_client_limits.{key}", kind
        )
    return httpx.Limits(**arguments)


def _parse_timeout(raw: TimeoutSetting) -> httpx.Timeout:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return httpx.Timeout(_setting(raw, "timeout"))

    phases = dict(_TIMEOUT_PHASES)
    if isinstance(raw, dict):
        for phase in _TIMEOUT_PHASES:
            if phase in raw:
                phases[phase] = _setting(raw[phase], f"timeout.{phase}")
    elif raw is not None:
        logger.warning(
            "[AMS][NET] timeout ignored (expected number or dict, got %s).",
            type(raw).__name__,
        )
    return httpx.Timeout(**phases)


def compute_transport_tuning(
    timeout: TimeoutSetting = None,
    http_client_limits: Optional[Dict[str, Any]] = None,
) -> TransportTuning:
    """Does not allocate clients."""
    return TransportTuning(
        limits=_parse_limits(http_client_limits),
        timeout=_parse_timeout(timeout),
    )
