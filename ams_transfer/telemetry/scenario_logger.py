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
import threading
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, Mapping, Optional, Union

from ams_transfer.telemetry.scenario_events import AMSFileManagerEvent

logger = logging.getLogger(__name__)

ScenarioName = Union[AMSFileManagerEvent, str]
ScenarioDetails = Mapping[str, str]


def _name(event: ScenarioName) -> str:
    return event.value if isinstance(event, AMSFileManagerEvent) else str(event)


class BaseScenarioLogger(ABC):
    """
    Start/complete/fail signalling around a named operation.

    Contract for callers: one `start_scenario`, then exactly one of
    `complete_scenario` or `fail_scenario`, whatever path the operation takes.
    Implementations must never raise into the caller.
    """

    @abstractmethod
    def start_scenario(self, event: ScenarioName) -> None:  # pragma: no cover - interface
        pass

    @abstractmethod
    def complete_scenario(
        self, event: ScenarioName, details: Optional[ScenarioDetails] = None
    ) -> None:  # pragma: no cover - interface
        pass

    @abstractmethod
    def fail_scenario(
        self, event: ScenarioName, details: ScenarioDetails
    ) -> None:  # pragma: no cover - interface
        pass


class NoOpScenarioLogger(BaseScenarioLogger):
    """Accepts every signal and drops it. Used when no telemetry sink is wired."""

    def start_scenario(self, event: ScenarioName) -> None:
        return

    def complete_scenario(
        self, event: ScenarioName, details: Optional[ScenarioDetails] = None
    ) -> None:
        return

    def fail_scenario(self, event: ScenarioName, details: ScenarioDetails) -> None:
        return


class LogScenarioLogger(BaseScenarioLogger):
    """
    Scenario sink backed by the standard `logging` tree.

    Starts and completions go out at DEBUG, failures at WARNING with the
    diagnostic payload. Counters per scenario and outcome are kept so a
    process can expose a cheap summary (see `snapshot`).
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()

    def _bump(self, event: ScenarioName, outcome: str) -> None:
        with self._lock:
            self._counts[f"{_name(event)}.{outcome}"] += 1

    def start_scenario(self, event: ScenarioName) -> None:
        self._bump(event, "started")
        self._log.debug("[AMS][SCENARIO] start %s", _name(event))

    def complete_scenario(
        self, event: ScenarioName, details: Optional[ScenarioDetails] = None
    ) -> None:
        self._bump(event, "completed")
        if details:
            self._log.info(
                "[AMS][SCENARIO] complete %s details=%s", _name(event), dict(details)
            )
        else:
            self._log.debug("[AMS][SCENARIO] complete %s", _name(event))

    def fail_scenario(self, event: ScenarioName, details: ScenarioDetails) -> None:
        self._bump(event, "failed")
        self._log.warning(
            "[AMS][SCENARIO] fail %s details=%s", _name(event), dict(details)
        )

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)
