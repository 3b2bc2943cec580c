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

import asyncio
import json
import logging
from typing import Any, Optional

try:
    from rich.logging import RichHandler
except Exception:  # optional in slim images
    RichHandler = None  # type: ignore

CONSOLE_FORMAT = (
    "%(asctime)s | %(levelname)s | [pid=%(process)d %(threadName)s/%(task_name)s] | %(message)s"
)

NOISY_LIBS = (
    "httpx",
    "httpcore",
    "urllib3",
    "asyncio",
)


class CompactJsonFormatter(logging.Formatter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service = service_name

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "file": record.filename,
            "line": record.lineno,
            "service": self.service,
            "task": getattr(record, "task_name", None),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


class TaskNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        """Adds the current asyncio Task name to the log record."""
        try:
            current_task: Optional[asyncio.Task[Any]] = asyncio.current_task()
            if current_task is not None:
                record.task_name = current_task.get_name() or str(id(current_task))
            else:
                record.task_name = "Main"
        except RuntimeError:
            # Not inside an event loop (boot, sync callers).
            record.task_name = "Sync"
        return True


def log_setup(
    *,
    service_name: str,
    log_level: str = "INFO",
    use_rich: bool = True,
    json_output: bool = False,
) -> None:
    """
    Install the process-wide logging handlers. Safe to call more than once:
    later calls for the same service are ignored.

    Concurrent file transfers interleave in the logs, so every line carries
    the asyncio task name.
    """
    root = logging.getLogger()
    marker = f"_ams_handlers_{service_name}"
    if getattr(root, marker, False):
        return

    logging.captureWarnings(True)
    root.setLevel(log_level.upper())
    for h in list(root.handlers):
        root.removeHandler(h)

    if json_output:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(CompactJsonFormatter(service_name))
    elif use_rich and RichHandler is not None:
        handler = RichHandler(
            rich_tracebacks=False,
            show_time=False,  # time is in the format string
            show_level=True,
            show_path=True,
        )
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(TaskNameFilter())
    handler.setLevel(log_level.upper())
    root.addHandler(handler)

    # Transport libraries log every request at INFO; keep warnings only.
    for noisy in NOISY_LIBS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    setattr(root, marker, True)
