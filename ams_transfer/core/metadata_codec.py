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
Flattening of attachment state into a string-only property bag.

Message envelopes only carry string values, so the list of AMS file ids and
the list of per-file metadata travel as compact JSON text under two
well-known keys. Every function here is total: on any failure it signals the
scenario as failed and returns None, since callers treat "no attachments" and
"unreadable attachments" the same way.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from pydantic import TypeAdapter

from ams_transfer.core.file_structures import FileMetadata
from ams_transfer.telemetry.scenario_events import AMSFileManagerEvent
from ams_transfer.telemetry.scenario_logger import BaseScenarioLogger

AMS_REFERENCES_KEY = "amsReferences"
AMS_METADATA_KEY = "amsMetadata"

PropertyBag = Dict[str, str]

_FILE_IDS = TypeAdapter(List[str])
_METADATA = TypeAdapter(List[FileMetadata])


def _to_json(value: Any) -> str:
    # Same text a JavaScript JSON.stringify produces on the other side.
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _failure_details(input_name: str, raw_input: Any, error: Exception) -> Dict[str, str]:
    return {
        "ExceptionDetails": _to_json(
            {input_name: f"{raw_input}", "errorObject": f"{error}"}
        )
    }


class MetadataCodec:
    def __init__(self, scenario_logger: BaseScenarioLogger):
        self.scenario_logger = scenario_logger

    def _decode(
        self,
        event: AMSFileManagerEvent,
        adapter: TypeAdapter,
        bag: Optional[Mapping[str, str]],
        key: str,
    ) -> Optional[list]:
        self.scenario_logger.start_scenario(event)
        try:
            raw = (bag or {}).get(key)
            if raw is None:
                raise KeyError(f"'{key}' is missing from the property bag")
            # json.loads keeps lone surrogates that a JavaScript peer can emit.
            result = adapter.validate_python(json.loads(raw), strict=True)
        except Exception as e:
            self.scenario_logger.fail_scenario(
                event, _failure_details("metadata", bag, e)
            )
            return None
        self.scenario_logger.complete_scenario(event)
        return result

    def _encode(
        self,
        event: AMSFileManagerEvent,
        adapter: TypeAdapter,
        values: Any,
        key: str,
        input_name: str,
    ) -> Optional[PropertyBag]:
        self.scenario_logger.start_scenario(event)
        try:
            checked = adapter.validate_python(values, strict=True)
            result = {key: _to_json(checked)}
        except Exception as e:
            self.scenario_logger.fail_scenario(
                event, _failure_details(input_name, values, e)
            )
            return None
        self.scenario_logger.complete_scenario(event)
        return result

    def decode_file_ids(self, bag: Optional[Mapping[str, str]]) -> Optional[List[str]]:
        return self._decode(
            AMSFileManagerEvent.GET_FILE_IDS, _FILE_IDS, bag, AMS_REFERENCES_KEY
        )

    def encode_file_ids(self, file_ids: List[str]) -> Optional[PropertyBag]:
        return self._encode(
            AMSFileManagerEvent.CREATE_FILE_ID_PROPERTY,
            _FILE_IDS,
            file_ids,
            AMS_REFERENCES_KEY,
            "fileIds",
        )

    def decode_metadata(
        self, bag: Optional[Mapping[str, str]]
    ) -> Optional[List[FileMetadata]]:
        return self._decode(
            AMSFileManagerEvent.GET_FILE_METADATA, _METADATA, bag, AMS_METADATA_KEY
        )

    def encode_metadata(self, records: List[FileMetadata]) -> Optional[PropertyBag]:
        return self._encode(
            AMSFileManagerEvent.CREATE_FILE_METADATA_PROPERTY,
            _METADATA,
            records,
            AMS_METADATA_KEY,
            "metadata",
        )
