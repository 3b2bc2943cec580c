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

from ams_transfer.clients.base_blob_client import BaseBlobClient
from ams_transfer.clients.http_blob_client import HttpBlobClient
from ams_transfer.clients.http_transport import TransportTuning, compute_transport_tuning

__all__ = [
    "BaseBlobClient",
    "HttpBlobClient",
    "TransportTuning",
    "compute_transport_tuning",
]
