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

import httpx


class AmsTransferError(Exception):
    """Base class for errors raised by the AMS transfer layer."""


class AmsConfigurationError(AmsTransferError):
    def __init__(self, message: str):
        super().__init__(f"Invalid AMS configuration: {message}")


class AmsResponseError(AmsTransferError):
    """The storage service answered 2xx but a required field is missing or not a non-empty string."""

    def __init__(self, operation: str, missing_field: str):
        self.operation = operation
        self.missing_field = missing_field
        super().__init__(f"{operation} response has no '{missing_field}'")


def _request_error_detail(exc: httpx.RequestError) -> str:
    detail = str(exc).strip()
    if detail:
        return detail
    request = getattr(exc, "request", None)
    method = getattr(request, "method", None)
    url = str(getattr(request, "url", "")) if request is not None else ""
    exc_type = type(exc).__name__
    if method and url:
        return f"{exc_type} on {method} {url}"
    if url:
        return f"{exc_type} on {url}"
    return exc_type


def _status_error_detail(exc: httpx.HTTPStatusError) -> str:
    response = exc.response
    request = exc.request
    prefix = f"HTTP {response.status_code} on {request.method} {request.url}"
    try:
        payload = response.json()
        if isinstance(payload, dict) and "detail" in payload:
            return f"{prefix}: {payload['detail']}"
        return f"{prefix}: {payload}"
    except ValueError:
        text = (response.text or "").strip()
        return f"{prefix}: {text}" if text else prefix


def describe_error(exc: BaseException) -> str:
    """
    Render an exception for telemetry diagnostics.

    HTTP failures keep the method, URL and upstream detail so a failed
    transfer can be traced to the storage call that broke it.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        return _status_error_detail(exc)
    if isinstance(exc, httpx.RequestError):
        return _request_error_detail(exc)
    text = str(exc).strip()
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
