import pytest

from ams_transfer.application_context import ApplicationContext, get_app_context
from ams_transfer.clients.http_blob_client import HttpBlobClient
from ams_transfer.common.structures import AmsConfig, Configuration, TelemetryConfig
from ams_transfer.main import create_app_context
from ams_transfer.telemetry.scenario_logger import LogScenarioLogger, NoOpScenarioLogger
from tests.conftest import FakeBlobClient


def _configuration(telemetry: str = "log") -> Configuration:
    return Configuration(
        ams=AmsConfig(base_url="https://ams.example.com", access_token="tok-123456789"),
        telemetry=TelemetryConfig(type=telemetry),
    )


def test_get_app_context_requires_initialization():
    with pytest.raises(RuntimeError):
        get_app_context()


def test_context_builds_scenario_logger_from_configuration():
    assert isinstance(ApplicationContext(_configuration("log")).get_scenario_logger(), LogScenarioLogger)
    assert isinstance(ApplicationContext(_configuration("none")).get_scenario_logger(), NoOpScenarioLogger)


@pytest.mark.asyncio
async def test_context_builds_and_closes_http_client():
    context = ApplicationContext(_configuration())

    client = context.get_blob_client()

    assert isinstance(client, HttpBlobClient)
    assert context.get_blob_client() is client
    await context.aclose()
    assert client._client.is_closed


@pytest.mark.asyncio
async def test_file_managers_share_client_and_telemetry():
    blob_client = FakeBlobClient()
    context = ApplicationContext(_configuration(), blob_client=blob_client)

    first = context.create_file_manager("chat-1")
    second = context.create_file_manager("chat-2")

    assert get_app_context() is context
    assert first.blob_client is second.blob_client is blob_client
    assert first.scenario_logger is second.scenario_logger
    assert (first.session_token, second.session_token) == ("chat-1", "chat-2")


def test_create_app_context_with_explicit_configuration(monkeypatch):
    calls = []
    monkeypatch.setattr("ams_transfer.main.log_setup", lambda **kwargs: calls.append(kwargs))

    context = create_app_context(_configuration())

    assert get_app_context() is context
    assert calls == [{"service_name": "ams-transfer", "log_level": "INFO", "json_output": False}]
