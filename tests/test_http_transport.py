import logging

import httpx
import pytest

from ams_transfer.clients.http_transport import compute_transport_tuning


def test_defaults_when_nothing_is_configured():
    tuning = compute_transport_tuning()

    assert tuning.limits == httpx.Limits(max_connections=100, max_keepalive_connections=20, keepalive_expiry=10.0)
    assert tuning.timeout == httpx.Timeout(connect=10.0, read=60.0, write=60.0, pool=5.0)


def test_numeric_timeout_applies_to_every_phase():
    tuning = compute_transport_tuning(timeout=12)

    assert tuning.timeout == httpx.Timeout(12.0)


def test_partial_timeout_mapping_is_merged_with_defaults():
    tuning = compute_transport_tuning(timeout={"read": 300})

    assert tuning.timeout.read == 300.0
    assert tuning.timeout.connect == 10.0
    assert tuning.timeout.pool == 5.0


def test_partial_limits_are_merged_with_defaults():
    tuning = compute_transport_tuning(http_client_limits={"max_connections": 8})

    assert tuning.limits.max_connections == 8
    assert tuning.limits.max_keepalive_connections == 20


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"timeout": -1}, "timeout must be >= 0"),
        ({"timeout": {"connect": "soon"}}, "timeout.connect must be a float"),
        ({"http_client_limits": {"max_connections": -5}}, "http_client_limits.max_connections must be >= 0"),
    ],
)
def test_invalid_values_raise(kwargs, message):
    with pytest.raises(ValueError, match=message):
        compute_transport_tuning(**kwargs)


def test_unsupported_types_fall_back_with_a_warning(caplog):
    with caplog.at_level(logging.WARNING):
        tuning = compute_transport_tuning(timeout="fast", http_client_limits=["nope"])

    assert tuning == compute_transport_tuning()
    assert "timeout ignored" in caplog.text
    assert "http_client_limits ignored" in caplog.text


def test_limit_values_are_converted_and_unknown_keys_ignored():
    tuning = compute_transport_tuning(
        timeout={"read": "90", "retries": 3},
        http_client_limits={"max_keepalive_connections": "4", "keepalive_expiry_seconds": 2, "http2": True},
    )

    assert tuning.limits == httpx.Limits(max_connections=100, max_keepalive_connections=4, keepalive_expiry=2.0)
    assert tuning.timeout == httpx.Timeout(connect=10.0, read=90.0, write=60.0, pool=5.0)


def test_non_integer_connection_limits_raise():
    with pytest.raises(ValueError, match="http_client_limits.max_connections must be an int"):
        compute_transport_tuning(http_client_limits={"max_connections": "many"})
