"""Unit tests for configuration loading."""

from __future__ import annotations

import pytest

from paybox_payments.core.config import (
    ConfigError,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from paybox_payments.core.environment import build_environment, load_env_file
from tests.helpers import HMAC_KEY

BASE = {
    "PAYBOX_SITE": "1999888",
    "PAYBOX_RANG": "32",
    "PAYBOX_IDENTIFIANT": "107904482",
    "PAYBOX_HMAC_KEY": HMAC_KEY,
}


def test_defaults():
    config = GatewayConfig.from_mapping(BASE)

    assert config.offer == "system"
    assert config.is_test is False
    assert config.probe_timeout_seconds == 10.0
    assert config.public_key_path is None
    assert config.merchant_fields() == {
        "SITE": "1999888",
        "RANG": "32",
        "IDENTIFIANT": "107904482",
    }


def test_keyword_parameters_override_base():
    config = load_gateway_config(env_file=None, base=BASE, is_test=True, rang=1)

    assert config.is_test is True
    assert config.rang == "1"


def test_parameter_bundle():
    parameters = GatewayParameters(offer="direct", probe_timeout_seconds=2.5)

    config = load_gateway_config(env_file=None, base=BASE, parameters=parameters)

    assert config.offer == "direct"
    assert config.probe_timeout_seconds == 2.5


def test_env_file_does_not_override_base(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local settings\n"
        "export PAYBOX_RANG=99\n"
        "PAYBOX_PUBLIC_KEY_PATH='/etc/paybox/pubkey.pem'\n"
    )

    config = load_gateway_config(env_file=str(env_file), base=BASE)

    assert config.rang == "32"
    assert config.public_key_path == "/etc/paybox/pubkey.pem"


@pytest.mark.parametrize(
    "override, message",
    [
        ({"PAYBOX_SITE": ""}, "PAYBOX_SITE must be provided"),
        ({"PAYBOX_RANG": "3a"}, "PAYBOX_RANG must only contain digits"),
        ({"PAYBOX_HMAC_KEY": "not-hex"}, "PAYBOX_HMAC_KEY must be a hexadecimal string"),
        ({"PAYBOX_TEST": "maybe"}, "PAYBOX_TEST must be a boolean"),
        ({"PAYBOX_PROBE_TIMEOUT_SECONDS": "soon"}, "must be a number"),
        ({"PAYBOX_PROBE_TIMEOUT_SECONDS": "0"}, "greater than zero"),
    ],
)
def test_invalid_values(override, message):
    with pytest.raises(ConfigError, match=message):
        GatewayConfig.from_mapping({**BASE, **override})


def test_build_environment_layers(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\n")

    environment = build_environment(env_file=str(env_file), base={"A": "base"}, overrides={"B": "override"})

    assert environment.get("A") == "base"
    assert environment.get("B") == "override"


def test_load_env_file_only_copies_paybox_keys(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYBOX_SITE=1\nOTHER=2\n")
    target = {"PAYBOX_SITE": "keep"}

    merged = load_env_file(str(env_file), environ=target)

    assert merged == {"PAYBOX_SITE": "keep"}
