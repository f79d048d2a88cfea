"""Unit tests for endpoint and error table loading."""

from __future__ import annotations

import json

import pytest

from paybox_payments.core.errors import ConfigError
from paybox_payments.core.response import describe_error
from paybox_payments.core.tables import load_endpoint_table, load_error_table


def test_packaged_endpoint_table():
    table = load_endpoint_table()

    assert table["system"]["prod"]
    assert table["system"]["test"]
    assert set(table["system"]["prod"]).isdisjoint(table["system"]["test"])


def test_packaged_error_table_templates_codes():
    table = load_error_table()

    assert str(describe_error("00001", table)).endswith("(code 00001)")
    assert "00123" in str(describe_error("00123", table))


def test_custom_tables(tmp_path):
    servers = tmp_path / "servers.json"
    servers.write_text(json.dumps({"direct": {"prod": ["https://a.example"]}}))
    errors = tmp_path / "errors.json"
    errors.write_text(json.dumps({"^1$": "one %ERROR_CODE%", "^2$": "two"}))

    assert load_endpoint_table(servers) == {"direct": {"prod": ["https://a.example"], "test": []}}
    assert list(load_error_table(errors)) == ["^1$", "^2$"]


def test_missing_table_file(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        load_endpoint_table(tmp_path / "absent.json")


def test_malformed_tables(tmp_path):
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{")
    wrong_shape = tmp_path / "shape.json"
    wrong_shape.write_text(json.dumps({"system": {"prod": "https://a.example"}}))

    with pytest.raises(ConfigError):
        load_error_table(bad_json)
    with pytest.raises(ConfigError):
        load_endpoint_table(wrong_shape)
