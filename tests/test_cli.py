"""Tests for the command-line entry point."""

from __future__ import annotations

from unittest.mock import Mock, patch

import requests

from paybox_payments.cli import run_cli
from tests.helpers import ALIVE_BODY, HMAC_KEY

SETTINGS = [
    "--set", "PAYBOX_SITE=1999888",
    "--set", "PAYBOX_RANG=32",
    "--set", "PAYBOX_IDENTIFIANT=107904482",
    "--set", f"PAYBOX_HMAC_KEY={HMAC_KEY}",
    "--set", "PAYBOX_OFFER=system",
    "--set", "PAYBOX_TEST=false",
    "--set", "PAYBOX_SERVERS_FILE=",
    "--set", "PAYBOX_ERRORS_FILE=",
]


def _fake_get(alive: bool):
    def _get(url, timeout=None):
        if not alive:
            raise requests.ConnectionError(url)
        response = Mock()
        response.status_code = 200
        response.text = ALIVE_BODY
        return response

    return _get


def test_prints_signed_form(tmp_path, capsys):
    argv = ["--env-file", str(tmp_path / ".env"), *SETTINGS, "--field", "TOTAL=1000", "--field", "cmd=order-1"]

    with patch.object(requests.Session, "get", side_effect=_fake_get(True)):
        assert run_cli(argv) == 0

    out = capsys.readouterr().out
    assert out.startswith('<form method="POST" action="https://')
    assert '/cgi/MYchoix_pagepaiement.cgi">' in out
    assert 'name="PBX_CMD" value="order-1"' in out
    assert 'name="PBX_HMAC"' in out


def test_probe_only(tmp_path, capsys):
    argv = ["--env-file", str(tmp_path / ".env"), *SETTINGS, "--probe-only"]

    with patch.object(requests.Session, "get", side_effect=_fake_get(True)):
        assert run_cli(argv) == 0

    assert capsys.readouterr().out.strip().endswith("/cgi/MYchoix_pagepaiement.cgi")


def test_no_alive_server(tmp_path):
    argv = ["--env-file", str(tmp_path / ".env"), *SETTINGS, "--field", "TOTAL=1000"]

    with patch.object(requests.Session, "get", side_effect=_fake_get(False)):
        assert run_cli(argv) == 1


def test_invalid_configuration(tmp_path):
    argv = ["--env-file", str(tmp_path / ".env"), *SETTINGS, "--set", "PAYBOX_HMAC_KEY=zz"]

    assert run_cli(argv) == 1
