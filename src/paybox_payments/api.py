"""
Public, high-level helpers for building and checking Paybox transactions.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import requests

from .core.client import GatewayClient
from .core.config import (
    ConfigError,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .core.response import ResponseCheck, check_response as _check_response
from .core.tables import EndpointTable, ErrorTable, load_error_table
from .core.transaction import Transaction

__all__ = [
    "ConfigError",
    "GatewayClient",
    "GatewayConfig",
    "GatewayParameters",
    "ResponseCheck",
    "Transaction",
    "check_response",
    "create_gateway_client",
    "create_transaction",
    "load_gateway_config",
]


def create_gateway_client(
    *,
    config: Optional[GatewayConfig] = None,
    session: Optional[requests.Session] = None,
    endpoints: Optional[EndpointTable] = None,
    errors: Optional[ErrorTable] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    site: Optional[str | int] = None,
    rang: Optional[str | int] = None,
    identifiant: Optional[str | int] = None,
    hmac_key: Optional[str] = None,
    offer: Optional[str] = None,
    is_test: Optional[bool | str] = None,
    public_key_path: Optional[str] = None,
    probe_timeout_seconds: Optional[float | int | str] = None,
) -> GatewayClient:
    """
    Construct a :class:`GatewayClient`.

    Callers can either supply a ready-made :class:`GatewayConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            site,
            rang,
            identifiant,
            hmac_key,
            offer,
            is_test,
            public_key_path,
            probe_timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built GatewayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_gateway_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            site=site,
            rang=rang,
            identifiant=identifiant,
            hmac_key=hmac_key,
            offer=offer,
            is_test=is_test,
            public_key_path=public_key_path,
            probe_timeout_seconds=probe_timeout_seconds,
        )
    return GatewayClient(cfg, session=session, endpoints=endpoints, errors=errors)


def create_transaction(
    values: Mapping[str, Any],
    *,
    config: Optional[GatewayConfig] = None,
    session: Optional[requests.Session] = None,
    endpoints: Optional[EndpointTable] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> Transaction:
    """
    One-shot helper: pick a live server, then build and sign the transaction.
    """
    client = create_gateway_client(
        config=config,
        session=session,
        endpoints=endpoints,
        errors={},
        env_file=env_file,
        overrides=overrides if config is None else None,
    )
    return client.create_transaction(values, now=now)


def check_response(
    transaction: Transaction,
    received: Mapping[str, str],
    *,
    public_key_path: Union[str, Path],
    errors: Optional[ErrorTable] = None,
) -> ResponseCheck:
    """
    Authenticate a Paybox callback and translate its error code.
    """
    table = errors if errors is not None else load_error_table()
    return _check_response(transaction.fields, received, public_key_path, table)
