"""
Configuration-bound helpers for the Paybox System gateway.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from .config import GatewayConfig
from .directive import get_signature_field
from .errors import ConfigError
from .response import ResponseCheck, check_response
from .servers import get_payment_url, servers_for_offer
from .tables import EndpointTable, ErrorTable, load_endpoint_table, load_error_table
from .transaction import Transaction, create_transaction

__all__ = ["GatewayClient"]


class GatewayClient:
    """
    Thin convenience wrapper binding a configuration, an HTTP session and
    the endpoint/error tables.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        session: Optional[requests.Session] = None,
        endpoints: Optional[EndpointTable] = None,
        errors: Optional[ErrorTable] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.endpoints = (
            endpoints if endpoints is not None else load_endpoint_table(config.servers_file)
        )
        self.errors = errors if errors is not None else load_error_table(config.errors_file)

    def servers(self) -> List[str]:
        """
        Return the candidate servers for the configured offer, in priority order.
        """
        return servers_for_offer(self.endpoints, self.config.offer, self.config.is_test)

    def payment_url(self) -> str:
        return get_payment_url(
            self.endpoints,
            self.config.offer,
            self.config.is_test,
            session=self.session,
            timeout=self.config.probe_timeout_seconds,
        )

    def build_values(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        merged: Dict[str, Any] = dict(self.config.merchant_fields())
        merged.update(values)
        return merged

    def create_transaction(
        self,
        values: Mapping[str, Any],
        *,
        now: Optional[datetime] = None,
    ) -> Transaction:
        """
        Build and sign a transaction carrying the merchant identity and ``values``.
        """
        return create_transaction(
            self.build_values(values),
            self.config.hmac_key,
            servers=self.servers(),
            session=self.session,
            timeout=self.config.probe_timeout_seconds,
            now=now,
        )

    def check_response(
        self,
        transaction: Transaction,
        received: Mapping[str, str],
        public_key_path: Optional[Union[str, Path]] = None,
    ) -> ResponseCheck:
        key_path = public_key_path or self.config.public_key_path
        if key_path is None and get_signature_field(transaction.fields) is not None:
            raise ConfigError("PAYBOX_PUBLIC_KEY_PATH must be provided to check responses")
        result = check_response(transaction.fields, received, key_path or "", self.errors)
        if result.success:
            logging.info("Paybox callback accepted for %s", transaction.fields.get("CMD"))
        return result
