"""
Assembly of signed Paybox System transactions.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

import requests

from .fields import FieldMap
from .servers import PAYMENT_PATH, Probe, probe_server, select_server
from .signing import sign_fields

__all__ = [
    "DEFAULT_FIELDS",
    "Transaction",
    "build_fields",
    "create_transaction",
    "generate_form_body",
]

DEFAULT_FIELDS = (("RUF1", "POST"),)


def generate_form_body(fields: FieldMap) -> str:
    """Render one hidden ``<input>`` per field, in field order."""
    return "".join(
        '<input type="hidden" name="{}" value="{}">'.format(
            html.escape(name, quote=True), html.escape(value, quote=True)
        )
        for name, value in fields.wire_items()
    )


@dataclass
class Transaction:
    url: str
    fields: FieldMap = field(default_factory=FieldMap)
    method: str = "POST"

    @property
    def body(self) -> str:
        return generate_form_body(self.fields)

    @property
    def signature(self) -> Optional[str]:
        return self.fields.get("HMAC")

    def form_data(self) -> dict:
        """Return the fields keyed by their ``PBX_`` wire names."""
        return dict(self.fields.wire_items())


def build_fields(values: Mapping[str, Any]) -> FieldMap:
    """
    Start a field map with the protocol defaults followed by ``values``.
    """
    fields = FieldMap(DEFAULT_FIELDS)
    for name, value in values.items():
        fields[name] = value
    return fields


def create_transaction(
    values: Mapping[str, Any],
    key: str,
    *,
    servers: Sequence[str],
    probe: Probe = probe_server,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    now: Optional[datetime] = None,
) -> Transaction:
    """
    Select a live server, sign ``values`` with ``key`` and return the transaction.

    Raises :class:`NoAliveServerError` before anything is signed when no
    server answers, and :class:`BadKeyFormatError` when ``key`` is unusable.
    """
    server_url = select_server(servers, probe=probe, session=session, timeout=timeout)

    fields = build_fields(values)
    sign_fields(fields, key, now=now)
    fields.freeze()

    transaction = Transaction(url=server_url + PAYMENT_PATH, fields=fields)
    logging.info(
        "Created Paybox transaction for %s (%d fields)", transaction.url, len(fields)
    )
    return transaction
