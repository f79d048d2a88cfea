"""
Liveness probing and failover across the Paybox server list.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Mapping, Optional, Sequence

import requests

from .errors import NoAliveServerError
from .urls import parse_endpoint_url

__all__ = [
    "PAYMENT_PATH",
    "get_payment_url",
    "is_status_ok",
    "probe_server",
    "select_server",
    "servers_for_offer",
]

PAYMENT_PATH = "/cgi/MYchoix_pagepaiement.cgi"

_LINE_BREAK_TAG_RE = re.compile(r"< *br */? *>")
_WHITESPACE_RE = re.compile(r"[\r\n ]")
_STATUS_RE = re.compile(r'id="server_status"[^>]*>OK</div>')

Probe = Callable[..., bool]


def is_status_ok(body: str) -> bool:
    """
    Return whether a ``load.html`` page reports the server as available.
    """
    normalized = _WHITESPACE_RE.sub("", _LINE_BREAK_TAG_RE.sub("", body))
    return _STATUS_RE.search(normalized) is not None


def probe_server(
    server_url: Optional[str],
    *,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> bool:
    if server_url is None:
        return False

    endpoint = parse_endpoint_url(server_url)
    try:
        if session is not None:
            response = session.get(endpoint.url, timeout=timeout)
        else:
            with requests.Session() as http:
                response = http.get(endpoint.url, timeout=timeout)
        body = response.text
    except requests.RequestException as exc:
        logging.debug("Probe of %s failed: %s", endpoint.url, exc)
        return False

    alive = is_status_ok(body)
    logging.debug("Probe of %s answered %s (alive=%s)", endpoint.url, response.status_code, alive)
    return alive


def select_server(
    servers: Sequence[str],
    start: int = 0,
    *,
    probe: Probe = probe_server,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Return the first server of ``servers`` (from ``start``) that is alive.

    Candidates are probed one after the other in list order, so when several
    servers are healthy the earliest one wins.
    """
    if start < 0:
        raise ValueError("start index must not be negative")

    for index in range(start, len(servers)):
        server_url = servers[index]
        if probe(server_url, session=session, timeout=timeout):
            logging.info("Selected Paybox server %s", server_url)
            return server_url
        logging.warning("Paybox server %s is not available", server_url)

    logging.warning("No alive server found among %d candidate(s)", len(servers))
    raise NoAliveServerError()


def servers_for_offer(
    table: Mapping[str, Mapping[str, Sequence[str]]],
    offer: str,
    is_test: bool = False,
) -> List[str]:
    entry = table.get(offer)
    if entry is None:
        return []
    return list(entry.get("test" if is_test else "prod", ()))


def get_payment_url(
    table: Mapping[str, Mapping[str, Sequence[str]]],
    offer: str,
    is_test: bool = False,
    *,
    probe: Probe = probe_server,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Pick a live server for ``offer`` and return its payment page URL.
    """
    servers = servers_for_offer(table, offer, is_test)
    server_url = select_server(servers, probe=probe, session=session, timeout=timeout)
    return server_url + PAYMENT_PATH
