from __future__ import annotations

from typing import Mapping, Optional
from unittest.mock import Mock

import requests

HMAC_KEY = "0123456789ABCDEF" * 8
ALIVE_BODY = '<html><body><div id="server_status">OK</div></body></html>'
DEAD_BODY = '<html><body><div id="server_status">KO</div></body></html>'


def make_session(bodies: Mapping[str, Optional[str]]) -> Mock:
    """
    Build a fake ``requests.Session`` answering GETs from ``bodies``.

    Keys are probe URLs; a missing or ``None`` body makes the request fail.
    """

    def _get(url, timeout=None):
        body = bodies.get(url)
        if body is None:
            raise requests.ConnectionError(f"cannot reach {url}")
        response = Mock()
        response.status_code = 200
        response.text = body
        return response

    session = Mock(spec=requests.Session)
    session.get.side_effect = _get
    return session
