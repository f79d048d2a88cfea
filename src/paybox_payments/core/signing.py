"""
HMAC signing of outbound ``PBX_`` fields.
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Mapping, MutableMapping, Optional

from hexbytes import HexBytes

from .errors import BadKeyFormatError
from .fields import FIELD_PREFIX, canonicalize

__all__ = [
    "HASH_ALGORITHM",
    "decode_key",
    "format_timestamp",
    "generate_hmac",
    "sign_fields",
]

HASH_ALGORITHM = "SHA512"


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def decode_key(key: str) -> bytes:
    """
    Decode the hex secret from the Paybox back office into raw bytes.
    """
    if not isinstance(key, str):
        raise BadKeyFormatError()
    raw = key.strip()
    if raw[:2] in ("0x", "0X"):
        raw = raw[2:]
    if not raw or len(raw) % 2:
        raise BadKeyFormatError()
    try:
        return bytes(HexBytes(raw))
    except ValueError as exc:
        raise BadKeyFormatError() from exc


def generate_hmac(fields: Mapping[str, str], key: str) -> str:
    """Upper-case hex HMAC-SHA512 of the ``PBX_NAME=value&...`` message."""
    secret = decode_key(key)
    message = canonicalize(fields, prefix=FIELD_PREFIX, encode=False)
    digest = hmac.new(secret, message.encode("utf-8"), hashlib.sha512)
    return digest.hexdigest().upper()


def sign_fields(
    fields: MutableMapping[str, str],
    key: str,
    *,
    now: Optional[datetime] = None,
) -> str:
    """
    Stamp ``TIME`` and ``HASH`` on ``fields`` and store the ``HMAC``.

    The signature covers every field present at call time, so this has to be
    the last change made to ``fields``. Raises :class:`BadKeyFormatError`
    without setting ``HMAC`` when ``key`` is not valid hex.
    """
    moment = now if now is not None else datetime.now(timezone.utc)
    fields.pop("HMAC", None)
    fields["TIME"] = format_timestamp(moment)
    fields["HASH"] = HASH_ALGORITHM
    signature = generate_hmac(fields, key)
    fields["HMAC"] = signature
    return signature
