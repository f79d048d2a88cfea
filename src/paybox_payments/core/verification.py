"""
Verification of the RSA signature Paybox appends to its callbacks.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Any, Mapping, Union
from urllib.parse import unquote

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .directive import get_signature_field
from .errors import PublicKeyError
from .fields import FieldMap, canonicalize

__all__ = [
    "check_identity",
    "check_signature",
    "load_public_key",
    "read_public_key",
]

KeyMaterial = Union[str, bytes]


def read_public_key(path: Union[str, Path]) -> str:
    try:
        return Path(path).expanduser().resolve().read_text(encoding="utf-8")
    except OSError as exc:
        raise PublicKeyError(f"Unable to read public key from {path}: {exc}") from exc


def load_public_key(material: KeyMaterial) -> rsa.RSAPublicKey:
    """
    Parse a PEM (or DER) encoded RSA public key.
    """
    data = material.encode("utf-8") if isinstance(material, str) else material
    try:
        if data.lstrip().startswith(b"-----BEGIN"):
            key: Any = serialization.load_pem_public_key(data)
        else:
            key = serialization.load_der_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise PublicKeyError(f"Unable to load public key: {exc}") from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise PublicKeyError("Paybox public key must be an RSA key")
    return key


def check_signature(message: str, signature: str, public_key: KeyMaterial) -> bool:
    """
    Return whether ``signature`` is a valid RSA/SHA1 signature of ``message``.

    ``signature`` is the value as received: URL-encoded base64.
    """
    key = load_public_key(public_key)
    try:
        raw_signature = base64.b64decode(unquote(signature))
    except (binascii.Error, ValueError):
        logging.debug("Signature is not valid base64")
        return False

    try:
        key.verify(raw_signature, message.encode("utf-8"), padding.PKCS1v15(), hashes.SHA1())
    except InvalidSignature:
        return False
    return True


def check_identity(
    fields: Mapping[str, str],
    received: Mapping[str, str],
    public_key_path: Union[str, Path],
) -> bool:
    """
    Check that ``received`` was signed by Paybox.

    ``fields`` are the transaction fields holding the ``RETOUR`` directive.
    ``received`` must be a plain mapping keyed by the raw callback names, in
    the order Paybox sent them. Transactions that did not request a signature
    always pass. Raises :class:`PublicKeyError` when the key cannot be used.
    """
    if isinstance(received, FieldMap):
        raise TypeError("Callback data must keep its raw field names, not a FieldMap")

    sign_field = get_signature_field(fields)
    if sign_field is None:
        return True

    signature = received.get(sign_field)
    if signature is None:
        logging.warning("Callback is missing the %s signature field", sign_field)
        return False

    public_key = read_public_key(public_key_path)
    message = canonicalize(received, exclude=sign_field)
    return check_signature(message, signature, public_key)
