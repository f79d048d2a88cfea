from __future__ import annotations

import base64
from typing import Callable, Dict, Mapping
from urllib.parse import quote

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from paybox_payments.core.fields import canonicalize


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def public_key_path(tmp_path, rsa_private_key):
    pem = rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    path = tmp_path / "pubkey.pem"
    path.write_bytes(pem)
    return path


@pytest.fixture
def sign_callback(rsa_private_key) -> Callable[..., Dict[str, str]]:
    """Return a helper that appends a Paybox-style signature to callback data."""

    def _sign(received: Mapping[str, str], field: str = "Sign") -> Dict[str, str]:
        message = canonicalize(received)
        signature = rsa_private_key.sign(
            message.encode("utf-8"), padding.PKCS1v15(), hashes.SHA1()
        )
        signed = dict(received)
        signed[field] = quote(base64.b64encode(signature).decode("ascii"), safe="")
        return signed

    return _sign

