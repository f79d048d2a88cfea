"""
Error taxonomy for the Paybox helpers.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "BadKeyFormatError",
    "ConfigError",
    "FrozenFieldsError",
    "GatewayError",
    "KnownGatewayError",
    "NoAliveServerError",
    "NotAuthenticError",
    "PayboxError",
    "PublicKeyError",
    "UnknownGatewayError",
]


class PayboxError(Exception):
    """Base class for every error reported by this package."""


class ConfigError(PayboxError):
    """Raised when the supplied configuration is invalid."""


class NoAliveServerError(PayboxError):
    """Every candidate endpoint failed its liveness probe."""

    def __init__(self, message: str = "No alive server found") -> None:
        super().__init__(message)


class BadKeyFormatError(PayboxError):
    """The HMAC secret is not a usable hex string."""

    def __init__(
        self, message: str = "Bad private key format, unable to generate signature"
    ) -> None:
        super().__init__(message)


class NotAuthenticError(PayboxError):
    """The callback signature did not verify against the Paybox public key."""

    def __init__(self, message: str = "This response is not from a paybox server") -> None:
        super().__init__(message)


class PublicKeyError(PayboxError):
    """The verification key could not be read or parsed."""


class GatewayError(PayboxError):
    """Paybox reported a non-success error code in the callback."""

    def __init__(self, message: str, code: Optional[str]) -> None:
        super().__init__(message)
        self.code = code


class KnownGatewayError(GatewayError):
    pass


class UnknownGatewayError(GatewayError):
    pass


class FrozenFieldsError(TypeError):
    """Raised when a signed field map is modified."""
