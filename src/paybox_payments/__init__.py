"""
Public facade for the Paybox System helper package.

The module re-exports the most useful pieces for integrators so they can
``from paybox_payments import ...`` without navigating the package.
"""

from .api import check_response, create_gateway_client, create_transaction
from .core import (
    BadKeyFormatError,
    ConfigError,
    FieldMap,
    GatewayClient,
    GatewayConfig,
    GatewayError,
    GatewayParameters,
    KnownGatewayError,
    NoAliveServerError,
    NotAuthenticError,
    PayboxError,
    ResponseCheck,
    RoutingDirective,
    Transaction,
    UnknownGatewayError,
    canonicalize,
    check_signature,
    generate_hmac,
    get_field_name,
    load_gateway_config,
    parse_endpoint_url,
    probe_server,
    select_server,
    sign_fields,
)

__all__ = (
    "BadKeyFormatError",
    "ConfigError",
    "FieldMap",
    "GatewayClient",
    "GatewayConfig",
    "GatewayError",
    "GatewayParameters",
    "KnownGatewayError",
    "NoAliveServerError",
    "NotAuthenticError",
    "PayboxError",
    "ResponseCheck",
    "RoutingDirective",
    "Transaction",
    "UnknownGatewayError",
    "canonicalize",
    "check_response",
    "check_signature",
    "create_gateway_client",
    "create_transaction",
    "generate_hmac",
    "get_field_name",
    "load_gateway_config",
    "parse_endpoint_url",
    "probe_server",
    "select_server",
    "sign_fields",
)
