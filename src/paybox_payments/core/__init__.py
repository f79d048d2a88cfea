"""
Core primitives that implement the Paybox System protocol.
"""

from .client import GatewayClient
from .config import ConfigError, GatewayConfig, GatewayParameters, load_gateway_config
from .directive import (
    RoutingDirective,
    get_error_field,
    get_field_name,
    get_signature_field,
)
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import (
    BadKeyFormatError,
    FrozenFieldsError,
    GatewayError,
    KnownGatewayError,
    NoAliveServerError,
    NotAuthenticError,
    PayboxError,
    PublicKeyError,
    UnknownGatewayError,
)
from .fields import FieldMap, canonicalize
from .response import ResponseCheck, check_response, get_response_error
from .servers import (
    PAYMENT_PATH,
    get_payment_url,
    probe_server,
    select_server,
    servers_for_offer,
)
from .signing import generate_hmac, sign_fields
from .tables import load_endpoint_table, load_error_table
from .transaction import Transaction, create_transaction, generate_form_body
from .urls import EndpointInfo, parse_endpoint_url
from .verification import check_identity, check_signature

__all__ = [
    "BadKeyFormatError",
    "ConfigError",
    "EndpointInfo",
    "FieldMap",
    "FrozenFieldsError",
    "GatewayClient",
    "GatewayConfig",
    "GatewayEnvironment",
    "GatewayError",
    "GatewayParameters",
    "KnownGatewayError",
    "NoAliveServerError",
    "NotAuthenticError",
    "PAYMENT_PATH",
    "PayboxError",
    "PublicKeyError",
    "ResponseCheck",
    "RoutingDirective",
    "Transaction",
    "UnknownGatewayError",
    "build_environment",
    "canonicalize",
    "check_identity",
    "check_response",
    "check_signature",
    "create_transaction",
    "generate_form_body",
    "generate_hmac",
    "get_error_field",
    "get_field_name",
    "get_payment_url",
    "get_response_error",
    "get_signature_field",
    "load_endpoint_table",
    "load_env_file",
    "load_error_table",
    "load_gateway_config",
    "parse_endpoint_url",
    "probe_server",
    "select_server",
    "servers_for_offer",
    "sign_fields",
]
