"""
Checks applied to the server-to-server callback sent by Paybox.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from .directive import get_error_field
from .errors import (
    GatewayError,
    KnownGatewayError,
    NotAuthenticError,
    PayboxError,
    PublicKeyError,
    UnknownGatewayError,
)
from .verification import check_identity

__all__ = [
    "ERROR_CODE_PLACEHOLDER",
    "SUCCESS_CODE",
    "ResponseCheck",
    "check_response",
    "describe_error",
    "get_response_error",
]

SUCCESS_CODE = "00000"
ERROR_CODE_PLACEHOLDER = "%ERROR_CODE%"


def describe_error(code: str, error_table: Mapping[str, str]) -> GatewayError:
    """
    Map a non-success ``code`` to an error using the first matching pattern.
    """
    for pattern, template in error_table.items():
        if re.search(pattern, code):
            return KnownGatewayError(template.replace(ERROR_CODE_PLACEHOLDER, code), code)
    return UnknownGatewayError(f"Unknown error returned by paybox : {code}", code)


def get_response_error(
    fields: Mapping[str, str],
    received: Mapping[str, str],
    error_table: Mapping[str, str],
) -> Optional[GatewayError]:
    """
    Return the error reported in ``received``, or ``None`` for a success.

    Transactions whose directive does not ask for the error code never
    report an error.
    """
    error_field = get_error_field(fields)
    if error_field is None:
        return None

    code = received.get(error_field)
    if code is None:
        return UnknownGatewayError(f"Unknown error returned by paybox : {code}", None)
    if code == SUCCESS_CODE:
        return None
    return describe_error(code, error_table)


@dataclass(frozen=True)
class ResponseCheck:
    authentic: bool
    error_code: Optional[str]
    error: Optional[PayboxError]

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return None if self.error is None else str(self.error)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def check_response(
    fields: Mapping[str, str],
    received: Mapping[str, str],
    public_key_path: Union[str, Path],
    error_table: Mapping[str, str],
) -> ResponseCheck:
    """
    Authenticate the callback and translate its error code.

    The error table is only consulted once the callback is known to come
    from Paybox. A public key that cannot be read or parsed is reported as
    a non-authentic callback whose error is chained to the key error.
    """
    try:
        authentic = check_identity(fields, received, public_key_path)
    except PublicKeyError as exc:
        logging.error("Unable to authenticate callback: %s", exc)
        not_authentic = NotAuthenticError()
        not_authentic.__cause__ = exc
        return ResponseCheck(authentic=False, error_code=None, error=not_authentic)

    if not authentic:
        logging.warning("Rejected callback that is not signed by Paybox")
        return ResponseCheck(authentic=False, error_code=None, error=NotAuthenticError())

    error = get_response_error(fields, received, error_table)
    if error is not None:
        logging.warning("Paybox reported error %s: %s", error.code, error)
        return ResponseCheck(authentic=True, error_code=error.code, error=error)

    error_field = get_error_field(fields)
    code = received.get(error_field) if error_field is not None else None
    return ResponseCheck(authentic=True, error_code=code, error=None)
