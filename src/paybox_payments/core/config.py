"""
Configuration objects and helpers for Paybox transactions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import BadKeyFormatError, ConfigError
from .signing import decode_key

__all__ = [
    "ConfigError",
    "GatewayConfig",
    "GatewayParameters",
    "load_gateway_config",
]

_PARAMETER_TO_ENV_KEY = {
    "site": "PAYBOX_SITE",
    "rang": "PAYBOX_RANG",
    "identifiant": "PAYBOX_IDENTIFIANT",
    "hmac_key": "PAYBOX_HMAC_KEY",
    "offer": "PAYBOX_OFFER",
    "is_test": "PAYBOX_TEST",
    "public_key_path": "PAYBOX_PUBLIC_KEY_PATH",
    "probe_timeout_seconds": "PAYBOX_PROBE_TIMEOUT_SECONDS",
    "servers_file": "PAYBOX_SERVERS_FILE",
    "errors_file": "PAYBOX_ERRORS_FILE",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class GatewayParameters:
    """
    Explicit parameter bundle for constructing :class:`GatewayConfig`.

    Every attribute maps to one ``PAYBOX_*`` environment key; ``None``
    leaves the environment value untouched.
    """

    site: Optional[str | int] = None
    rang: Optional[str | int] = None
    identifiant: Optional[str | int] = None
    hmac_key: Optional[str] = None
    offer: Optional[str] = None
    is_test: Optional[bool | str] = None
    public_key_path: Optional[str] = None
    probe_timeout_seconds: Optional[float | int | str] = None
    servers_file: Optional[str] = None
    errors_file: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[GatewayParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown gateway parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    value = values.get(key, "").strip()
    if not value:
        raise ConfigError(f"{key} must be provided")
    return value


def _numeric(values: Mapping[str, str], key: str) -> str:
    value = _require(values, key)
    if not value.isdigit():
        raise ConfigError(f"{key} must only contain digits, got '{value}'")
    return value


def _parse_bool(raw: str, key: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean, got '{raw}'")


def _normalize_hmac_key(raw_key: str) -> str:
    key = raw_key.strip()
    try:
        decode_key(key)
    except BadKeyFormatError as exc:
        raise ConfigError("PAYBOX_HMAC_KEY must be a hexadecimal string") from exc
    return key


@dataclass(frozen=True)
class GatewayConfig:
    site: str
    rang: str
    identifiant: str
    hmac_key: str
    offer: str = "system"
    is_test: bool = False
    public_key_path: Optional[str] = None
    probe_timeout_seconds: float = 10.0
    servers_file: Optional[str] = None
    errors_file: Optional[str] = None

    def merchant_fields(self) -> Dict[str, str]:
        return {
            "SITE": self.site,
            "RANG": self.rang,
            "IDENTIFIANT": self.identifiant,
        }

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "GatewayConfig":
        site = _numeric(values, "PAYBOX_SITE")
        rang = _numeric(values, "PAYBOX_RANG")
        identifiant = _numeric(values, "PAYBOX_IDENTIFIANT")
        hmac_key = _normalize_hmac_key(_require(values, "PAYBOX_HMAC_KEY"))

        offer = values.get("PAYBOX_OFFER", "system").strip() or "system"
        is_test = _parse_bool(values.get("PAYBOX_TEST", "false"), "PAYBOX_TEST")

        timeout_raw = values.get("PAYBOX_PROBE_TIMEOUT_SECONDS", "10")
        try:
            probe_timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigError(
                f"PAYBOX_PROBE_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'"
            ) from exc
        if probe_timeout_seconds <= 0:
            raise ConfigError("PAYBOX_PROBE_TIMEOUT_SECONDS must be greater than zero")

        return cls(
            site=site,
            rang=rang,
            identifiant=identifiant,
            hmac_key=hmac_key,
            offer=offer,
            is_test=is_test,
            public_key_path=values.get("PAYBOX_PUBLIC_KEY_PATH") or None,
            probe_timeout_seconds=probe_timeout_seconds,
            servers_file=values.get("PAYBOX_SERVERS_FILE") or None,
            errors_file=values.get("PAYBOX_ERRORS_FILE") or None,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[GatewayParameters] = None,
        site: Optional[str | int] = None,
        rang: Optional[str | int] = None,
        identifiant: Optional[str | int] = None,
        hmac_key: Optional[str] = None,
        offer: Optional[str] = None,
        is_test: Optional[bool | str] = None,
        public_key_path: Optional[str] = None,
        probe_timeout_seconds: Optional[float | int | str] = None,
        servers_file: Optional[str] = None,
        errors_file: Optional[str] = None,
    ) -> "GatewayConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "site": site,
                "rang": rang,
                "identifiant": identifiant,
                "hmac_key": hmac_key,
                "offer": offer,
                "is_test": is_test,
                "public_key_path": public_key_path,
                "probe_timeout_seconds": probe_timeout_seconds,
                "servers_file": servers_file,
                "errors_file": errors_file,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_gateway_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    site: Optional[str | int] = None,
    rang: Optional[str | int] = None,
    identifiant: Optional[str | int] = None,
    hmac_key: Optional[str] = None,
    offer: Optional[str] = None,
    is_test: Optional[bool | str] = None,
    public_key_path: Optional[str] = None,
    probe_timeout_seconds: Optional[float | int | str] = None,
    servers_file: Optional[str] = None,
    errors_file: Optional[str] = None,
) -> GatewayConfig:
    """
    Convenience wrapper that mirrors :meth:`GatewayConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, keyword
    arguments, or any combination of the three.
    """
    return GatewayConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        site=site,
        rang=rang,
        identifiant=identifiant,
        hmac_key=hmac_key,
        offer=offer,
        is_test=is_test,
        public_key_path=public_key_path,
        probe_timeout_seconds=probe_timeout_seconds,
        servers_file=servers_file,
        errors_file=errors_file,
    )
