"""
Command-line interface for building signed Paybox payment forms.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Sequence, Tuple

import requests

from .api import ConfigError, create_gateway_client, load_gateway_config
from .core.errors import BadKeyFormatError, NoAliveServerError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paybox-payments",
        description="Build a signed Paybox System payment form",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYBOX_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--field",
        action="append",
        type=_key_value,
        metavar="NAME=VALUE",
        default=None,
        help="Transaction field to send, e.g. TOTAL=1000 (PBX_ prefix optional)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--probe-only",
        action="store_true",
        help="Only select a live server and print its payment URL",
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect(args.set or ())

    try:
        config = load_gateway_config(env_file=args.env_file, overrides=overrides)
        client = create_gateway_client(config=config, session=requests.Session())
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if args.probe_only:
        try:
            url = client.payment_url()
        except NoAliveServerError as exc:
            logging.error("Server selection failed: %s", exc)
            return 1
        print(url)
        return 0

    try:
        transaction = client.create_transaction(_collect(args.field or ()))
    except NoAliveServerError as exc:
        logging.error("Server selection failed: %s", exc)
        return 1
    except (BadKeyFormatError, ValueError) as exc:
        logging.error("Unable to sign transaction: %s", exc)
        return 1

    print(f'<form method="{transaction.method}" action="{transaction.url}">')
    print(transaction.body)
    print("</form>")
    return 0


def main() -> None:
    sys.exit(run_cli())
