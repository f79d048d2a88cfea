"""
Minimal script that uses the public API to build a signed Paybox payment form.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Tuple

from paybox_payments import (
    ConfigError,
    NoAliveServerError,
    PayboxError,
    create_gateway_client,
    load_gateway_config,
)


def _pair(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _to_dict(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    result: dict[str, str] = {}
    for key, value in pairs:
        result[key] = value
    return result


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Paybox transaction using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYBOX_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_pair,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--total", required=True, help="Amount in cents, e.g. 1000 for 10.00 EUR")
    parser.add_argument("--reference", required=True, help="Merchant order reference (PBX_CMD)")
    parser.add_argument("--email", required=True, help="Payer e-mail address (PBX_PORTEUR)")
    parser.add_argument("--currency", default="978", help="ISO 4217 numeric currency (default: 978)")
    parser.add_argument(
        "--retour",
        default="Mt:M;Ref:R;Auto:A;Erreur:E;Sign:K",
        help="Variables Paybox sends back in its callback",
    )
    parser.add_argument("--callback-url", help="Server-to-server callback URL (PBX_REPONDRE_A)")
    parser.add_argument("--test", action="store_true", help="Use the pre-production servers")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    overrides = _to_dict(args.set or ())
    if args.test:
        overrides["PAYBOX_TEST"] = "true"

    try:
        config = load_gateway_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)
    values = {
        "TOTAL": args.total,
        "DEVISE": args.currency,
        "CMD": args.reference,
        "PORTEUR": args.email,
        "RETOUR": args.retour,
    }
    if args.callback_url:
        values["REPONDRE_A"] = args.callback_url

    try:
        transaction = client.create_transaction(values)
    except NoAliveServerError as exc:
        logging.error("No Paybox server available: %s", exc)
        return 1
    except PayboxError as exc:
        logging.error("Unable to create the transaction: %s", exc)
        return 1

    logging.info("Transaction signed with HMAC %s", transaction.signature)
    print(f'<form method="{transaction.method}" action="{transaction.url}">')
    print(transaction.body)
    print('<input type="submit" value="Pay">')
    print("</form>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
