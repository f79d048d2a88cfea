"""
Loading of the endpoint and error-code tables.

Both tables ship as JSON under ``data/``; deployments can point at their own
files instead.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError

__all__ = [
    "DEFAULT_ERRORS_FILE",
    "DEFAULT_SERVERS_FILE",
    "EndpointTable",
    "ErrorTable",
    "load_endpoint_table",
    "load_error_table",
]

_DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_SERVERS_FILE = _DATA_DIR / "servers.json"
DEFAULT_ERRORS_FILE = _DATA_DIR / "response-errors.json"

EndpointTable = Dict[str, Dict[str, List[str]]]
ErrorTable = Dict[str, str]


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Table file {path} does not exist") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Table file {path} is not valid JSON: {exc}") from exc


def load_endpoint_table(path: Optional[Union[str, Path]] = None) -> EndpointTable:
    source = Path(path) if path is not None else DEFAULT_SERVERS_FILE
    raw = _read_json(source)
    if not isinstance(raw, dict):
        raise ConfigError(f"{source} must contain an object keyed by offer")

    table: EndpointTable = {}
    for offer, entry in raw.items():
        if not isinstance(entry, dict):
            raise ConfigError(f"Offer '{offer}' in {source} must be an object")
        lists: Dict[str, List[str]] = {}
        for kind in ("prod", "test"):
            urls = entry.get(kind, [])
            if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
                raise ConfigError(f"'{offer}.{kind}' in {source} must be a list of URLs")
            lists[kind] = urls
        table[offer] = lists
    return table


def load_error_table(path: Optional[Union[str, Path]] = None) -> ErrorTable:
    source = Path(path) if path is not None else DEFAULT_ERRORS_FILE
    raw = _read_json(source)
    if not isinstance(raw, dict) or not all(isinstance(v, str) for v in raw.values()):
        raise ConfigError(f"{source} must map error patterns to message templates")
    return dict(raw)
