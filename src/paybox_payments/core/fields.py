"""
Ordered protocol field maps and the canonical message builder.

Both the outbound HMAC and the inbound RSA signature cover a
``name=value&name=value`` string whose field order must match what the other
side sees, so everything here preserves insertion order.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Mapping, MutableMapping, Optional, Tuple, Union
from urllib.parse import quote

from .errors import FrozenFieldsError

__all__ = [
    "FIELD_PREFIX",
    "FieldMap",
    "canonicalize",
    "encode_component",
    "normalize_field_name",
]

FIELD_PREFIX = "PBX_"

# Characters encodeURIComponent leaves untouched on top of quote()'s defaults.
_COMPONENT_SAFE = "!~*'()"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_field_name(name: str) -> str:
    """Upper-case ``name`` and drop the ``PBX_`` wire prefix if present."""
    key = name.strip().upper()
    if key.startswith(FIELD_PREFIX):
        key = key[len(FIELD_PREFIX):]
    if not key:
        raise ValueError(f"Invalid field name {name!r}")
    return key


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


class FieldMap(MutableMapping[str, str]):
    """
    Insertion-ordered mapping of Paybox field names to string values.

    Keys are stored without the ``PBX_`` prefix and always upper-case, so
    ``fields["total"]``, ``fields["PBX_TOTAL"]`` and ``fields["TOTAL"]`` all
    address the same entry. Once :meth:`freeze` is called any mutation raises
    :class:`FrozenFieldsError`.
    """

    def __init__(
        self,
        initial: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None] = None,
        **kwargs: Any,
    ) -> None:
        self._data: Dict[str, str] = {}
        self._frozen = False
        if initial is not None:
            self.update(initial)
        if kwargs:
            self.update(kwargs)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "FieldMap":
        self._frozen = True
        return self

    def copy(self) -> "FieldMap":
        return FieldMap(self._data.items())

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenFieldsError("Signed fields cannot be modified")

    def __getitem__(self, key: str) -> str:
        return self._data[normalize_field_name(key)]

    def __setitem__(self, key: str, value: Any) -> None:
        self._check_mutable()
        self._data[normalize_field_name(key)] = _stringify(value)

    def __delitem__(self, key: str) -> None:
        self._check_mutable()
        del self._data[normalize_field_name(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            return normalize_field_name(key) in self._data
        except ValueError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldMap):
            return list(self._data.items()) == list(other._data.items())
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"FieldMap({self._data!r}{state})"

    def wire_items(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(PBX_NAME, value)`` pairs in insertion order."""
        for key, value in self._data.items():
            yield FIELD_PREFIX + key, value


def canonicalize(
    fields: Mapping[str, str],
    exclude: Optional[str] = None,
    *,
    prefix: str = "",
    encode: bool = True,
) -> str:
    """
    Build the ``name=value&...`` message for ``fields``.

    Fields are emitted in the mapping's iteration order; ``exclude`` is
    skipped without reordering the others. With ``encode`` set, values are
    percent-encoded the way ``encodeURIComponent`` does it.
    """
    parts = []
    for name, value in fields.items():
        if exclude is not None and name == exclude:
            continue
        text = _stringify(value)
        if encode:
            text = encode_component(text)
        parts.append(f"{prefix}{name}={text}")
    return "&".join(parts)
