"""
Decoding of the ``RETOUR`` directive.

``PBX_RETOUR`` tells Paybox which variables to send back and under which
names, e.g. ``Mt:M;Ref:R;Auto:A;Erreur:E;Sign:K``. The letter after the colon
is the variable code; ``K`` carries the signature and ``E`` the error code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

__all__ = [
    "DIRECTIVE_FIELD",
    "ERROR_CODE",
    "SIGNATURE_CODE",
    "RoutingDirective",
    "get_error_field",
    "get_field_name",
    "get_signature_field",
]

DIRECTIVE_FIELD = "RETOUR"
SIGNATURE_CODE = "K"
ERROR_CODE = "E"


def get_field_name(directive: Optional[str], code: str) -> Optional[str]:
    """
    Return the name the directive assigns to ``code``, or ``None``.

    Only segments after a ``;`` are considered and the last one mentioning
    ``:<code>`` wins. Within that segment the name is everything before the
    last ``:<code>``; anything after the code is ignored.
    """
    if directive is None:
        return None

    marker = ":" + code.upper()
    segments = directive.split(";")
    for segment in reversed(segments[1:]):
        position = segment.rfind(marker)
        if position > 0:
            return segment[:position]
    return None


@dataclass(frozen=True)
class RoutingDirective:
    raw: Optional[str]

    @classmethod
    def from_fields(cls, fields: Mapping[str, str]) -> "RoutingDirective":
        return cls(fields.get(DIRECTIVE_FIELD))

    def field_for(self, code: str) -> Optional[str]:
        return get_field_name(self.raw, code)

    @property
    def signature_field(self) -> Optional[str]:
        return self.field_for(SIGNATURE_CODE)

    @property
    def error_field(self) -> Optional[str]:
        return self.field_for(ERROR_CODE)

    def variables(self) -> List[Tuple[str, str]]:
        """List ``(name, code)`` pairs in the order they appear."""
        if not self.raw:
            return []
        pairs = []
        for segment in self.raw.split(";"):
            name, sep, code = segment.rpartition(":")
            if sep and name and code:
                pairs.append((name, code))
        return pairs


def get_signature_field(fields: Mapping[str, str]) -> Optional[str]:
    return RoutingDirective.from_fields(fields).signature_field


def get_error_field(fields: Mapping[str, str]) -> Optional[str]:
    return RoutingDirective.from_fields(fields).error_field
