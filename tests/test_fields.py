"""Unit tests for FieldMap and the canonical message builder."""

from __future__ import annotations

import pytest

from paybox_payments.core.errors import FrozenFieldsError
from paybox_payments.core.fields import FieldMap, canonicalize, encode_component


class TestFieldMap:
    def test_keys_are_uppercased_and_unprefixed(self):
        fields = FieldMap()
        fields["total"] = "1000"
        fields["PBX_Devise"] = "978"

        assert list(fields) == ["TOTAL", "DEVISE"]
        assert fields["pbx_total"] == "1000"
        assert "devise" in fields

    def test_insertion_order_is_kept_on_reassignment(self):
        fields = FieldMap([("A", "1"), ("B", "2"), ("C", "3")])
        fields["a"] = "9"

        assert list(fields.items()) == [("A", "9"), ("B", "2"), ("C", "3")]

    def test_values_are_stringified(self):
        fields = FieldMap(total=1000, flag=True)

        assert fields["TOTAL"] == "1000"
        assert fields["FLAG"] == "true"

    def test_frozen_map_rejects_mutation(self):
        fields = FieldMap(total="1000").freeze()

        with pytest.raises(FrozenFieldsError):
            fields["CMD"] = "order-1"
        with pytest.raises(FrozenFieldsError):
            del fields["TOTAL"]
        assert fields.frozen

    def test_copy_is_mutable(self):
        fields = FieldMap(total="1000").freeze()
        clone = fields.copy()
        clone["CMD"] = "order-1"

        assert list(clone) == ["TOTAL", "CMD"]
        assert list(fields) == ["TOTAL"]

    def test_wire_items_use_prefix(self):
        fields = FieldMap([("SITE", "1999888"), ("RANG", "32")])

        assert list(fields.wire_items()) == [("PBX_SITE", "1999888"), ("PBX_RANG", "32")]

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValueError):
            FieldMap()["PBX_"] = "x"


class TestCanonicalize:
    def test_joins_fields_in_order_with_encoding(self):
        received = {"Mt": "1000", "Ref": "order 1/2", "Auto": "XXXXXX"}

        assert canonicalize(received) == "Mt=1000&Ref=order%201%2F2&Auto=XXXXXX"

    def test_excluded_field_is_skipped_without_reordering(self):
        received = {"Mt": "1000", "Sign": "abc", "Ref": "R1", "Erreur": "00000"}

        message = canonicalize(received, exclude="Sign")

        assert message == "Mt=1000&Ref=R1&Erreur=00000"
        assert "Sign=" not in message

    def test_every_other_field_appears_once(self):
        received = {f"F{i}": str(i) for i in range(10)}

        segments = canonicalize(received, exclude="F4").split("&")

        assert segments == [f"F{i}={i}" for i in range(10) if i != 4]

    def test_prefix_and_raw_values(self):
        fields = FieldMap([("SITE", "1999888"), ("PORTEUR", "a+b@example.com")])

        message = canonicalize(fields, prefix="PBX_", encode=False)

        assert message == "PBX_SITE=1999888&PBX_PORTEUR=a+b@example.com"

    def test_component_encoding_matches_uri_component_rules(self):
        assert encode_component("-_.!~*'()") == "-_.!~*'()"
        assert encode_component("a b&c=d+é") == "a%20b%26c%3Dd%2B%C3%A9"

    def test_empty_mapping(self):
        assert canonicalize({}) == ""
