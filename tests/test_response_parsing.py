"""
Test suite for response parsing.

Tests key normalization, attribute access and byte-order-mark handling.
"""

import json

import pytest

from microsoft_graph.core.response import UTF8_BOM, GraphObject, ResponseParser, underscore


@pytest.fixture
def parser() -> ResponseParser:
    return ResponseParser()


# ============================================================================
# Test Key Normalization
# ============================================================================

class TestUnderscore:
    """Tests for wire key normalization."""

    @pytest.mark.parametrize("key, expected", [
        ("displayName", "display_name"),
        ("userPrincipalName", "user_principal_name"),
        ("HTTPCode", "http_code"),
        ("Content-Type", "content_type"),
        ("formulasR1C1", "formulas_r1c1"),
        ("@odata.context", "@odata.context"),
        ("@odata.nextLink", "@odata.next_link"),
        ("Microsoft::Graph", "microsoft/graph"),
        ("id", "id"),
    ])
    def test_underscore(self, key, expected):
        assert underscore(key) == expected


# ============================================================================
# Test GraphObject
# ============================================================================

class TestGraphObject:
    """Tests for the parsed response structure."""

    def test_attribute_access(self):
        user = GraphObject({"displayName": "Kirill Klimuk", "givenName": "Kirill"})

        assert user.display_name == "Kirill Klimuk"
        assert user.given_name == "Kirill"

    def test_item_access_with_wire_or_normalized_key(self):
        user = GraphObject({"displayName": "Kirill", "@odata.context": "ctx"})

        assert user["displayName"] == "Kirill"
        assert user["display_name"] == "Kirill"
        assert user["@odata.context"] == "ctx"
        assert "displayName" in user
        assert "surname" not in user

    def test_nested_objects_and_lists(self):
        obj = GraphObject({
            "parentReference": {"driveId": "d1"},
            "children": [{"itemName": "a"}, {"itemName": "b"}],
            "matrix": [[1, 2], [3, 4]],
        })

        assert obj.parent_reference.drive_id == "d1"
        assert [child.item_name for child in obj.children] == ["a", "b"]
        assert obj.matrix == [[1, 2], [3, 4]]

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            GraphObject({}).surname

    def test_read_only(self):
        user = GraphObject({"id": "1"})

        with pytest.raises(AttributeError):
            user.id = "2"
        with pytest.raises(AttributeError):
            del user.id

        assert user.id == "1"

    def test_get_len_iter(self):
        obj = GraphObject({"aB": 1, "cD": 2})

        assert obj.get("aB") == 1
        assert obj.get("missing", "default") == "default"
        assert len(obj) == 2
        assert list(obj) == ["a_b", "c_d"]

    def test_equality(self):
        assert GraphObject({"aB": 1}) == GraphObject({"a_b": 1})
        assert GraphObject({"aB": {"cD": 2}}) == {"aB": {"cD": 2}}
        assert GraphObject({"aB": 1}) != GraphObject({"aB": 2})

    def test_to_dict(self):
        obj = GraphObject({"outerKey": {"innerKey": [{"deepKey": 1}]}})

        assert obj.to_dict() == {"outer_key": {"inner_key": [{"deep_key": 1}]}}

    def test_values_key_is_data(self):
        """Graph properties named like dict methods stay reachable as attributes."""
        obj = GraphObject({"values": [[1]], "items": [], "keys": "k"})

        assert obj.values == [[1]]
        assert obj.items == []
        assert obj.keys == "k"


# ============================================================================
# Test ResponseParser
# ============================================================================

class TestResponseParser:
    """Tests for response body parsing."""

    def test_parse_json(self, parser):
        body = json.dumps({"displayName": "Kirill", "id": "89d5fafe0adc70ee"}).encode()

        result = parser.parse(body, "application/json; odata.metadata=minimal")

        assert isinstance(result, GraphObject)
        assert result.display_name == "Kirill"
        assert result.id == "89d5fafe0adc70ee"

    def test_strips_byte_order_mark(self, parser):
        body = UTF8_BOM + json.dumps({"address": "Sheet1!A56:B57"}).encode()

        result = parser.parse(body, "application/json")

        assert result.address == "Sheet1!A56:B57"

    def test_empty_body(self, parser):
        assert parser.parse(b"", "application/json") is None
        assert parser.parse(UTF8_BOM, None) is None

    def test_non_json_returned_raw(self, parser):
        assert parser.parse(b"\x89PNG...", "image/png") == b"\x89PNG..."

    def test_json_without_content_type(self, parser):
        result = parser.parse(b'{"id": "1"}', None)

        assert result.id == "1"

    def test_vendor_json_type(self, parser):
        result = parser.parse(b'{"id": "1"}', "application/problem+json")

        assert result.id == "1"

    def test_top_level_list(self, parser):
        result = parser.parse(b'[{"itemId": 1}]', "application/json")

        assert result[0].item_id == 1

    def test_invalid_json(self, parser):
        with pytest.raises(json.JSONDecodeError):
            parser.parse(b"{not json", "application/json")
