"""Tests for the stage schema validator."""

import pytest

from app.schema.exceptions import SchemaValidationError
from app.schema.models import Field, Schema
from app.schema.schemas import BUSINESS_PAYLOAD, CLASSIFICATION, EMAIL_EXTRACTION, ROUTING
from app.schema.validator import validate


class TestValidPayloads:
    def test_classification(self) -> None:
        result = validate({"format": "JSON", "intent": "Invoice"}, CLASSIFICATION)
        assert result == {"format": "JSON", "intent": "Invoice"}

    def test_drops_undeclared_keys(self) -> None:
        result = validate(
            {"format": "JSON", "intent": "Invoice", "confidence": 0.9},
            CLASSIFICATION,
        )
        assert "confidence" not in result

    def test_keeps_extra_keys_when_allowed(self) -> None:
        result = validate({"summary": "hi", "order_id": "1042"}, EMAIL_EXTRACTION)
        assert result["order_id"] == "1042"
        assert result["summary"] == "hi"

    def test_missing_optional_fields_become_none(self) -> None:
        result = validate({}, ROUTING)
        assert result == {"actionTaken": None, "details": None}

    def test_business_payload_with_empty_data(self) -> None:
        payload = {"event_type": "x", "timestamp": "t", "data": {}}
        assert validate(payload, BUSINESS_PAYLOAD)["data"] == {}

    def test_integer_satisfies_number(self) -> None:
        schema = Schema(name="s", fields=(Field("amount", "number"),))
        assert validate({"amount": 3}, schema) == {"amount": 3}


class TestViolations:
    def test_missing_required_field(self) -> None:
        with pytest.raises(SchemaValidationError, match="'event_type' is required"):
            validate({"timestamp": "t", "data": {}}, BUSINESS_PAYLOAD)

    def test_wrong_type(self) -> None:
        with pytest.raises(SchemaValidationError, match="'data' must be of type object"):
            validate({"event_type": "x", "timestamp": "t", "data": []}, BUSINESS_PAYLOAD)

    def test_collects_every_violation(self) -> None:
        with pytest.raises(SchemaValidationError) as exc_info:
            validate({"event_type": 1}, BUSINESS_PAYLOAD)
        assert exc_info.value.violations == [
            "'event_type' must be of type string, got number",
            "'timestamp' is required",
            "'data' is required",
        ]
        assert exc_info.value.schema_name == "business_payload"

    def test_non_object_input(self) -> None:
        with pytest.raises(SchemaValidationError, match="expected an object, got array"):
            validate([1, 2], CLASSIFICATION)

    def test_bool_is_not_a_number(self) -> None:
        schema = Schema(name="s", fields=(Field("amount", "number"),))
        with pytest.raises(SchemaValidationError, match="got boolean"):
            validate({"amount": True}, schema)

    def test_array_item_types_are_checked(self) -> None:
        with pytest.raises(SchemaValidationError, match=r"'key_entities\[1\]'"):
            validate({"key_entities": ["a", 2]}, EMAIL_EXTRACTION)

    def test_message_names_schema(self) -> None:
        with pytest.raises(SchemaValidationError, match="^classification failed validation"):
            validate({}, CLASSIFICATION)


class TestJsonSchemaRendering:
    def test_all_properties_are_required(self) -> None:
        rendered = CLASSIFICATION.to_json_schema()
        assert rendered["required"] == ["format", "intent"]
        assert rendered["additionalProperties"] is False

    def test_choices_become_enum(self) -> None:
        rendered = CLASSIFICATION.to_json_schema()
        properties = rendered["properties"]
        assert isinstance(properties, dict)
        assert properties["format"]["enum"] == ["Email", "JSON", "PDF"]

    def test_optional_fields_are_nullable(self) -> None:
        properties = EMAIL_EXTRACTION.to_json_schema()["properties"]
        assert isinstance(properties, dict)
        assert properties["summary"]["type"] == ["string", "null"]
        assert properties["key_entities"]["items"] == {"type": "string"}
