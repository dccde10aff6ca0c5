"""
Unit tests for the Field Builder

Tests:
- Base type table: strings, formats, integers with bounds, numbers, booleans
- Enum, reference and embedded fields
- Array / nullable / optional wrapping and its order
- Defaulting of unknown or missing type tags
"""

import pytest

from src.builder.field_builder import base_type_to_schema, describe_field, field_to_schema
from src.schema.context import ResolutionContext
from src.schema.description import (
    ABSENT,
    ArraySchema,
    LazyReference,
    LiteralSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    StringSchema,
)
from src.schema.models import Field, ResourceLink
from src.validator.data_validator import safe_validate


def make_field(**overrides) -> Field:
    """Minimal required field named "test" """
    return Field(**{"name": "test", "required": True, **overrides})


def accepts(field: Field, value, context=None) -> bool:
    return safe_validate(field_to_schema(field, context), value).success


# ============================================================================
# TEST: Base types
# ============================================================================


class TestBaseTypes:
    """Tests for the base type table"""

    @pytest.mark.parametrize(
        "field_type",
        ["string", "password", "byte", "binary", "hexBinary", "base64Binary", "duration"],
    )
    def test_string_types(self, field_type):
        """String-like tags accept strings only"""
        field = make_field(type=field_type)
        assert accepts(field, "hello")
        assert not accepts(field, 123)

    def test_email(self):
        field = make_field(type="email")
        assert accepts(field, "test@example.com")
        assert not accepts(field, "not-an-email")

    @pytest.mark.parametrize("value", ["@", "a@", "@example.com", "x@y", ".a@example.com", "a..b@example.com"])
    def test_email_rejects_incomplete_addresses(self, value):
        assert not accepts(make_field(type="email"), value)

    def test_email_accepts_tagged_address(self):
        assert accepts(make_field(type="email"), "first.last+news@mail.example.org")

    def test_url(self):
        field = make_field(type="url")
        assert accepts(field, "https://example.com")
        assert not accepts(field, "not-a-url")

    def test_uuid(self):
        field = make_field(type="uuid")
        assert accepts(field, "550e8400-e29b-41d4-a716-446655440000")
        assert not accepts(field, "not-a-uuid")

    def test_integer(self):
        """Integers reject floats with a fraction and numeric strings"""
        field = make_field(type="integer")
        assert accepts(field, 42)
        assert not accepts(field, 3.14)
        assert not accepts(field, "42")
        assert not accepts(field, "hello")

    def test_positive_integer(self):
        field = make_field(type="positiveInteger")
        assert accepts(field, 1)
        assert not accepts(field, 0)
        assert not accepts(field, -1)

    def test_negative_integer(self):
        field = make_field(type="negativeInteger")
        assert accepts(field, -1)
        assert not accepts(field, 0)
        assert not accepts(field, 1)

    def test_non_negative_integer(self):
        field = make_field(type="nonNegativeInteger")
        assert accepts(field, 0)
        assert accepts(field, 1)
        assert not accepts(field, -1)

    def test_non_positive_integer(self):
        field = make_field(type="nonPositiveInteger")
        assert accepts(field, 0)
        assert accepts(field, -1)
        assert not accepts(field, 1)

    @pytest.mark.parametrize("field_type", ["number", "decimal", "double", "float"])
    def test_number_types(self, field_type):
        field = make_field(type=field_type)
        assert accepts(field, 3.14)
        assert accepts(field, 42)
        assert not accepts(field, "hello")

    def test_boolean(self):
        field = make_field(type="boolean")
        assert accepts(field, True)
        assert accepts(field, False)
        assert not accepts(field, "true")
        assert not accepts(field, 1)

    def test_date(self):
        field = make_field(type="date")
        assert accepts(field, "2024-01-15")
        assert not accepts(field, "not-a-date")

    def test_date_time(self):
        field = make_field(type="dateTime")
        assert accepts(field, "2024-01-15T10:30:00Z")
        assert not accepts(field, "not-a-datetime")

    def test_time(self):
        field = make_field(type="time")
        assert accepts(field, "10:30:00")
        assert accepts(field, "10:30:00.250+02:00")
        assert not accepts(field, "not-a-time")
        assert not accepts(field, "25:00:00")

    def test_unknown_type_defaults_to_string(self):
        field = make_field(type="unknownType")
        assert accepts(field, "hello")
        assert not accepts(field, 42)

    def test_missing_type_defaults_to_string(self):
        assert base_type_to_schema(None) == StringSchema()
        assert accepts(make_field(), "hello")

    def test_malformed_type_tag_defaults_to_string(self):
        """Non-string tags never break the build"""
        assert base_type_to_schema(["integer"]) == StringSchema()

    def test_tags_are_case_sensitive(self):
        assert base_type_to_schema("Integer") == StringSchema()

    def test_range_used_when_type_missing(self):
        field = make_field(range="integer")
        assert accepts(field, 42)
        assert not accepts(field, "hello")

    def test_type_wins_over_range(self):
        field = make_field(type="boolean", range="integer")
        assert accepts(field, True)
        assert not accepts(field, 42)


# ============================================================================
# TEST: Enum / reference / embedded
# ============================================================================


class TestSpecialFields:
    """Tests for enum, reference and embedded fields"""

    def test_enum(self):
        field = make_field(enum=["draft", "published", "archived"])
        assert accepts(field, "draft")
        assert accepts(field, "published")
        assert not accepts(field, "unknown")

    def test_enum_values_are_not_coerced(self):
        field = make_field(enum=[1, 2])
        assert accepts(field, 1)
        assert not accepts(field, "1")

    def test_enum_wins_over_type(self):
        field = make_field(type="integer", enum=["a", "b"])
        assert accepts(field, "a")
        assert not accepts(field, 1)

    def test_reference_is_plain_string(self):
        field = make_field(reference=ResourceLink(name="Author", title="Author"))
        assert accepts(field, "/api/authors/1")
        assert not accepts(field, 123)

    def test_reference_wins_over_embedded(self):
        field = make_field(
            reference=ResourceLink(name="Author"),
            embedded=ResourceLink(name="Author"),
        )
        assert field_to_schema(field) == StringSchema()

    def test_embedded_builds_lazy_reference(self):
        """Embedded fields point at the title and do not dereference"""
        context = ResolutionContext()
        field = make_field(embedded=ResourceLink(name="authors", title="Author"))

        schema = field_to_schema(field, context)

        assert isinstance(schema, LazyReference)
        assert schema.target == "Author"
        assert schema.context is context

    def test_embedded_falls_back_to_name(self):
        schema = field_to_schema(make_field(embedded=ResourceLink(name="Author")))
        assert schema.target == "Author"

    def test_embedded_resolves_through_context(self):
        context = ResolutionContext()
        context.define("Author", ObjectSchema({"@id": StringSchema(), "name": StringSchema()}))
        field = make_field(embedded=ResourceLink(name="Author", title="Author"))

        assert accepts(field, {"@id": "/api/authors/1", "name": "Jane"}, context)
        assert not accepts(field, {"@id": "/api/authors/1"}, context)


# ============================================================================
# TEST: Wrapping
# ============================================================================


class TestWrapping:
    """Tests for array / nullable / optional post-processing"""

    def test_nullable(self):
        field = make_field(type="string", nullable=True)
        assert accepts(field, "hello")
        assert accepts(field, None)
        assert not accepts(field, 123)

    def test_optional(self):
        field = make_field(type="string", required=False)
        assert accepts(field, "hello")
        assert accepts(field, ABSENT)
        assert not accepts(field, 123)

    def test_required_none_is_not_optional(self):
        """Only an explicit False makes a field optional"""
        field = make_field(type="string", required=None)
        assert not isinstance(field_to_schema(field), OptionalSchema)
        assert not accepts(field, ABSENT)

    def test_array_when_cardinality_unbounded(self):
        field = make_field(type="string", max_cardinality=None)
        assert accepts(field, ["a", "b"])
        assert accepts(field, [])
        assert not accepts(field, "a")
        assert not accepts(field, ["a", 1])

    def test_cardinality_one_is_scalar(self):
        field = make_field(type="string", max_cardinality=1)
        assert field_to_schema(field) == StringSchema()

    def test_cardinality_other_than_one_is_array(self):
        field = make_field(type="integer", max_cardinality=5)
        assert isinstance(field_to_schema(field), ArraySchema)

    def test_array_type_overrides_element(self):
        field = make_field(type="string", max_cardinality=None, array_type="integer")
        assert accepts(field, [1, 2])
        assert not accepts(field, ["a"])

    def test_array_of_enum_keeps_enum(self):
        field = make_field(enum=["a", "b"], max_cardinality=None)
        assert accepts(field, ["a", "b", "a"])
        assert not accepts(field, ["c"])

    def test_wrapping_order(self):
        """Optional(Nullable(Array(element)))"""
        field = make_field(type="string", max_cardinality=None, nullable=True, required=False)

        schema = field_to_schema(field)

        assert isinstance(schema, OptionalSchema)
        assert isinstance(schema.inner, NullableSchema)
        assert isinstance(schema.inner.inner, ArraySchema)
        assert schema.inner.inner.items == StringSchema()

        assert accepts(field, ["a"])
        assert accepts(field, None)
        assert accepts(field, ABSENT)
        assert not accepts(field, "a")
        assert not accepts(field, [None])


class TestDescribeField:
    """Tests for the human readable field labels"""

    def test_labels(self):
        assert describe_field(make_field(type="integer")) == "integer"
        assert describe_field(make_field(max_cardinality=None, nullable=True)) == "string[]|null"
        assert describe_field(make_field(embedded=ResourceLink("Author"), required=False)) == "Author?"
        assert describe_field(make_field(reference=ResourceLink("Author"))) == "@Author"


def test_literal_schema_renders_const():
    assert LiteralSchema("Book").to_json_schema() == {"const": "Book"}
