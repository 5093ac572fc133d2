"""Tests for the error hierarchy."""

import pytest

from enumvariants.errors import (
    AmbiguousRepresentationError,
    AttributeValueError,
    ConflictingCapabilityError,
    DeserializeError,
    DirectiveSyntaxError,
    FieldShapeError,
    GenerationError,
    ParseError,
    StructuralError,
)
from enumvariants.vocabulary import ValidationRule


class TestGenerationError:
    """Tests for generation-time errors."""

    def test_type_location(self):
        """Type-level errors are prefixed with the type name."""
        error = StructuralError("not an enum", type_name="Point")
        assert str(error) == "Point: not an enum"
        assert error.location == "Point"
        assert error.variant is None

    def test_variant_location(self):
        """Variant-level errors are prefixed Type::Variant."""
        error = FieldShapeError("only unit variants", type_name="Shape", variant="Circle")
        assert str(error) == "Shape::Circle: only unit variants"
        assert error.message == "only unit variants"

    @pytest.mark.parametrize("cls,rule", [
        (StructuralError, ValidationRule.STRUCTURE),
        (FieldShapeError, ValidationRule.FIELD_SHAPE),
        (AttributeValueError, ValidationRule.VARIANT_RENAME),
        (DirectiveSyntaxError, ValidationRule.DIRECTIVE),
        (ConflictingCapabilityError, ValidationRule.CAPABILITY),
    ])
    def test_default_rule(self, cls, rule):
        """Each error class carries its default rule."""
        error = cls("message", type_name="T")
        assert error.rule is rule
        assert isinstance(error, GenerationError)

    def test_rule_override(self):
        """An explicit rule replaces the class default."""
        error = AttributeValueError("bad", type_name="T", rule=ValidationRule.TYPE_RENAME)
        assert error.rule is ValidationRule.TYPE_RENAME

    def test_ambiguous_carries_text_and_variants(self):
        """AmbiguousRepresentationError names both variants."""
        error = AmbiguousRepresentationError(
            "display string 'A' is already used by `A`",
            type_name="T",
            text="A",
            variants=("A", "B"),
        )
        assert error.text == "A"
        assert error.variants == ("A", "B")
        assert error.variant == "B"
        assert error.rule is ValidationRule.REPRESENTATION


class TestRuntimeErrors:
    """Tests for errors raised by generated operations."""

    def test_parse_error(self):
        """ParseError is a ValueError carrying input and type."""
        error = ParseError("Nope", "Direction")
        assert isinstance(error, ValueError)
        assert error.input == "Nope"
        assert error.type_name == "Direction"
        assert "Direction" in str(error)
        assert "'Nope'" in str(error)

    def test_deserialize_error(self):
        """DeserializeError is a ValueError carrying input and type."""
        error = DeserializeError(42, "Format")
        assert isinstance(error, ValueError)
        assert error.input == 42
        assert str(error) == "cannot deserialize 42 as Format"
