"""Tests for the attribute resolver."""

import pytest

from enumvariants.definitions import (
    RenameSpec,
    TypeAttributes,
    TypeDefinition,
    VariantDefinition,
)
from enumvariants.errors import AmbiguousRepresentationError
from enumvariants.resolution import AttributeResolver, create_resolver
from enumvariants.vocabulary import RenameCase


UPPER = RenameSpec.of_case(RenameCase.UPPERCASE)
LOWER = RenameSpec.of_case(RenameCase.LOWERCASE)


@pytest.fixture
def resolver() -> AttributeResolver:
    return create_resolver()


def strings(table) -> list[tuple[str, str]]:
    return [(v.display_string, v.abbr_string) for v in table]


class TestReferenceExamples:
    """The documented examples."""

    def test_type_level_uppercase(self, resolver, directions):
        """rename(uppercase) over North, East, South, West."""
        table = resolver.resolve(directions)
        assert [v.display_string for v in table] == ["NORTH", "EAST", "SOUTH", "WEST"]
        assert [v.abbr_string for v in table] == ["NOR", "EAS", "SOU", "WES"]

    def test_short_and_literal(self, resolver, formats):
        """Short strings are their own abbreviation; literals are verbatim."""
        table = resolver.resolve(formats)
        assert table.get("Xml").abbr_string == "Xml"
        assert table.get("PlainText").display_string == "plain-text"
        assert table.get("PlainText").abbr_string == "txt"

    def test_skip(self, resolver, weekdays):
        """Skipped variants are resolved but not iterable."""
        table = resolver.resolve(weekdays)
        assert table.get("Monday").included_in_iteration is False
        assert table.get("Tuesday").display_string == "DayAfterMonday"
        assert table.get("Tuesday").abbr_string == "Day"


class TestIdentity:
    """Without directives, the identifier is the representation."""

    def test_identity_strings(self, resolver):
        """Display is the ident, abbreviation its first three characters."""
        definition = TypeDefinition(
            name="Animal",
            variants=(VariantDefinition(ident="Cat"), VariantDefinition(ident="Horse")),
        )
        assert strings(resolver.resolve(definition)) == [("Cat", "Cat"), ("Horse", "Hor")]


class TestPriority:
    """Variant directives override type directives override defaults."""

    def test_variant_rename_over_type_rename(self, resolver):
        """Variant case strategy wins over the type strategy."""
        definition = TypeDefinition(
            name="T",
            variants=(
                VariantDefinition(ident="Alpha", rename=LOWER),
                VariantDefinition(ident="Beta"),
            ),
            attributes=TypeAttributes(rename=UPPER),
        )
        assert strings(resolver.resolve(definition)) == [("alpha", "alp"), ("BETA", "BET")]

    def test_variant_abbr_over_type_abbr(self, resolver):
        """Variant rename_abbr wins; type rename_abbr applies elsewhere."""
        definition = TypeDefinition(
            name="T",
            variants=(
                VariantDefinition(ident="Alpha", rename_abbr=RenameSpec.of_literal("a")),
                VariantDefinition(ident="Beta", rename_abbr=UPPER),
                VariantDefinition(ident="Gamma"),
            ),
            attributes=TypeAttributes(rename_abbr=LOWER),
        )
        assert strings(resolver.resolve(definition)) == [
            ("Alpha", "a"),
            ("Beta", "BET"),
            ("Gamma", "gam"),
        ]

    def test_abbreviation_derived_from_display(self, resolver):
        """The default abbreviation uses the resolved display string."""
        definition = TypeDefinition(
            name="T",
            variants=(VariantDefinition(ident="PlainText", rename=RenameSpec.of_literal("plain-text")),),
        )
        assert strings(resolver.resolve(definition)) == [("plain-text", "pla")]

    def test_type_rename_and_abbr_combined(self, resolver):
        """Type-level uppercase display with lowercase abbreviation."""
        definition = TypeDefinition(
            name="T",
            variants=(VariantDefinition(ident="North"),),
            attributes=TypeAttributes(rename=UPPER, rename_abbr=LOWER),
        )
        assert strings(resolver.resolve(definition)) == [("NORTH", "nor")]


class TestAmbiguity:
    """Colliding representations are rejected."""

    def test_duplicate_display(self, resolver):
        """Two variants with one display string."""
        definition = TypeDefinition(
            name="T",
            variants=(
                VariantDefinition(ident="Json"),
                VariantDefinition(ident="JsonLines", rename=RenameSpec.of_literal("Json")),
            ),
        )
        with pytest.raises(AmbiguousRepresentationError) as exc_info:
            resolver.resolve(definition)
        assert exc_info.value.text == "Json"
        assert exc_info.value.variants == ("Json", "JsonLines")

    def test_duplicate_abbreviation(self, resolver):
        """Default abbreviations can collide."""
        definition = TypeDefinition(
            name="Month",
            variants=(VariantDefinition(ident="March"), VariantDefinition(ident="Marsday")),
        )
        with pytest.raises(AmbiguousRepresentationError, match="'Mar'"):
            resolver.resolve(definition)

    def test_abbreviation_equal_to_other_display(self, resolver):
        """An abbreviation may not shadow another variant's display string."""
        definition = TypeDefinition(
            name="T",
            variants=(
                VariantDefinition(ident="Cat", rename_abbr=RenameSpec.of_literal("c")),
                VariantDefinition(ident="Catalog"),
            ),
        )
        with pytest.raises(AmbiguousRepresentationError) as exc_info:
            resolver.resolve(definition)
        assert exc_info.value.variants == ("Cat", "Catalog")

    def test_skipped_variants_count(self, resolver):
        """Skipped variants take part in the uniqueness check."""
        definition = TypeDefinition(
            name="T",
            variants=(
                VariantDefinition(ident="Old", skip=True),
                VariantDefinition(ident="New", rename=RenameSpec.of_literal("Old")),
            ),
        )
        with pytest.raises(AmbiguousRepresentationError):
            resolver.resolve(definition)
