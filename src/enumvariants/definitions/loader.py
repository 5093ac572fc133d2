"""
Definitions file loader.

A definitions document is JSON, either a single type object or
{"types": [...]}:

    {
      "name": "Weekday",
      "directives": ["rename(uppercase)", "display"],
      "declares": [],
      "variants": [
        {"ident": "Monday", "directives": ["skip"]},
        {"ident": "Tuesday", "directives": ["rename = \\"DayAfterMonday\\""]},
        "Wednesday"
      ]
    }
"""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from enumvariants.definitions.directives import (
    type_attributes_from_directives,
    variant_from_directives,
)
from enumvariants.definitions.models import TypeDefinition, VariantDefinition
from enumvariants.vocabulary import Capability, TypeKind, VariantShape


class VariantEntry(BaseModel):
    """Variant as written in a definitions document."""
    ident: str
    shape: VariantShape = VariantShape.UNIT
    fields: list[str] = Field(default_factory=list)
    directives: list[str] = Field(default_factory=list)

    def to_definition(self, type_name: str) -> VariantDefinition:
        return variant_from_directives(
            self.ident,
            self.directives,
            type_name=type_name,
            shape=self.shape,
            fields=self.fields,
        )


class TypeEntry(BaseModel):
    """Type as written in a definitions document."""
    name: str
    kind: TypeKind = TypeKind.ENUM
    directives: list[str] = Field(default_factory=list)
    declares: list[Capability] = Field(
        default_factory=list,
        description="Capabilities the type implements explicitly",
    )
    variants: list[VariantEntry | str] = Field(default_factory=list)

    def to_definition(self) -> TypeDefinition:
        """
        Convert to a TypeDefinition.

        Raises:
            DirectiveSyntaxError: malformed directive text
            AttributeValueError: unknown or misused directive
        """
        attributes = type_attributes_from_directives(
            self.directives,
            type_name=self.name,
            declared=self.declares,
        )
        variants = []
        for entry in self.variants:
            if isinstance(entry, str):
                entry = VariantEntry(ident=entry)
            variants.append(entry.to_definition(self.name))

        return TypeDefinition(
            name=self.name,
            kind=self.kind,
            variants=tuple(variants),
            attributes=attributes,
        )


class DefinitionDocument(BaseModel):
    """Top-level definitions document."""
    types: list[TypeEntry] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def single_type_shorthand(cls, data):
        """Accept a bare type object in place of {"types": [...]}."""
        if isinstance(data, dict) and "types" not in data and "name" in data:
            return {"types": [data]}
        return data

    def to_definitions(self) -> list[TypeDefinition]:
        return [entry.to_definition() for entry in self.types]


def load_definitions_text(text: str) -> list[TypeDefinition]:
    """
    Parse a definitions document from JSON text.

    Raises:
        pydantic.ValidationError: document does not match the schema
        GenerationError: directive text is invalid
    """
    document = DefinitionDocument.model_validate_json(text)
    return document.to_definitions()


def load_definitions(path: str | Path) -> list[TypeDefinition]:
    """Load every type definition from a JSON file."""
    return load_definitions_text(Path(path).read_text(encoding="utf-8"))
