"""
Definition Models, the in-memory description of one enumeration type.

Produced by a front-end (directive parser, JSON loader, enum introspection),
consumed read-only by the validator, resolver and synthesizer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from enumvariants.vocabulary import Capability, RenameCase, TypeKind, VariantShape


class RenameSpec(BaseModel):
    """
    Value of a rename or rename_abbr directive.

    Exactly one of `literal` or `path` is set. The raw payload is kept as
    written so the validator can reject illegal kinds: a literal may be of
    any type (only str is legal) and a path may name an unknown strategy
    (only uppercase/lowercase are legal).
    """
    model_config = ConfigDict(frozen=True)

    literal: Any = Field(default=None, description="Literal payload, e.g. \"plain-text\"")
    path: str | None = Field(default=None, description="Strategy path, e.g. uppercase")

    @model_validator(mode="after")
    def exactly_one_form(self) -> "RenameSpec":
        if (self.literal is None) == (self.path is None):
            raise ValueError("RenameSpec takes exactly one of literal or path")
        return self

    @classmethod
    def of_literal(cls, text: Any) -> "RenameSpec":
        return cls(literal=text)

    @classmethod
    def of_case(cls, case: RenameCase | str) -> "RenameSpec":
        return cls(path=case.value if isinstance(case, RenameCase) else case)

    @property
    def is_literal(self) -> bool:
        return self.path is None

    @property
    def case(self) -> RenameCase | None:
        """The case strategy, or None for literals and unknown paths."""
        if self.path is None:
            return None
        try:
            return RenameCase(self.path)
        except ValueError:
            return None

    def describe(self) -> str:
        """Render as written in a directive."""
        if self.is_literal:
            if isinstance(self.literal, str):
                return f'"{self.literal}"'
            return repr(self.literal)
        return self.path or ""


class VariantDefinition(BaseModel):
    """Single variant of the enumeration and its variant-level directives."""
    model_config = ConfigDict(frozen=True)

    ident: str = Field(..., description="Identifier, unique within the type")
    shape: VariantShape = Field(default=VariantShape.UNIT, description="Payload shape")
    fields: tuple[str, ...] = Field(
        default=(),
        description="Field names (or positions) for non-unit shapes",
    )
    skip: bool = Field(default=False, description="Exclude from iteration and listing")
    rename: RenameSpec | None = None
    rename_abbr: RenameSpec | None = None

    @field_validator("ident")
    @classmethod
    def ident_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("variant ident cannot be empty")
        return v


class TypeAttributes(BaseModel):
    """Type-level directives."""
    model_config = ConfigDict(frozen=True)

    rename: RenameSpec | None = None
    rename_abbr: RenameSpec | None = None
    display: bool = False
    from_str: bool = False
    serialize: bool = False
    deserialize: bool = False
    declared_capabilities: frozenset[Capability] = Field(
        default_factory=frozenset,
        description="Capabilities the type already implements explicitly",
    )

    def requested_capabilities(self) -> set[Capability]:
        """Optional capabilities switched on by directives."""
        flags = {
            Capability.DISPLAY: self.display,
            Capability.FROM_STR: self.from_str,
            Capability.SERIALIZE: self.serialize,
            Capability.DESERIALIZE: self.deserialize,
        }
        return {capability for capability, on in flags.items() if on}


class TypeDefinition(BaseModel):
    """
    One enumeration type plus its configuration.

    Variant order is declaration order, which is iteration and listing order.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Type name")
    kind: TypeKind = Field(default=TypeKind.ENUM)
    variants: tuple[VariantDefinition, ...] = Field(default=())
    attributes: TypeAttributes = Field(default_factory=TypeAttributes)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("type name cannot be empty")
        return v

    def get_variant(self, ident: str) -> VariantDefinition | None:
        """Get a variant by identifier."""
        for variant in self.variants:
            if variant.ident == ident:
                return variant
        return None

    def variant_idents(self) -> list[str]:
        """All identifiers in declaration order."""
        return [variant.ident for variant in self.variants]
