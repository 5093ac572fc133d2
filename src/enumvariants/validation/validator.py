"""
Definition Validator, a structural and semantic check over a TypeDefinition.

Runs before anything is resolved or synthesized. Produces pass/fail with
every error found; the pipeline raises the first one and aborts.
"""

import keyword
from dataclasses import dataclass, field

from enumvariants.definitions.models import RenameSpec, TypeDefinition, VariantDefinition
from enumvariants.errors import (
    AttributeValueError,
    FieldShapeError,
    GenerationError,
    StructuralError,
)
from enumvariants.vocabulary import RenameCase, TypeKind, ValidationRule, VariantShape


VALID_CASE_PATHS: tuple[str, ...] = tuple(case.value for case in RenameCase)

SHAPE_DESCRIPTIONS: dict[VariantShape, str] = {
    VariantShape.NAMED: "named fields",
    VariantShape.TUPLE: "unnamed fields",
    VariantShape.NEWTYPE: "a single wrapped value",
}


def is_identifier(name: str) -> bool:
    """A Python identifier that is not a keyword."""
    return name.isidentifier() and not keyword.iskeyword(name)


def is_reserved_member_name(name: str) -> bool:
    """Names Enum mangles (__x) or reserves (_x_) instead of making members."""
    if name.startswith("__"):
        return True
    return len(name) > 2 and name[0] == name[-1] == "_" and name[1] != "_" and name[-2] != "_"


# =============================================================================
# VALIDATION RESULT
# =============================================================================

@dataclass
class DefinitionValidationResult:
    """Result of definition validation."""
    valid: bool
    type_name: str
    errors: list[GenerationError] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise the first error, if any."""
        if self.errors:
            raise self.errors[0]


# =============================================================================
# DEFINITION VALIDATOR
# =============================================================================

class DefinitionValidator:
    """
    Validates type definitions before generation.

    Checks:
    - Target is an enum (not a record or union) named by a valid identifier
    - Variant identifiers are unique Python identifiers Enum accepts as members
    - Every variant is a unit variant
    - Type-level rename/rename_abbr is uppercase or lowercase
    - Variant-level rename/rename_abbr is a string literal, uppercase or lowercase
    - serialize/deserialize only with the serde feature enabled
    """

    def __init__(self, serde_enabled: bool = False):
        self.serde_enabled = serde_enabled

    def validate(self, definition: TypeDefinition) -> DefinitionValidationResult:
        """
        Validate a definition.

        Returns DefinitionValidationResult with valid=True if all checks pass.
        """
        errors: list[GenerationError] = []

        errors.extend(self._check_structure(definition))
        if not errors:
            errors.extend(self._check_identifiers(definition))
            errors.extend(self._check_field_shapes(definition))
            errors.extend(self._check_type_attributes(definition))
            errors.extend(self._check_variant_attributes(definition))
            errors.extend(self._check_features(definition))

        return DefinitionValidationResult(
            valid=len(errors) == 0,
            type_name=definition.name,
            errors=errors,
        )

    def validate_all(
        self, definitions: list[TypeDefinition]
    ) -> dict[str, DefinitionValidationResult]:
        """Validate multiple definitions, return results keyed by type name."""
        return {d.name: self.validate(d) for d in definitions}

    def _check_structure(self, definition: TypeDefinition) -> list[GenerationError]:
        """Only enums can have variants generated, under a class name Python accepts."""
        if definition.kind is not TypeKind.ENUM:
            return [StructuralError(
                f"variants can only be generated for enum types, not {definition.kind.value} types",
                type_name=definition.name,
            )]
        if not is_identifier(definition.name):
            return [StructuralError(
                f"`{definition.name}` is not a valid type name",
                type_name=definition.name,
            )]
        return []

    def _check_identifiers(self, definition: TypeDefinition) -> list[GenerationError]:
        """Variant identifiers must be unique identifiers an Enum can hold as members."""
        errors: list[GenerationError] = []
        seen: set[str] = set()

        for variant in definition.variants:
            if not is_identifier(variant.ident):
                errors.append(StructuralError(
                    f"`{variant.ident}` is not a valid identifier",
                    type_name=definition.name,
                    variant=variant.ident,
                    rule=ValidationRule.VARIANT_IDENTIFIER,
                ))
            elif is_reserved_member_name(variant.ident):
                errors.append(StructuralError(
                    f"`{variant.ident}` cannot name an enum member "
                    "(private and _sunder_ names are reserved)",
                    type_name=definition.name,
                    variant=variant.ident,
                    rule=ValidationRule.VARIANT_IDENTIFIER,
                ))
            elif variant.ident in seen:
                errors.append(StructuralError(
                    f"duplicate variant identifier `{variant.ident}`",
                    type_name=definition.name,
                    variant=variant.ident,
                    rule=ValidationRule.VARIANT_IDENTIFIER,
                ))
            seen.add(variant.ident)

        return errors

    def _check_field_shapes(self, definition: TypeDefinition) -> list[GenerationError]:
        """Every variant must be a unit variant."""
        errors: list[GenerationError] = []

        for variant in definition.variants:
            if variant.shape is VariantShape.UNIT:
                continue
            detail = f" ({', '.join(variant.fields)})" if variant.fields else ""
            errors.append(FieldShapeError(
                f"only unit variants are supported, found {SHAPE_DESCRIPTIONS[variant.shape]}{detail}",
                type_name=definition.name,
                variant=variant.ident,
            ))

        return errors

    def _check_type_attributes(self, definition: TypeDefinition) -> list[GenerationError]:
        """Type-level renames must be a case strategy."""
        errors: list[GenerationError] = []
        attributes = definition.attributes

        for directive, spec in (("rename", attributes.rename), ("rename_abbr", attributes.rename_abbr)):
            if spec is None:
                continue
            message = None
            if spec.is_literal:
                message = (
                    f"type-level `{directive}` accepts only "
                    f"{' or '.join(VALID_CASE_PATHS)}, got literal {spec.describe()}"
                )
            elif spec.case is None:
                message = self._unknown_path_message(directive, spec)
            if message:
                errors.append(AttributeValueError(
                    message,
                    type_name=definition.name,
                    rule=ValidationRule.TYPE_RENAME,
                ))

        return errors

    def _check_variant_attributes(self, definition: TypeDefinition) -> list[GenerationError]:
        """Variant-level renames must be a string literal or a case strategy."""
        errors: list[GenerationError] = []

        for variant in definition.variants:
            errors.extend(self._check_variant_rename(definition, variant, "rename", variant.rename))
            errors.extend(self._check_variant_rename(definition, variant, "rename_abbr", variant.rename_abbr))

        return errors

    def _check_variant_rename(
        self,
        definition: TypeDefinition,
        variant: VariantDefinition,
        directive: str,
        spec: RenameSpec | None,
    ) -> list[GenerationError]:
        if spec is None:
            return []
        message = None
        if spec.is_literal and not isinstance(spec.literal, str):
            message = (
                f"`{directive}` expects a string literal, "
                f"got {type(spec.literal).__name__} literal {spec.describe()}"
            )
        elif not spec.is_literal and spec.case is None:
            message = self._unknown_path_message(directive, spec)
        if message is None:
            return []
        return [AttributeValueError(
            message,
            type_name=definition.name,
            variant=variant.ident,
            rule=ValidationRule.VARIANT_RENAME,
        )]

    def _check_features(self, definition: TypeDefinition) -> list[GenerationError]:
        """serialize/deserialize require the serde feature."""
        if self.serde_enabled:
            return []
        errors: list[GenerationError] = []
        attributes = definition.attributes

        for directive, requested in (("serialize", attributes.serialize), ("deserialize", attributes.deserialize)):
            if requested:
                errors.append(AttributeValueError(
                    f"`{directive}` requires the `serde` feature",
                    type_name=definition.name,
                    rule=ValidationRule.FEATURE,
                ))

        return errors

    @staticmethod
    def _unknown_path_message(directive: str, spec: RenameSpec) -> str:
        return (
            f"unknown `{directive}` strategy `{spec.path}`, "
            f"expected one of: {', '.join(VALID_CASE_PATHS)}"
        )


# =============================================================================
# FACTORY
# =============================================================================

def create_definition_validator(serde_enabled: bool = False) -> DefinitionValidator:
    """Create a definition validator instance."""
    return DefinitionValidator(serde_enabled=serde_enabled)
