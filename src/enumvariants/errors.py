"""
Errors raised by the generation pipeline and by generated operations.

Generation-time errors derive from GenerationError and abort the whole
pass for the offending type. ParseError and DeserializeError are raised by
generated operations at runtime and are ordinary, recoverable results.
"""

from enumvariants.vocabulary import ValidationRule


class GenerationError(Exception):
    """Base class for every generation-time error."""

    rule: ValidationRule = ValidationRule.STRUCTURE

    def __init__(
        self,
        message: str,
        *,
        type_name: str,
        variant: str | None = None,
        rule: ValidationRule | None = None,
    ):
        self.message = message
        self.type_name = type_name
        self.variant = variant
        if rule is not None:
            self.rule = rule
        super().__init__(f"{self.location}: {message}")

    @property
    def location(self) -> str:
        """`Type` or `Type::Variant`."""
        if self.variant is None:
            return self.type_name
        return f"{self.type_name}::{self.variant}"


class StructuralError(GenerationError):
    """Target is not an enum, or its variants are not uniquely named."""
    rule = ValidationRule.STRUCTURE


class FieldShapeError(GenerationError):
    """A variant carries named, unnamed or newtype data."""
    rule = ValidationRule.FIELD_SHAPE


class AttributeValueError(GenerationError):
    """Illegal value kind or placement for a directive."""
    rule = ValidationRule.VARIANT_RENAME


class DirectiveSyntaxError(GenerationError):
    """Directive text could not be tokenized or parsed."""
    rule = ValidationRule.DIRECTIVE


class ConflictingCapabilityError(GenerationError):
    """A generated capability is already declared explicitly on the type."""
    rule = ValidationRule.CAPABILITY


class AmbiguousRepresentationError(GenerationError):
    """Two variants resolve to the same display or abbreviated string."""
    rule = ValidationRule.REPRESENTATION

    def __init__(
        self,
        message: str,
        *,
        type_name: str,
        text: str,
        variants: tuple[str, str],
    ):
        self.text = text
        self.variants = variants
        super().__init__(message, type_name=type_name, variant=variants[1])


class ParseError(ValueError):
    """No variant matches the input of a generated from_str."""

    def __init__(self, input: object, type_name: str):
        self.input = input
        self.type_name = type_name
        super().__init__(f"no {type_name} variant matches {input!r}")


class DeserializeError(ValueError):
    """No variant matches the scalar given to a generated deserializer."""

    def __init__(self, input: object, type_name: str):
        self.input = input
        self.type_name = type_name
        super().__init__(f"cannot deserialize {input!r} as {type_name}")
