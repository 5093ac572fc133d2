"""
Vocabulary enums, the shared language of the generation pipeline.

All enumerated types referenced by definitions, validators, the resolver,
the synthesizer and the emitters.
"""

from enum import Enum


# =============================================================================
# DEFINITION MODEL
# =============================================================================

class TypeKind(str, Enum):
    """
    Shape of the type a generation pass was applied to.

    Only ENUM is accepted; the other kinds exist so that the validator can
    name what it rejected.
    """
    ENUM = "enum"
    STRUCT = "struct"      # Record type
    UNION = "union"        # Untagged union


class VariantShape(str, Enum):
    """Payload shape of a single enumeration variant."""
    UNIT = "unit"          # No data
    NAMED = "named"        # Named fields: Variant { a, b }
    TUPLE = "tuple"        # Unnamed fields: Variant(a, b)
    NEWTYPE = "newtype"    # A single wrapped value: Variant(a)


_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


class RenameCase(str, Enum):
    """
    Case transform usable by a rename directive.

    Transforms are ASCII-only: non-ASCII characters are left as they are,
    so the character count of the input never changes.
    """
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"

    def apply(self, text: str) -> str:
        """Apply the transform to text."""
        if self is RenameCase.UPPERCASE:
            return text.translate(_ASCII_UPPER)
        return text.translate(_ASCII_LOWER)


# =============================================================================
# CAPABILITIES & OPERATIONS
# =============================================================================

class Capability(str, Enum):
    """Optional generated behavior attached to the type."""
    DISPLAY = "display"
    FROM_STR = "from_str"
    SERIALIZE = "serialize"
    DESERIALIZE = "deserialize"
    COPY = "copy"              # Trivial duplication, always generated


class OperationFamily(str, Enum):
    """Grouping of synthesized operations."""
    CORE = "core"              # as_str, as_str_abbr
    ITERATION = "iteration"
    LISTING = "listing"
    CAPABILITY = "capability"


class OperationKind(str, Enum):
    """
    Every operation the synthesizer can plan.

    The value is the public name the operation is emitted under.
    """
    AS_STR = "as_str"
    AS_STR_ABBR = "as_str_abbr"
    ITER_VARIANTS = "iter_variants"
    ITER_VARIANTS_AS_STR = "iter_variants_as_str"
    ITER_VARIANTS_AS_STR_ABBR = "iter_variants_as_str_abbr"
    VARIANTS_COUNT = "variants_count"
    VARIANTS_LIST_STR = "variants_list_str"
    VARIANTS_LIST_STR_ABBR = "variants_list_str_abbr"
    DISPLAY = "display"
    FROM_STR = "from_str"
    SERIALIZE = "serialize"
    DESERIALIZE = "deserialize"
    COPY = "copy"

    @property
    def family(self) -> OperationFamily:
        return _OPERATION_FAMILIES[self]


_OPERATION_FAMILIES: dict[OperationKind, OperationFamily] = {
    OperationKind.AS_STR: OperationFamily.CORE,
    OperationKind.AS_STR_ABBR: OperationFamily.CORE,
    OperationKind.ITER_VARIANTS: OperationFamily.ITERATION,
    OperationKind.ITER_VARIANTS_AS_STR: OperationFamily.ITERATION,
    OperationKind.ITER_VARIANTS_AS_STR_ABBR: OperationFamily.ITERATION,
    OperationKind.VARIANTS_COUNT: OperationFamily.ITERATION,
    OperationKind.VARIANTS_LIST_STR: OperationFamily.LISTING,
    OperationKind.VARIANTS_LIST_STR_ABBR: OperationFamily.LISTING,
    OperationKind.DISPLAY: OperationFamily.CAPABILITY,
    OperationKind.FROM_STR: OperationFamily.CAPABILITY,
    OperationKind.SERIALIZE: OperationFamily.CAPABILITY,
    OperationKind.DESERIALIZE: OperationFamily.CAPABILITY,
    OperationKind.COPY: OperationFamily.CAPABILITY,
}


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationRule(str, Enum):
    """Rule a generation-time error was raised under."""
    STRUCTURE = "structure"                # Target is not an enum
    VARIANT_IDENTIFIER = "variant_identifier"
    FIELD_SHAPE = "field_shape"
    TYPE_RENAME = "type_rename"
    VARIANT_RENAME = "variant_rename"
    DIRECTIVE = "directive"                # Directive front-end
    FEATURE = "feature"                    # Feature-gated directive
    CAPABILITY = "capability"
    REPRESENTATION = "representation"      # Resolved strings collide
