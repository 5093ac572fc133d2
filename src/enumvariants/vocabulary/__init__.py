"""
Vocabulary: enumerated types forming the shared language of the pipeline.
"""

from enumvariants.vocabulary.enums import (
    # Definition model
    TypeKind,
    VariantShape,
    RenameCase,
    # Capabilities & operations
    Capability,
    OperationFamily,
    OperationKind,
    # Validation
    ValidationRule,
)

__all__ = [
    # Definition model
    "TypeKind",
    "VariantShape",
    "RenameCase",
    # Capabilities & operations
    "Capability",
    "OperationFamily",
    "OperationKind",
    # Validation
    "ValidationRule",
]
