"""
enumvariants: string representations and helpers for unit-only enums.

Validate -> Resolve -> Synthesize -> Emit:
- definitions: Definition Model and its front-ends
- validation: rejects what cannot be generated
- resolution: canonical display and abbreviated strings
- synthesis: the Generation Plan
- emitters: runtime attachment and Python source rendering
"""

from enumvariants.config import (
    SERDE_FEATURE,
    GenerationConfig,
    load_config,
    create_config,
)
from enumvariants.definitions import (
    RenameSpec,
    VariantDefinition,
    TypeAttributes,
    TypeDefinition,
    member,
    definition_from_enum,
    load_definitions,
)
from enumvariants.derive import variants
from enumvariants.emitters import RuntimeEmitter, SourceEmitter
from enumvariants.errors import (
    GenerationError,
    StructuralError,
    FieldShapeError,
    AttributeValueError,
    DirectiveSyntaxError,
    ConflictingCapabilityError,
    AmbiguousRepresentationError,
    ParseError,
    DeserializeError,
)
from enumvariants.pipeline import GenerationPipeline, create_pipeline, generate
from enumvariants.resolution import ResolutionTable, ResolvedVariant
from enumvariants.synthesis import GenerationPlan, PlannedOperation
from enumvariants.vocabulary import Capability, OperationKind, RenameCase

__version__ = "0.1.0"

__all__ = [
    # Decorator
    "variants",
    "member",
    # Config
    "SERDE_FEATURE",
    "GenerationConfig",
    "load_config",
    "create_config",
    # Definitions
    "RenameSpec",
    "VariantDefinition",
    "TypeAttributes",
    "TypeDefinition",
    "definition_from_enum",
    "load_definitions",
    # Pipeline
    "GenerationPipeline",
    "create_pipeline",
    "generate",
    "ResolutionTable",
    "ResolvedVariant",
    "GenerationPlan",
    "PlannedOperation",
    # Emitters
    "RuntimeEmitter",
    "SourceEmitter",
    # Vocabulary
    "Capability",
    "OperationKind",
    "RenameCase",
    # Errors
    "GenerationError",
    "StructuralError",
    "FieldShapeError",
    "AttributeValueError",
    "DirectiveSyntaxError",
    "ConflictingCapabilityError",
    "AmbiguousRepresentationError",
    "ParseError",
    "DeserializeError",
]
