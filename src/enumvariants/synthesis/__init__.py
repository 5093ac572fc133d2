"""
Synthesis: resolved definitions to generation plans.

Transforms a TypeDefinition and its ResolutionTable into a GenerationPlan
ready for an emitter.
"""

from enumvariants.synthesis.plan import (
    PlannedOperation,
    GenerationPlan,
)
from enumvariants.synthesis.synthesizer import (
    LIST_SEPARATOR,
    OperationRequest,
    CodeSynthesizer,
    create_synthesizer,
)

__all__ = [
    # Plan
    "PlannedOperation",
    "GenerationPlan",
    # Synthesizer
    "LIST_SEPARATOR",
    "OperationRequest",
    "CodeSynthesizer",
    "create_synthesizer",
]
