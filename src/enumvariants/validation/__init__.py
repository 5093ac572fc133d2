"""
Validation: rejects malformed definitions before anything is generated.
"""

from enumvariants.validation.validator import (
    VALID_CASE_PATHS,
    DefinitionValidationResult,
    DefinitionValidator,
    create_definition_validator,
)

__all__ = [
    "VALID_CASE_PATHS",
    "DefinitionValidationResult",
    "DefinitionValidator",
    "create_definition_validator",
]
