"""
Resolution: directives to canonical display and abbreviated strings.
"""

from enumvariants.resolution.table import (
    ABBREVIATION_LENGTH,
    ResolvedVariant,
    ResolutionTable,
    abbreviate,
    quote,
)
from enumvariants.resolution.resolver import (
    AttributeResolver,
    create_resolver,
)

__all__ = [
    # Table
    "ABBREVIATION_LENGTH",
    "ResolvedVariant",
    "ResolutionTable",
    "abbreviate",
    "quote",
    # Resolver
    "AttributeResolver",
    "create_resolver",
]
