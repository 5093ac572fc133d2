"""
Definitions: the Definition Model and the front-ends that build it.

- Models: TypeDefinition, VariantDefinition, TypeAttributes, RenameSpec
- Directive parser: `rename(uppercase)`, `rename = "text"`, `skip`, ...
- Loader: JSON definitions documents
- Introspection: enum classes plus keyword directives
"""

from enumvariants.definitions.models import (
    RenameSpec,
    VariantDefinition,
    TypeAttributes,
    TypeDefinition,
)
from enumvariants.definitions.directives import (
    TYPE_DIRECTIVES,
    VARIANT_DIRECTIVES,
    Directive,
    DirectiveValue,
    parse_directives,
    type_attributes_from_directives,
    variant_from_directives,
)
from enumvariants.definitions.loader import (
    DefinitionDocument,
    TypeEntry,
    VariantEntry,
    load_definitions,
    load_definitions_text,
)
from enumvariants.definitions.introspect import (
    MemberDirectives,
    member,
    definition_from_enum,
)

__all__ = [
    # Models
    "RenameSpec",
    "VariantDefinition",
    "TypeAttributes",
    "TypeDefinition",
    # Directives
    "TYPE_DIRECTIVES",
    "VARIANT_DIRECTIVES",
    "Directive",
    "DirectiveValue",
    "parse_directives",
    "type_attributes_from_directives",
    "variant_from_directives",
    # Loader
    "DefinitionDocument",
    "TypeEntry",
    "VariantEntry",
    "load_definitions",
    "load_definitions_text",
    # Introspection
    "MemberDirectives",
    "member",
    "definition_from_enum",
]
