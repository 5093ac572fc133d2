"""
Attribute Resolver, turning directives into the Resolution Table.

Display string, highest priority first:

1. variant `rename`: literal as written, or the case transform of the ident;
2. type `rename`: case transform of the ident;
3. the ident unchanged.

Abbreviated string, highest priority first:

1. variant `rename_abbr`: literal as written, or the case transform of the
   default abbreviation of the resolved display string;
2. type `rename_abbr`: case transform of that same default abbreviation;
3. the default abbreviation of the resolved display string.
"""

from enumvariants.definitions.models import (
    RenameSpec,
    TypeAttributes,
    TypeDefinition,
    VariantDefinition,
)
from enumvariants.errors import AmbiguousRepresentationError
from enumvariants.resolution.table import ResolutionTable, ResolvedVariant, abbreviate


class AttributeResolver:
    """
    Resolves display and abbreviated strings for every variant.

    Expects a validated definition: rename values are assumed to be a
    string literal or a known case strategy.
    """

    def resolve(self, definition: TypeDefinition) -> ResolutionTable:
        """
        Resolve a definition into its table.

        Raises:
            AmbiguousRepresentationError: two variants share a representation
        """
        resolved = tuple(
            self.resolve_variant(variant, definition.attributes)
            for variant in definition.variants
        )
        self._check_uniqueness(definition.name, resolved)
        return ResolutionTable(type_name=definition.name, variants=resolved)

    def resolve_variant(
        self,
        variant: VariantDefinition,
        attributes: TypeAttributes,
    ) -> ResolvedVariant:
        """Resolve a single variant against the type-level attributes."""
        display = self.display_string(variant, attributes)
        return ResolvedVariant(
            ident=variant.ident,
            display_string=display,
            abbr_string=self.abbr_string(variant, attributes, display),
            included_in_iteration=not variant.skip,
        )

    def display_string(self, variant: VariantDefinition, attributes: TypeAttributes) -> str:
        if variant.rename is not None:
            return self._apply(variant.rename, variant.ident)
        if attributes.rename is not None:
            return self._apply(attributes.rename, variant.ident)
        return variant.ident

    def abbr_string(
        self,
        variant: VariantDefinition,
        attributes: TypeAttributes,
        display: str,
    ) -> str:
        if variant.rename_abbr is not None:
            return self._apply(variant.rename_abbr, abbreviate(display))
        if attributes.rename_abbr is not None:
            return self._apply(attributes.rename_abbr, abbreviate(display))
        return abbreviate(display)

    @staticmethod
    def _apply(spec: RenameSpec, text: str) -> str:
        if spec.is_literal:
            return spec.literal
        case = spec.case
        if case is None:
            raise ValueError(f"unresolvable rename strategy {spec.describe()}")
        return case.apply(text)

    def _check_uniqueness(
        self,
        type_name: str,
        resolved: tuple[ResolvedVariant, ...],
    ) -> None:
        """
        Reject collisions that would make parsing ambiguous.

        Display strings must be unique, abbreviated strings must be unique,
        and no abbreviated string may equal another variant's display string
        (parsing tries display strings first, so the abbreviation would
        never resolve back to its own variant).
        """
        displays: dict[str, str] = {}
        abbrs: dict[str, str] = {}

        for variant in resolved:
            owner = displays.get(variant.display_string)
            if owner is not None:
                raise self._ambiguous(type_name, "display string", variant.display_string, owner, variant.ident)
            displays[variant.display_string] = variant.ident

        for variant in resolved:
            owner = abbrs.get(variant.abbr_string)
            if owner is not None:
                raise self._ambiguous(type_name, "abbreviated string", variant.abbr_string, owner, variant.ident)
            abbrs[variant.abbr_string] = variant.ident

            owner = displays.get(variant.abbr_string)
            if owner is not None and owner != variant.ident:
                raise self._ambiguous(
                    type_name,
                    "abbreviated string (equal to a display string)",
                    variant.abbr_string,
                    owner,
                    variant.ident,
                )

    @staticmethod
    def _ambiguous(
        type_name: str,
        what: str,
        text: str,
        first: str,
        second: str,
    ) -> AmbiguousRepresentationError:
        return AmbiguousRepresentationError(
            f"{what} {text!r} is already used by `{first}`",
            type_name=type_name,
            text=text,
            variants=(first, second),
        )


def create_resolver() -> AttributeResolver:
    """Factory for attribute resolver."""
    return AttributeResolver()
