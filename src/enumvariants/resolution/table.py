"""
Resolution Table, the resolved strings of every variant of one type.

Computed once per TypeDefinition and never mutated afterwards.
"""

from dataclasses import dataclass
from typing import Iterator

ABBREVIATION_LENGTH = 3


def abbreviate(text: str) -> str:
    """
    Default abbreviation: the first three characters.

    Counts code points, so multi-byte characters count as one each.
    Shorter strings are returned unchanged.
    """
    return text[:ABBREVIATION_LENGTH]


def quote(text: str) -> str:
    """Wrap in double quotes, as used by the listing operations."""
    return f'"{text}"'


@dataclass(frozen=True)
class ResolvedVariant:
    """Resolved representation of a single variant."""
    ident: str
    display_string: str
    abbr_string: str
    included_in_iteration: bool = True


@dataclass(frozen=True)
class ResolutionTable:
    """Per-type mapping from variant to its resolved strings."""
    type_name: str
    variants: tuple[ResolvedVariant, ...] = ()

    def __iter__(self) -> Iterator[ResolvedVariant]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def get(self, ident: str) -> ResolvedVariant:
        """Get the resolved variant for an identifier."""
        for variant in self.variants:
            if variant.ident == ident:
                return variant
        raise KeyError(ident)

    def iterable(self) -> tuple[ResolvedVariant, ...]:
        """Non-skipped variants in declaration order."""
        return tuple(v for v in self.variants if v.included_in_iteration)

    def match(self, text: str) -> ResolvedVariant | None:
        """
        Two-phase exact match.

        Every display string is tried first, in declaration order; only
        when none matches are the abbreviated strings tried. Skipped
        variants take part in both phases.
        """
        for variant in self.variants:
            if variant.display_string == text:
                return variant
        for variant in self.variants:
            if variant.abbr_string == text:
                return variant
        return None

    def to_rows(self) -> list[dict[str, str | bool]]:
        """Serializable rows, one per variant."""
        return [
            {
                "ident": v.ident,
                "display": v.display_string,
                "abbr": v.abbr_string,
                "iterable": v.included_in_iteration,
            }
            for v in self.variants
        ]
