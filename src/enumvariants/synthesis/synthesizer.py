"""
Code Synthesizer, turning a definition and its resolution table into a plan.

Always plans as_str, as_str_abbr and the trivial duplication capability.
The iteration and listing families follow the operation request; display,
from_str, serialize and deserialize follow the type-level directives.
"""

from dataclasses import dataclass

from enumvariants.config import GenerationConfig
from enumvariants.definitions.models import TypeDefinition
from enumvariants.errors import ConflictingCapabilityError
from enumvariants.resolution.table import ResolutionTable, quote
from enumvariants.synthesis.plan import GenerationPlan, PlannedOperation
from enumvariants.vocabulary import Capability, OperationKind


LIST_SEPARATOR = ", "


@dataclass(frozen=True)
class OperationRequest:
    """Which optional operation families to plan."""
    iteration: bool = True
    listing: bool = True

    @classmethod
    def from_config(cls, config: GenerationConfig) -> "OperationRequest":
        return cls(iteration=config.iteration, listing=config.listing)


class CodeSynthesizer:
    """
    Synthesizes generation plans.

    Pure: the same definition, table and request always produce an equal plan.
    """

    def __init__(self, request: OperationRequest | None = None):
        self.request = request or OperationRequest()

    def synthesize(
        self,
        definition: TypeDefinition,
        table: ResolutionTable,
        request: OperationRequest | None = None,
    ) -> GenerationPlan:
        """
        Build the plan for one type.

        Raises:
            ConflictingCapabilityError: the type already declares duplication
        """
        request = request or self.request
        self._check_declared_capabilities(definition)

        name = definition.name
        operations = self._core_operations(name, table)
        if request.iteration:
            operations.extend(self._iteration_operations(name, table))
        if request.listing:
            operations.extend(self._listing_operations(name, table))
        operations.extend(self._capability_operations(definition, table))

        capabilities = definition.attributes.requested_capabilities() | {Capability.COPY}

        return GenerationPlan(
            type_name=name,
            variants=tuple(definition.variant_idents()),
            table=table,
            operations=tuple(operations),
            capabilities=frozenset(capabilities),
        )

    def _check_declared_capabilities(self, definition: TypeDefinition) -> None:
        if Capability.COPY in definition.attributes.declared_capabilities:
            raise ConflictingCapabilityError(
                "trivial duplication is generated for every unit-only enum; "
                "remove the explicit copy implementation",
                type_name=definition.name,
            )

    def _core_operations(self, name: str, table: ResolutionTable) -> list[PlannedOperation]:
        return [
            PlannedOperation(
                kind=OperationKind.AS_STR,
                doc=f"Return the string representation of the {name} variant.",
                entries=tuple((v.ident, v.display_string) for v in table),
            ),
            PlannedOperation(
                kind=OperationKind.AS_STR_ABBR,
                doc=f"Return the abbreviated string representation of the {name} variant.",
                entries=tuple((v.ident, v.abbr_string) for v in table),
            ),
        ]

    def _iteration_operations(self, name: str, table: ResolutionTable) -> list[PlannedOperation]:
        iterable = table.iterable()
        return [
            PlannedOperation(
                kind=OperationKind.ITER_VARIANTS,
                doc=f"Iterate over {name} variants. Skipped variants are not yielded.",
                sequence=tuple(v.ident for v in iterable),
            ),
            PlannedOperation(
                kind=OperationKind.ITER_VARIANTS_AS_STR,
                doc=f"Iterate over the string representations of {name} variants.",
                sequence=tuple(v.display_string for v in iterable),
            ),
            PlannedOperation(
                kind=OperationKind.ITER_VARIANTS_AS_STR_ABBR,
                doc=f"Iterate over the abbreviated string representations of {name} variants.",
                sequence=tuple(v.abbr_string for v in iterable),
            ),
            PlannedOperation(
                kind=OperationKind.VARIANTS_COUNT,
                doc=f"Return the number of iterable (non-skipped) {name} variants.",
                constant=len(iterable),
            ),
        ]

    def _listing_operations(self, name: str, table: ResolutionTable) -> list[PlannedOperation]:
        iterable = table.iterable()
        return [
            PlannedOperation(
                kind=OperationKind.VARIANTS_LIST_STR,
                doc=(
                    f"Return the quoted, comma separated string representations "
                    f"of {name} variants."
                ),
                constant=LIST_SEPARATOR.join(quote(v.display_string) for v in iterable),
            ),
            PlannedOperation(
                kind=OperationKind.VARIANTS_LIST_STR_ABBR,
                doc=(
                    f"Return the quoted, comma separated abbreviated string "
                    f"representations of {name} variants."
                ),
                constant=LIST_SEPARATOR.join(quote(v.abbr_string) for v in iterable),
            ),
        ]

    def _capability_operations(
        self,
        definition: TypeDefinition,
        table: ResolutionTable,
    ) -> list[PlannedOperation]:
        name = definition.name
        attributes = definition.attributes
        display_matches = tuple((v.display_string, v.ident) for v in table)
        abbr_matches = tuple((v.abbr_string, v.ident) for v in table)
        operations = []

        if attributes.display:
            operations.append(PlannedOperation(
                kind=OperationKind.DISPLAY,
                doc=f"Format a {name} variant using its string representation.",
                entries=tuple((v.ident, v.display_string) for v in table),
            ))
        if attributes.from_str:
            operations.append(PlannedOperation(
                kind=OperationKind.FROM_STR,
                doc=(
                    f"Parse a {name} variant from its string or abbreviated "
                    f"string representation."
                ),
                entries=display_matches,
                fallback_entries=abbr_matches,
            ))
        if attributes.serialize:
            operations.append(PlannedOperation(
                kind=OperationKind.SERIALIZE,
                doc=f"Serialize a {name} variant as its string representation.",
                entries=tuple((v.ident, v.display_string) for v in table),
            ))
        if attributes.deserialize:
            operations.append(PlannedOperation(
                kind=OperationKind.DESERIALIZE,
                doc=(
                    f"Deserialize a {name} variant from its string or "
                    f"abbreviated string representation."
                ),
                entries=display_matches,
                fallback_entries=abbr_matches,
            ))

        operations.append(PlannedOperation(
            kind=OperationKind.COPY,
            doc=f"{name} variants carry no data; copies are the variant itself.",
        ))
        return operations


def create_synthesizer(request: OperationRequest | None = None) -> CodeSynthesizer:
    """Factory for code synthesizer."""
    return CodeSynthesizer(request=request)
