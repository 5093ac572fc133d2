"""
Generation Plan, the output of synthesis.

A language-neutral description of every operation an emitter has to
materialize for one type, with the static data each operation needs.
"""

from dataclasses import dataclass, field

from enumvariants.resolution.table import ResolutionTable
from enumvariants.vocabulary import Capability, OperationFamily, OperationKind


@dataclass(frozen=True)
class PlannedOperation:
    """
    Single operation to emit.

    Which data fields are populated depends on the kind:
    - entries: (ident, text) pairs, e.g. the as_str mapping
    - fallback_entries: second matching phase (abbreviations) for parsers
    - sequence: idents or strings in iteration order
    - constant: precomputed value (listing strings, counts)
    """
    kind: OperationKind
    doc: str = ""
    entries: tuple[tuple[str, str], ...] = ()
    fallback_entries: tuple[tuple[str, str], ...] = ()
    sequence: tuple[str, ...] = ()
    constant: str | int | None = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def family(self) -> OperationFamily:
        return self.kind.family

    def mapping(self) -> dict[str, str]:
        """entries as a dict, keeping the first entry for a repeated key."""
        result: dict[str, str] = {}
        for key, value in self.entries:
            result.setdefault(key, value)
        return result


@dataclass(frozen=True)
class GenerationPlan:
    """Complete plan for one type."""
    type_name: str
    variants: tuple[str, ...]
    table: ResolutionTable
    operations: tuple[PlannedOperation, ...] = ()
    capabilities: frozenset[Capability] = field(default_factory=frozenset)

    def __contains__(self, kind: OperationKind) -> bool:
        return self.get(kind) is not None

    def get(self, kind: OperationKind) -> PlannedOperation | None:
        """Get planned operation by kind."""
        for operation in self.operations:
            if operation.kind is kind:
                return operation
        return None

    def require(self, kind: OperationKind) -> PlannedOperation:
        """Get planned operation by kind, raising KeyError if absent."""
        operation = self.get(kind)
        if operation is None:
            raise KeyError(f"{self.type_name} plan has no {kind.value} operation")
        return operation

    def schema_strings(self) -> tuple[str, ...]:
        """
        Strings a serde field accepts, for JSON schema generation.

        Every string deserialize matches when it is planned, otherwise every
        string serialize produces. Raises KeyError when neither is planned.
        """
        if OperationKind.DESERIALIZE in self:
            operation = self.require(OperationKind.DESERIALIZE)
            pairs = operation.entries + operation.fallback_entries
            return tuple(dict.fromkeys(text for text, _ in pairs))
        return tuple(dict.fromkeys(self.require(OperationKind.SERIALIZE).mapping().values()))

    def operation_names(self) -> list[str]:
        """Names of all planned operations, in plan order."""
        return [operation.name for operation in self.operations]

    def by_family(self, family: OperationFamily) -> list[PlannedOperation]:
        return [operation for operation in self.operations if operation.family is family]
