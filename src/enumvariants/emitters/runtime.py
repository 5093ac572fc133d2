"""
Runtime Emitter, attaching a plan's operations to an existing enum class.

Lookup tables are built once, when the class is decorated; the attached
operations only read them.
"""

from enum import Enum
from typing import Any, Callable

from pydantic_core import core_schema

from enumvariants.errors import DeserializeError, ParseError, StructuralError
from enumvariants.observability import get_logger
from enumvariants.synthesis.plan import GenerationPlan, PlannedOperation
from enumvariants.vocabulary import OperationKind


logger = get_logger("emitters.runtime")

PLAN_ATTRIBUTE = "__variants_plan__"

# Operations emitted under special method names, never as plain attributes
DUNDER_OPERATIONS = frozenset({OperationKind.DISPLAY.value, OperationKind.COPY.value})


def _enum_members(enum_cls: type[Enum]) -> dict[str, Enum]:
    """Canonical members by name, aliases excluded."""
    return {member.name: member for member in enum_cls}


def _matcher(
    operation: PlannedOperation,
    members: dict[str, Enum],
) -> Callable[[str], Enum | None]:
    """Two-phase exact matcher over display then abbreviated strings."""
    primary: dict[str, Enum] = {}
    for text, ident in operation.entries:
        primary.setdefault(text, members[ident])
    fallback: dict[str, Enum] = {}
    for text, ident in operation.fallback_entries:
        fallback.setdefault(text, members[ident])

    def match(text: str) -> Enum | None:
        found = primary.get(text)
        if found is None:
            found = fallback.get(text)
        return found

    return match


class RuntimeEmitter:
    """
    Emits a plan onto an enum class.

    The class must have exactly the plan's variants as members, and no
    member may be named like a generated operation.
    """

    def emit(self, plan: GenerationPlan, enum_cls: type[Enum]) -> type[Enum]:
        """
        Attach every planned operation to enum_cls.

        Raises:
            StructuralError: members do not match the plan, or collide
                with a generated name
        """
        members = _enum_members(enum_cls)
        self._check_members(plan, members)

        for operation in plan.operations:
            emit_operation = getattr(self, f"_emit_{operation.name}")
            emit_operation(enum_cls, plan, operation, members)

        if OperationKind.SERIALIZE in plan or OperationKind.DESERIALIZE in plan:
            self._emit_pydantic_hook(enum_cls, plan)

        setattr(enum_cls, PLAN_ATTRIBUTE, plan)
        logger.debug("Attached %s to %s", ", ".join(plan.operation_names()), plan.type_name)
        return enum_cls

    def _check_members(self, plan: GenerationPlan, members: dict[str, Enum]) -> None:
        if tuple(members) != plan.variants:
            raise StructuralError(
                f"class members {list(members)} do not match planned variants {list(plan.variants)}",
                type_name=plan.type_name,
            )
        generated = set(plan.operation_names()) - DUNDER_OPERATIONS
        for name in members:
            if name in generated:
                raise StructuralError(
                    f"variant name collides with the generated `{name}` operation",
                    type_name=plan.type_name,
                    variant=name,
                )

    # -------------------------------------------------------------------------
    # Core
    # -------------------------------------------------------------------------

    def _emit_as_str(self, enum_cls, plan, operation, members) -> None:
        table = {members[ident]: text for ident, text in operation.mapping().items()}

        def as_str(self) -> str:
            return table[self]

        as_str.__doc__ = operation.doc
        setattr(enum_cls, "as_str", as_str)

    def _emit_as_str_abbr(self, enum_cls, plan, operation, members) -> None:
        table = {members[ident]: text for ident, text in operation.mapping().items()}

        def as_str_abbr(self) -> str:
            return table[self]

        as_str_abbr.__doc__ = operation.doc
        setattr(enum_cls, "as_str_abbr", as_str_abbr)

    # -------------------------------------------------------------------------
    # Iteration & listing
    # -------------------------------------------------------------------------

    def _emit_iterator(self, enum_cls, operation, values: tuple) -> None:
        def iterate(cls):
            return iter(values)

        iterate.__name__ = operation.name
        iterate.__doc__ = operation.doc
        setattr(enum_cls, operation.name, classmethod(iterate))

    def _emit_iter_variants(self, enum_cls, plan, operation, members) -> None:
        self._emit_iterator(enum_cls, operation, tuple(members[i] for i in operation.sequence))

    def _emit_iter_variants_as_str(self, enum_cls, plan, operation, members) -> None:
        self._emit_iterator(enum_cls, operation, operation.sequence)

    def _emit_iter_variants_as_str_abbr(self, enum_cls, plan, operation, members) -> None:
        self._emit_iterator(enum_cls, operation, operation.sequence)

    def _emit_constant(self, enum_cls, operation) -> None:
        constant = operation.constant

        def value(cls):
            return constant

        value.__name__ = operation.name
        value.__doc__ = operation.doc
        setattr(enum_cls, operation.name, classmethod(value))

    def _emit_variants_count(self, enum_cls, plan, operation, members) -> None:
        self._emit_constant(enum_cls, operation)

    def _emit_variants_list_str(self, enum_cls, plan, operation, members) -> None:
        self._emit_constant(enum_cls, operation)

    def _emit_variants_list_str_abbr(self, enum_cls, plan, operation, members) -> None:
        self._emit_constant(enum_cls, operation)

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def _emit_display(self, enum_cls, plan, operation, members) -> None:
        table = {members[ident]: text for ident, text in operation.mapping().items()}

        def __str__(self) -> str:
            return table[self]

        def __format__(self, format_spec: str) -> str:
            return format(table[self], format_spec)

        __str__.__doc__ = operation.doc
        setattr(enum_cls, "__str__", __str__)
        setattr(enum_cls, "__format__", __format__)

    def _emit_from_str(self, enum_cls, plan, operation, members) -> None:
        match = _matcher(operation, members)
        type_name = plan.type_name

        def from_str(cls, text: str):
            found = match(text) if isinstance(text, str) else None
            if found is None:
                raise ParseError(text, type_name)
            return found

        from_str.__doc__ = operation.doc
        setattr(enum_cls, "from_str", classmethod(from_str))

    def _emit_serialize(self, enum_cls, plan, operation, members) -> None:
        table = {members[ident]: text for ident, text in operation.mapping().items()}

        def serialize(self) -> str:
            return table[self]

        serialize.__doc__ = operation.doc
        setattr(enum_cls, "serialize", serialize)

    def _emit_deserialize(self, enum_cls, plan, operation, members) -> None:
        match = _matcher(operation, members)
        type_name = plan.type_name

        def deserialize(cls, value: Any):
            found = match(value) if isinstance(value, str) else None
            if found is None:
                raise DeserializeError(value, type_name)
            return found

        deserialize.__doc__ = operation.doc
        setattr(enum_cls, "deserialize", classmethod(deserialize))

    def _emit_copy(self, enum_cls, plan, operation, members) -> None:
        def __copy__(self):
            return self

        def __deepcopy__(self, memo):
            return self

        setattr(enum_cls, "__copy__", __copy__)
        setattr(enum_cls, "__deepcopy__", __deepcopy__)

    def _emit_pydantic_hook(self, enum_cls, plan: GenerationPlan) -> None:
        """Conform to pydantic's validation and serialization protocol."""
        deserialize = OperationKind.DESERIALIZE in plan
        serialize = OperationKind.SERIALIZE in plan

        def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
            serialization = None
            if serialize:
                serialization = core_schema.plain_serializer_function_ser_schema(
                    lambda member: member.serialize()
                )
            if deserialize:
                def validate(value: Any):
                    if isinstance(value, cls):
                        return value
                    return cls.deserialize(value)

                return core_schema.no_info_plain_validator_function(
                    validate, serialization=serialization
                )
            return core_schema.is_instance_schema(cls, serialization=serialization)

        strings = plan.schema_strings()

        def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict[str, Any]:
            return {"type": "string", "enum": list(strings)}

        setattr(enum_cls, "__get_pydantic_core_schema__", classmethod(__get_pydantic_core_schema__))
        setattr(enum_cls, "__get_pydantic_json_schema__", classmethod(__get_pydantic_json_schema__))


def create_runtime_emitter() -> RuntimeEmitter:
    """Factory for runtime emitter."""
    return RuntimeEmitter()
