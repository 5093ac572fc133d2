"""
Source Emitter, rendering generation plans as a Python module.

Each plan becomes an Enum class with auto() members. Methods read
module-level lookup tables defined after the class; listing strings and
counts are emitted as literals. Rendering is deterministic: equal plans
always produce identical text.
"""

from typing import Iterable

from enumvariants.config import GenerationConfig
from enumvariants.errors import StructuralError
from enumvariants.observability import get_logger
from enumvariants.synthesis.plan import GenerationPlan, PlannedOperation
from enumvariants.vocabulary import OperationKind


logger = get_logger("emitters.source")

INDENT = "    "

HEADER = (
    "# Generated by enumvariants. Do not edit.\n"
    "# Regenerate with: enumvariants generate <definitions>\n"
)

# Names the generated module imports
IMPORTED_NAMES = frozenset({"Enum", "auto", "core_schema", "ParseError", "DeserializeError"})

# Operations rendered under special method names
SPECIAL_OPERATIONS = frozenset({OperationKind.DISPLAY, OperationKind.COPY})

# Module-level tables per operation kind
STRING_TABLES = frozenset({
    OperationKind.AS_STR,
    OperationKind.AS_STR_ABBR,
    OperationKind.DISPLAY,
    OperationKind.SERIALIZE,
})
MATCHING_TABLES = frozenset({OperationKind.FROM_STR, OperationKind.DESERIALIZE})
SEQUENCE_TABLES = frozenset({
    OperationKind.ITER_VARIANTS_AS_STR,
    OperationKind.ITER_VARIANTS_AS_STR_ABBR,
})


def table_prefix(type_name: str) -> str:
    """Module constant prefix for a type, e.g. PlainText -> _PlainText_."""
    return f"_{type_name}_"


def table_names(plan: GenerationPlan) -> list[str]:
    """Module-level table names rendered for a plan."""
    prefix = table_prefix(plan.type_name)
    names = []
    for operation in plan.operations:
        table = f"{prefix}{operation.name.upper()}"
        if operation.kind in MATCHING_TABLES:
            names.extend((table, f"{table}_ABBR"))
        elif operation.kind in STRING_TABLES | SEQUENCE_TABLES | {OperationKind.ITER_VARIANTS}:
            names.append(table)
    return names


class SourceEmitter:
    """
    Renders plans into Python source.

    Generated modules import only enum, enumvariants.errors and, when a plan
    includes serde operations, pydantic_core.
    """

    def __init__(self, config: GenerationConfig | None = None):
        self.config = config or GenerationConfig()

    def emit(self, plan: GenerationPlan) -> str:
        """Render a module holding a single type."""
        return self.emit_module([plan])

    def emit_module(self, plans: Iterable[GenerationPlan]) -> str:
        """
        Render a module holding every plan, in the given order.

        Raises:
            StructuralError: a variant name collides with a generated name,
                or two module-level names coincide
        """
        plans = list(plans)
        for plan in plans:
            self._check_members(plan)
        self._check_module_names(plans)

        parts = []
        if self.config.header:
            parts.append(HEADER)
        parts.append(self._imports(plans))
        for plan in plans:
            parts.append(self._render_class(plan))
            parts.append(self._render_tables(plan))

        logger.debug("Rendered %d types", len(plans))
        return "\n\n".join(part.rstrip("\n") for part in parts) + "\n"

    def _check_members(self, plan: GenerationPlan) -> None:
        generated = {
            operation.name
            for operation in plan.operations
            if operation.kind not in SPECIAL_OPERATIONS
        }
        for ident in plan.variants:
            if ident in generated:
                raise StructuralError(
                    f"variant name collides with the generated `{ident}` operation",
                    type_name=plan.type_name,
                    variant=ident,
                )

    def _check_module_names(self, plans: list[GenerationPlan]) -> None:
        owners: dict[str, str] = {name: "an import" for name in IMPORTED_NAMES}
        for plan in plans:
            for name in [plan.type_name, *table_names(plan)]:
                owner = owners.get(name)
                if owner is not None:
                    raise StructuralError(
                        f"module name `{name}` is already defined by {owner}",
                        type_name=plan.type_name,
                    )
                owners[name] = f"type `{plan.type_name}`"

    # =========================================================================
    # Module layout
    # =========================================================================

    def _imports(self, plans: list[GenerationPlan]) -> str:
        errors = set()
        serde = False
        for plan in plans:
            if OperationKind.FROM_STR in plan:
                errors.add("ParseError")
            if OperationKind.DESERIALIZE in plan:
                errors.add("DeserializeError")
            if OperationKind.SERIALIZE in plan or OperationKind.DESERIALIZE in plan:
                serde = True

        lines = ["from enum import Enum, auto"]
        if serde:
            lines.append("")
            lines.append("from pydantic_core import core_schema")
        if errors:
            lines.append("")
            lines.append(f"from enumvariants.errors import {', '.join(sorted(errors))}")
        return "\n".join(lines)

    def _render_class(self, plan: GenerationPlan) -> str:
        lines = [
            "",
            f"class {plan.type_name}(Enum):",
            f'{INDENT}"""{plan.type_name} variants."""',
            "",
        ]
        for ident in plan.variants:
            lines.append(f"{INDENT}{ident} = auto()")

        prefix = table_prefix(plan.type_name)
        for operation in plan.operations:
            render = getattr(self, f"_render_{operation.name}")
            lines.append("")
            lines.extend(f"{INDENT}{line}" if line else "" for line in render(plan, operation, prefix))

        if OperationKind.SERIALIZE in plan or OperationKind.DESERIALIZE in plan:
            lines.append("")
            lines.extend(f"{INDENT}{line}" if line else "" for line in self._render_pydantic_hook(plan))
        return "\n".join(lines)

    def _render_tables(self, plan: GenerationPlan) -> str:
        prefix = table_prefix(plan.type_name)
        member = f"{plan.type_name}.{{}}".format
        lines = [""]

        for operation in plan.operations:
            table = f"{prefix}{operation.name.upper()}"
            if operation.kind in MATCHING_TABLES:
                lines.extend(self._dict_literal(
                    table,
                    ((repr(text), member(ident)) for text, ident in operation.entries),
                ))
                lines.extend(self._dict_literal(
                    f"{table}_ABBR",
                    ((repr(text), member(ident)) for text, ident in operation.fallback_entries),
                ))
            elif operation.kind in STRING_TABLES:
                lines.extend(self._dict_literal(
                    table,
                    ((member(ident), repr(text)) for ident, text in operation.mapping().items()),
                ))
            elif operation.kind is OperationKind.ITER_VARIANTS:
                lines.extend(self._tuple_literal(table, (member(i) for i in operation.sequence)))
            elif operation.kind in SEQUENCE_TABLES:
                lines.extend(self._tuple_literal(table, (repr(s) for s in operation.sequence)))
        return "\n".join(lines)

    def _dict_literal(self, name: str, items: Iterable[tuple[str, str]]) -> list[str]:
        lines = [f"{name} = {{"]
        seen = set()
        for key, value in items:
            if key in seen:
                continue
            seen.add(key)
            lines.append(f"{INDENT}{key}: {value},")
        lines.append("}")
        lines.append("")
        return lines

    def _tuple_literal(self, name: str, items: Iterable[str]) -> list[str]:
        lines = [f"{name} = ("]
        lines.extend(f"{INDENT}{item}," for item in items)
        lines.append(")")
        lines.append("")
        return lines

    # =========================================================================
    # Operations
    # =========================================================================

    def _method(self, signature: str, doc: str, body: list[str], decorator: str | None = None) -> list[str]:
        lines = [decorator] if decorator else []
        lines.append(f"def {signature}:")
        if doc:
            lines.append(f'{INDENT}"""{doc}"""')
        lines.extend(f"{INDENT}{line}" for line in body)
        return lines

    def _render_as_str(self, plan, operation, prefix) -> list[str]:
        return self._method(
            "as_str(self) -> str",
            operation.doc,
            [f"return {prefix}AS_STR[self]"],
        )

    def _render_as_str_abbr(self, plan, operation, prefix) -> list[str]:
        return self._method(
            "as_str_abbr(self) -> str",
            operation.doc,
            [f"return {prefix}AS_STR_ABBR[self]"],
        )

    def _render_iterator(self, operation: PlannedOperation, prefix: str) -> list[str]:
        return self._method(
            f"{operation.name}(cls)",
            operation.doc,
            [f"return iter({prefix}{operation.name.upper()})"],
            decorator="@classmethod",
        )

    def _render_iter_variants(self, plan, operation, prefix) -> list[str]:
        return self._render_iterator(operation, prefix)

    def _render_iter_variants_as_str(self, plan, operation, prefix) -> list[str]:
        return self._render_iterator(operation, prefix)

    def _render_iter_variants_as_str_abbr(self, plan, operation, prefix) -> list[str]:
        return self._render_iterator(operation, prefix)

    def _render_constant(self, operation: PlannedOperation, returns: str) -> list[str]:
        return self._method(
            f"{operation.name}(cls) -> {returns}",
            operation.doc,
            [f"return {operation.constant!r}"],
            decorator="@classmethod",
        )

    def _render_variants_count(self, plan, operation, prefix) -> list[str]:
        return self._render_constant(operation, "int")

    def _render_variants_list_str(self, plan, operation, prefix) -> list[str]:
        return self._render_constant(operation, "str")

    def _render_variants_list_str_abbr(self, plan, operation, prefix) -> list[str]:
        return self._render_constant(operation, "str")

    def _render_display(self, plan, operation, prefix) -> list[str]:
        lines = self._method(
            "__str__(self) -> str",
            operation.doc,
            [f"return {prefix}DISPLAY[self]"],
        )
        lines.append("")
        lines.extend(self._method(
            "__format__(self, format_spec: str) -> str",
            "",
            [f"return format({prefix}DISPLAY[self], format_spec)"],
        ))
        return lines

    def _render_matcher(
        self,
        signature: str,
        argument: str,
        operation: PlannedOperation,
        table: str,
        error: str,
        type_name: str,
    ) -> list[str]:
        return self._method(
            signature,
            operation.doc,
            [
                f"if isinstance({argument}, str):",
                f"{INDENT}found = {table}.get({argument})",
                f"{INDENT}if found is None:",
                f"{INDENT}{INDENT}found = {table}_ABBR.get({argument})",
                f"{INDENT}if found is not None:",
                f"{INDENT}{INDENT}return found",
                f"raise {error}({argument}, {type_name!r})",
            ],
            decorator="@classmethod",
        )

    def _render_from_str(self, plan, operation, prefix) -> list[str]:
        return self._render_matcher(
            "from_str(cls, text)", "text", operation, f"{prefix}FROM_STR", "ParseError", plan.type_name,
        )

    def _render_serialize(self, plan, operation, prefix) -> list[str]:
        return self._method(
            "serialize(self) -> str",
            operation.doc,
            [f"return {prefix}SERIALIZE[self]"],
        )

    def _render_deserialize(self, plan, operation, prefix) -> list[str]:
        return self._render_matcher(
            "deserialize(cls, value)", "value", operation, f"{prefix}DESERIALIZE", "DeserializeError", plan.type_name,
        )

    def _render_copy(self, plan, operation, prefix) -> list[str]:
        lines = self._method("__copy__(self)", operation.doc, ["return self"])
        lines.append("")
        lines.extend(self._method("__deepcopy__(self, memo)", "", ["return self"]))
        return lines

    def _render_pydantic_hook(self, plan: GenerationPlan) -> list[str]:
        serialization = "None"
        if OperationKind.SERIALIZE in plan:
            serialization = "core_schema.plain_serializer_function_ser_schema(cls.serialize)"

        if OperationKind.DESERIALIZE in plan:
            body = [
                "return core_schema.no_info_plain_validator_function(",
                f"{INDENT}lambda value: value if isinstance(value, cls) else cls.deserialize(value),",
                f"{INDENT}serialization={serialization},",
                ")",
            ]
        else:
            body = [
                "return core_schema.is_instance_schema(",
                f"{INDENT}cls,",
                f"{INDENT}serialization={serialization},",
                ")",
            ]
        lines = self._method(
            "__get_pydantic_core_schema__(cls, source, handler)",
            "Conform to pydantic's validation and serialization protocol.",
            body,
            decorator="@classmethod",
        )
        lines.append("")
        lines.extend(self._method(
            "__get_pydantic_json_schema__(cls, schema, handler)",
            "",
            [f"return {{'type': 'string', 'enum': {list(plan.schema_strings())!r}}}"],
            decorator="@classmethod",
        ))
        return lines


def create_source_emitter(config: GenerationConfig | None = None) -> SourceEmitter:
    """Factory for source emitter."""
    return SourceEmitter(config=config)
