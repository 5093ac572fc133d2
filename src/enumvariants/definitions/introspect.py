"""
Enum introspection, building a TypeDefinition from a Python class.

This is the front-end behind the @variants decorator. It only reads the
class once, at definition time; generated operations never reflect.
"""

import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from enumvariants.definitions.models import (
    RenameSpec,
    TypeAttributes,
    TypeDefinition,
    VariantDefinition,
)
from enumvariants.errors import AttributeValueError, StructuralError
from enumvariants.vocabulary import Capability, RenameCase, TypeKind, VariantShape


@dataclass(frozen=True)
class MemberDirectives:
    """Variant-level directives for one enum member."""
    skip: bool = False
    rename: Any = None
    rename_abbr: Any = None


def member(
    *,
    skip: bool = False,
    rename: Any = None,
    rename_abbr: Any = None,
) -> MemberDirectives:
    """
    Declare variant-level directives.

    A plain string is a literal (`rename="plain-text"`); use
    RenameCase.UPPERCASE / RenameCase.LOWERCASE for case strategies.
    """
    return MemberDirectives(skip=skip, rename=rename, rename_abbr=rename_abbr)


def type_rename_spec(value: Any) -> RenameSpec | None:
    """Coerce a type-level rename value; strings name a strategy."""
    if value is None or isinstance(value, RenameSpec):
        return value
    if isinstance(value, (RenameCase, str)):
        return RenameSpec.of_case(value)
    return RenameSpec.of_literal(value)


def variant_rename_spec(value: Any) -> RenameSpec | None:
    """Coerce a variant-level rename value; strings are literals."""
    if value is None or isinstance(value, RenameSpec):
        return value
    if isinstance(value, RenameCase):
        return RenameSpec.of_case(value)
    return RenameSpec.of_literal(value)


def classify_kind(obj: Any) -> TypeKind:
    """Classify the object a generation pass was applied to."""
    if isinstance(obj, type) and issubclass(obj, Enum):
        return TypeKind.ENUM
    if typing.get_origin(obj) in (typing.Union, types.UnionType):
        return TypeKind.UNION
    if isinstance(obj, type):
        return TypeKind.STRUCT
    raise StructuralError(
        f"expected a class, got {type(obj).__name__}",
        type_name=getattr(obj, "__name__", repr(obj)),
    )


def classify_shape(value: Any) -> tuple[VariantShape, tuple[str, ...]]:
    """Classify a member value as unit or data-carrying."""
    if isinstance(value, dict):
        return VariantShape.NAMED, tuple(str(key) for key in value)
    if isinstance(value, tuple):
        if len(value) == 1:
            return VariantShape.NEWTYPE, ("0",)
        return VariantShape.TUPLE, tuple(str(i) for i in range(len(value)))
    return VariantShape.UNIT, ()


def declared_capabilities(cls: type) -> frozenset[Capability]:
    """Capabilities the class itself implements explicitly."""
    declared = set()
    if "__copy__" in cls.__dict__ or "__deepcopy__" in cls.__dict__:
        declared.add(Capability.COPY)
    return frozenset(declared)


def _coerce_member_directives(value: MemberDirectives | Mapping[str, Any]) -> MemberDirectives:
    if isinstance(value, MemberDirectives):
        return value
    return MemberDirectives(**value)


def definition_from_enum(
    obj: Any,
    *,
    rename: Any = None,
    rename_abbr: Any = None,
    display: bool = False,
    from_str: bool = False,
    serialize: bool = False,
    deserialize: bool = False,
    members: Mapping[str, MemberDirectives | Mapping[str, Any]] | None = None,
) -> TypeDefinition:
    """
    Build a TypeDefinition from an enum class and its directives.

    Aliases (members sharing a value) are not variants of their own and are
    excluded. Non-enum targets produce a definition of the matching kind so
    that the validator reports them.

    Raises:
        StructuralError: obj is not a class
        AttributeValueError: directives given for an unknown member
    """
    kind = classify_kind(obj)
    name = getattr(obj, "__name__", None) or repr(obj)
    members = dict(members or {})

    variants: list[VariantDefinition] = []
    if kind is TypeKind.ENUM:
        for enum_member in obj:
            shape, fields = classify_shape(enum_member.value)
            directives = _coerce_member_directives(members.pop(enum_member.name, MemberDirectives()))
            variants.append(VariantDefinition(
                ident=enum_member.name,
                shape=shape,
                fields=fields,
                skip=directives.skip,
                rename=variant_rename_spec(directives.rename),
                rename_abbr=variant_rename_spec(directives.rename_abbr),
            ))

    if members:
        raise AttributeValueError(
            "directives given for an unknown variant",
            type_name=name,
            variant=next(iter(members)),
        )

    attributes = TypeAttributes(
        rename=type_rename_spec(rename),
        rename_abbr=type_rename_spec(rename_abbr),
        display=display,
        from_str=from_str,
        serialize=serialize,
        deserialize=deserialize,
        declared_capabilities=(
            declared_capabilities(obj) if isinstance(obj, type) else frozenset()
        ),
    )

    return TypeDefinition(
        name=name,
        kind=kind,
        variants=tuple(variants),
        attributes=attributes,
    )
