"""
Directive parser, turning directive text into Definition Models.

Grammar (several directives may be comma separated):

    directive := NAME
               | NAME "(" value ("," value)* ")"
               | NAME "=" value
    value     := STRING | NUMBER | true | false | PATH

`name = "literal"` is shorthand for `name("literal")`. The parser only
checks that directive names and arities make sense; the kind of a rename
value (literal vs. strategy path) is checked later by the validator.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable

from enumvariants.definitions.models import RenameSpec, TypeAttributes, VariantDefinition
from enumvariants.errors import AttributeValueError, DirectiveSyntaxError
from enumvariants.vocabulary import Capability, ValidationRule, VariantShape


TYPE_DIRECTIVES: tuple[str, ...] = (
    "rename",
    "rename_abbr",
    "display",
    "from_str",
    "serialize",
    "deserialize",
)
VARIANT_DIRECTIVES: tuple[str, ...] = ("skip", "rename", "rename_abbr")

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<number>-?\d+(?:\.\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<punct>[(),=])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class DirectiveValue:
    """A literal or a bare path given to a directive."""
    literal: Any = None
    path: str | None = None

    def to_rename_spec(self) -> RenameSpec:
        if self.path is not None:
            return RenameSpec.of_case(self.path)
        return RenameSpec.of_literal(self.literal)


@dataclass(frozen=True)
class Directive:
    """One parsed directive."""
    name: str
    values: tuple[DirectiveValue, ...] = ()
    assigned: bool = False  # Written as name = value


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    position: int


class _Parser:
    def __init__(self, text: str, type_name: str, variant: str | None):
        self.text = text
        self.type_name = type_name
        self.variant = variant
        self.tokens = self._tokenize()
        self.index = 0

    def _error(self, message: str) -> DirectiveSyntaxError:
        return DirectiveSyntaxError(
            f"{message} in directive {self.text!r}",
            type_name=self.type_name,
            variant=self.variant,
        )

    def _tokenize(self) -> list[_Token]:
        tokens = []
        position = 0
        while position < len(self.text):
            match = _TOKEN_RE.match(self.text, position)
            if match is None:
                raise self._error(f"unexpected character {self.text[position]!r} at {position}")
            kind = match.lastgroup or ""
            if kind != "ws":
                tokens.append(_Token(kind, match.group(), position))
            position = match.end()
        return tokens

    def _peek(self) -> _Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _next(self, expected: str) -> _Token:
        token = self._peek()
        if token is None:
            raise self._error(f"expected {expected}, found end of input")
        self.index += 1
        return token

    def _accept(self, punct: str) -> bool:
        token = self._peek()
        if token is not None and token.kind == "punct" and token.text == punct:
            self.index += 1
            return True
        return False

    def parse(self) -> list[Directive]:
        directives = []
        if self._peek() is not None:
            directives.append(self._directive())
            while self._accept(","):
                directives.append(self._directive())
        token = self._peek()
        if token is not None:
            raise self._error(f"unexpected {token.text!r} at {token.position}")
        return directives

    def _directive(self) -> Directive:
        token = self._next("a directive name")
        if token.kind != "name":
            raise self._error(f"expected a directive name, found {token.text!r}")

        if self._accept("="):
            return Directive(token.text, (self._value(),), assigned=True)

        if self._accept("("):
            values = []
            if not self._accept(")"):
                values.append(self._value())
                while self._accept(","):
                    values.append(self._value())
                if not self._accept(")"):
                    raise self._error("expected ')'")
            return Directive(token.text, tuple(values))

        return Directive(token.text)

    def _value(self) -> DirectiveValue:
        token = self._next("a value")
        if token.kind == "string":
            try:
                return DirectiveValue(literal=json.loads(token.text))
            except json.JSONDecodeError:
                raise self._error(f"invalid string literal {token.text}") from None
        if token.kind == "number":
            number = float(token.text) if "." in token.text else int(token.text)
            return DirectiveValue(literal=number)
        if token.kind == "name":
            if token.text in ("true", "false"):
                return DirectiveValue(literal=token.text == "true")
            return DirectiveValue(path=token.text)
        raise self._error(f"expected a value, found {token.text!r}")


def parse_directives(
    text: str,
    *,
    type_name: str,
    variant: str | None = None,
) -> list[Directive]:
    """
    Parse one directive string.

    Raises:
        DirectiveSyntaxError: text is malformed
    """
    return _Parser(text, type_name, variant).parse()


def _collect(
    texts: Iterable[str],
    allowed: tuple[str, ...],
    *,
    type_name: str,
    variant: str | None,
    rule: ValidationRule,
) -> dict[str, Directive]:
    """Parse all directive strings, rejecting unknown and repeated names."""
    collected: dict[str, Directive] = {}
    for text in texts:
        for directive in parse_directives(text, type_name=type_name, variant=variant):
            if directive.name not in allowed:
                raise AttributeValueError(
                    f"unknown directive `{directive.name}`, "
                    f"expected one of: {', '.join(allowed)}",
                    type_name=type_name,
                    variant=variant,
                    rule=rule,
                )
            if directive.name in collected:
                raise AttributeValueError(
                    f"duplicate directive `{directive.name}`",
                    type_name=type_name,
                    variant=variant,
                    rule=rule,
                )
            collected[directive.name] = directive
    return collected


def _flag(
    directive: Directive | None,
    *,
    type_name: str,
    variant: str | None,
    rule: ValidationRule,
) -> bool:
    if directive is None:
        return False
    if not directive.values and not directive.assigned:
        return True
    if len(directive.values) == 1 and isinstance(directive.values[0].literal, bool):
        return directive.values[0].literal
    raise AttributeValueError(
        f"`{directive.name}` is a flag and takes no value",
        type_name=type_name,
        variant=variant,
        rule=rule,
    )


def _rename(
    directive: Directive | None,
    *,
    type_name: str,
    variant: str | None,
    rule: ValidationRule,
) -> RenameSpec | None:
    if directive is None:
        return None
    if len(directive.values) != 1:
        found = "none" if not directive.values else str(len(directive.values))
        raise AttributeValueError(
            f"`{directive.name}` expects exactly one value, found {found}",
            type_name=type_name,
            variant=variant,
            rule=rule,
        )
    return directive.values[0].to_rename_spec()


def type_attributes_from_directives(
    texts: Iterable[str],
    *,
    type_name: str,
    declared: Iterable[Capability] = (),
) -> TypeAttributes:
    """Build TypeAttributes from type-level directive strings."""
    rule = ValidationRule.TYPE_RENAME
    found = _collect(texts, TYPE_DIRECTIVES, type_name=type_name, variant=None, rule=rule)
    options = {"type_name": type_name, "variant": None, "rule": rule}

    return TypeAttributes(
        rename=_rename(found.get("rename"), **options),
        rename_abbr=_rename(found.get("rename_abbr"), **options),
        display=_flag(found.get("display"), **options),
        from_str=_flag(found.get("from_str"), **options),
        serialize=_flag(found.get("serialize"), **options),
        deserialize=_flag(found.get("deserialize"), **options),
        declared_capabilities=frozenset(declared),
    )


def variant_from_directives(
    ident: str,
    texts: Iterable[str],
    *,
    type_name: str,
    shape: VariantShape = VariantShape.UNIT,
    fields: Iterable[str] = (),
) -> VariantDefinition:
    """Build a VariantDefinition from variant-level directive strings."""
    rule = ValidationRule.VARIANT_RENAME
    found = _collect(texts, VARIANT_DIRECTIVES, type_name=type_name, variant=ident, rule=rule)
    options = {"type_name": type_name, "variant": ident, "rule": rule}

    return VariantDefinition(
        ident=ident,
        shape=shape,
        fields=tuple(fields),
        skip=_flag(found.get("skip"), **options),
        rename=_rename(found.get("rename"), **options),
        rename_abbr=_rename(found.get("rename_abbr"), **options),
    )
