"""Tests for the @variants decorator."""

from enum import Enum, auto

import pytest
from pydantic import BaseModel, ValidationError

from enumvariants import RenameCase, member, variants
from enumvariants.config import create_config
from enumvariants.errors import (
    AttributeValueError,
    ConflictingCapabilityError,
    FieldShapeError,
    ParseError,
    StructuralError,
)


class TestDecorator:
    """Generation at class creation."""

    def test_bare_decorator(self):
        """@variants without arguments uses the identifiers."""
        @variants
        class Animal(Enum):
            Cat = auto()
            Horse = auto()

        assert Animal.Cat.as_str() == "Cat"
        assert Animal.Horse.as_str_abbr() == "Hor"
        assert Animal.variants_list_str() == '"Cat", "Horse"'

    def test_directions(self):
        """Type-level uppercase with parsing."""
        @variants(rename=RenameCase.UPPERCASE, from_str=True)
        class Direction(Enum):
            North = auto()
            East = auto()
            South = auto()
            West = auto()

        assert list(Direction.iter_variants_as_str()) == ["NORTH", "EAST", "SOUTH", "WEST"]
        assert list(Direction.iter_variants_as_str_abbr()) == ["NOR", "EAS", "SOU", "WES"]
        assert Direction.from_str("EAS") is Direction.East

    def test_type_rename_as_string(self):
        """Type-level strategies may be given by name."""
        @variants(rename="lowercase", rename_abbr="uppercase")
        class Level(Enum):
            Debug = auto()
            Info = auto()

        assert Level.Debug.as_str() == "debug"
        assert Level.Info.as_str_abbr() == "INF"

    def test_member_directives(self):
        """Weekday example through member()."""
        @variants(members={
            "Monday": member(skip=True),
            "Tuesday": member(rename="DayAfterMonday"),
        })
        class Weekday(Enum):
            Monday = auto()
            Tuesday = auto()
            Wednesday = auto()
            Thursday = auto()

        assert Weekday.variants_list_str() == '"DayAfterMonday", "Wednesday", "Thursday"'
        assert Weekday.variants_count() == 3
        assert Weekday.Monday.as_str() == "Monday"

    def test_formats_with_serde(self):
        """Formats example with display and serde."""
        @variants(
            display=True,
            from_str=True,
            serialize=True,
            deserialize=True,
            members={"PlainText": member(rename="plain-text", rename_abbr="txt")},
            config=create_config(features={"serde"}),
        )
        class Format(Enum):
            Xml = auto()
            Csv = auto()
            PlainText = auto()

        assert Format.Xml.as_str_abbr() == "Xml"
        assert Format.PlainText.as_str_abbr() == "txt"
        assert f"{Format.PlainText}" == "plain-text"

        class Export(BaseModel):
            format: Format

        assert Export.model_validate_json('{"format": "txt"}').format is Format.PlainText
        assert Export(format=Format.PlainText).model_dump_json() == '{"format":"plain-text"}'
        with pytest.raises(ValidationError):
            Export(format="json")

    def test_parse_error(self):
        """Unknown strings raise ParseError."""
        @variants(from_str=True)
        class Toggle(Enum):
            On = auto()
            Off = auto()

        with pytest.raises(ParseError):
            Toggle.from_str("on")


class TestDecoratorFailures:
    """Generation errors fail the class statement."""

    def test_record_type(self):
        """Records are rejected."""
        with pytest.raises(StructuralError):
            @variants
            class Point:
                x = 0

    def test_tuple_variant(self):
        """Data-carrying members are rejected."""
        with pytest.raises(FieldShapeError) as exc_info:
            @variants
            class Shape(Enum):
                Dot = auto()
                Circle = (0, 1)

        assert exc_info.value.location == "Shape::Circle"

    def test_type_literal_rejected(self):
        """A non-strategy type-level rename is rejected."""
        with pytest.raises(AttributeValueError):
            @variants(rename=5)
            class Bad(Enum):
                A = auto()

    def test_serde_needs_feature(self):
        """serialize needs the serde feature."""
        with pytest.raises(AttributeValueError, match="serde"):
            @variants(serialize=True, config=create_config())
            class Plain(Enum):
                A = auto()

    def test_explicit_copy_conflicts(self):
        """A hand-written __copy__ conflicts with the generated one."""
        with pytest.raises(ConflictingCapabilityError):
            @variants
            class Handmade(Enum):
                A = auto()

                def __copy__(self):
                    return self
