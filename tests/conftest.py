"""
Shared fixtures: the reference definitions used across the test suite.
"""

import logging

import pytest

from enumvariants.config import create_config
from enumvariants.definitions import (
    RenameSpec,
    TypeAttributes,
    TypeDefinition,
    VariantDefinition,
)
from enumvariants.observability import reset_metrics, set_target
from enumvariants.vocabulary import RenameCase


@pytest.fixture(autouse=True)
def clean_state():
    """Fresh metrics and an unconfigured enumvariants logger for every test."""
    reset_metrics()
    set_target(None)
    yield
    logger = logging.getLogger("enumvariants")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def directions() -> TypeDefinition:
    """North/East/South/West with a type-level uppercase rename."""
    return TypeDefinition(
        name="Direction",
        variants=tuple(VariantDefinition(ident=i) for i in ("North", "East", "South", "West")),
        attributes=TypeAttributes(rename=RenameSpec.of_case(RenameCase.UPPERCASE), from_str=True),
    )


@pytest.fixture
def formats() -> TypeDefinition:
    """Xml/Csv/PlainText with literal renames on PlainText."""
    return TypeDefinition(
        name="Format",
        variants=(
            VariantDefinition(ident="Xml"),
            VariantDefinition(ident="Csv"),
            VariantDefinition(
                ident="PlainText",
                rename=RenameSpec.of_literal("plain-text"),
                rename_abbr=RenameSpec.of_literal("txt"),
            ),
        ),
        attributes=TypeAttributes(display=True, from_str=True, serialize=True, deserialize=True),
    )


@pytest.fixture
def weekdays() -> TypeDefinition:
    """Monday is skipped, Tuesday renamed."""
    return TypeDefinition(
        name="Weekday",
        variants=(
            VariantDefinition(ident="Monday", skip=True),
            VariantDefinition(ident="Tuesday", rename=RenameSpec.of_literal("DayAfterMonday")),
            VariantDefinition(ident="Wednesday"),
            VariantDefinition(ident="Thursday"),
        ),
        attributes=TypeAttributes(from_str=True),
    )


@pytest.fixture
def serde_config():
    """Config with the serde feature enabled."""
    return create_config(features={"serde"})
