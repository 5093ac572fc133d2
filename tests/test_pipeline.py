"""Tests for the generation pipeline."""

import logging

import pytest

from enumvariants.config import create_config
from enumvariants.definitions import TypeDefinition, VariantDefinition
from enumvariants.errors import (
    AmbiguousRepresentationError,
    AttributeValueError,
    FieldShapeError,
    StructuralError,
)
from enumvariants.observability import get_metrics
from enumvariants.pipeline import GenerationPipeline, create_pipeline, generate
from enumvariants.synthesis import CodeSynthesizer, OperationRequest
from enumvariants.vocabulary import OperationKind, TypeKind, VariantShape


class TestGenerationPipeline:
    """Validate -> Resolve -> Synthesize."""

    def test_run(self, directions):
        """A valid definition yields a complete plan."""
        plan = create_pipeline(create_config()).run(directions)
        assert plan.type_name == "Direction"
        assert OperationKind.AS_STR in plan
        assert OperationKind.FROM_STR in plan

    def test_resolve_only(self, weekdays):
        """resolve stops before synthesis."""
        table = create_pipeline(create_config()).resolve(weekdays)
        assert [v.display_string for v in table.iterable()] == ["DayAfterMonday", "Wednesday", "Thursday"]

    def test_run_all(self, directions, weekdays):
        """Every definition is planned in order."""
        plans = create_pipeline(create_config()).run_all([directions, weekdays])
        assert [p.type_name for p in plans] == ["Direction", "Weekday"]

    def test_config_drives_components(self, formats, serde_config):
        """Features reach the validator, families reach the synthesizer."""
        pipeline = GenerationPipeline(config=serde_config.with_features())
        assert pipeline.validator.serde_enabled is True
        plan = pipeline.run(formats)
        assert OperationKind.SERIALIZE in plan

        pipeline = create_pipeline(create_config(features={"serde"}, listing=False))
        assert OperationKind.VARIANTS_LIST_STR not in pipeline.run(formats)

    def test_injected_components(self, directions):
        """Components can be replaced."""
        synthesizer = CodeSynthesizer(OperationRequest(iteration=False, listing=False))
        pipeline = GenerationPipeline(config=create_config(), synthesizer=synthesizer)
        assert pipeline.run(directions).operation_names() == ["as_str", "as_str_abbr", "from_str", "copy"]


class TestGenerationFailures:
    """Failures abort the pass with zero operations."""

    def test_record_type(self):
        """Applying generation to a record type fails structurally."""
        definition = TypeDefinition(name="Point", kind=TypeKind.STRUCT)
        with pytest.raises(StructuralError):
            generate(definition, create_config())

    def test_tuple_variant(self):
        """One tuple-shaped variant aborts the whole type."""
        definition = TypeDefinition(
            name="Shape",
            variants=(
                VariantDefinition(ident="Dot"),
                VariantDefinition(ident="Circle", shape=VariantShape.TUPLE, fields=("0",)),
            ),
        )
        with pytest.raises(FieldShapeError):
            generate(definition, create_config())
        metrics = get_metrics()
        assert metrics.operations_synthesized.value == 0
        assert metrics.generation_failures.value == 1

    def test_serde_without_feature(self, formats):
        """serialize without the serde feature is an attribute error."""
        with pytest.raises(AttributeValueError, match="serde"):
            generate(formats, create_config())

    def test_ambiguous(self):
        """Resolution collisions abort the pass."""
        definition = TypeDefinition(
            name="Month",
            variants=(VariantDefinition(ident="March"), VariantDefinition(ident="Marsday")),
        )
        with pytest.raises(AmbiguousRepresentationError):
            generate(definition, create_config())

    def test_failure_logged(self, caplog):
        """Failures are logged at WARNING with the type as target."""
        definition = TypeDefinition(name="Point", kind=TypeKind.STRUCT)
        with caplog.at_level(logging.WARNING, logger="enumvariants"):
            with pytest.raises(StructuralError):
                generate(definition, create_config())
        [record] = [r for r in caplog.records if r.name == "enumvariants.pipeline"]
        assert record.levelno == logging.WARNING
        assert "Point" in record.getMessage()


class TestPipelineMetrics:
    """Successful passes are counted."""

    def test_counts(self, directions, weekdays):
        """Types, variants and operations are recorded."""
        pipeline = create_pipeline(create_config())
        first = pipeline.run(directions)
        second = pipeline.run(weekdays)

        metrics = get_metrics()
        assert metrics.types_generated.value == 2
        assert metrics.variants_resolved.value == 8
        assert metrics.operations_synthesized.value == len(first.operations) + len(second.operations)
        assert metrics.generation_duration_seconds.count == 2
