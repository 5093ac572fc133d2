"""
Generation pipeline: Validate -> Resolve -> Synthesize.

One synchronous pass per type definition. Any generation error aborts the
pass for that type; nothing is planned for it.
"""

import time
from typing import Iterable

from enumvariants.config import GenerationConfig, load_config
from enumvariants.definitions.models import TypeDefinition
from enumvariants.errors import GenerationError
from enumvariants.observability import LogContext, get_logger, get_metrics
from enumvariants.resolution import AttributeResolver, ResolutionTable
from enumvariants.synthesis import CodeSynthesizer, GenerationPlan, OperationRequest
from enumvariants.validation import DefinitionValidator


logger = get_logger("pipeline")


class GenerationPipeline:
    """
    Runs validation, resolution and synthesis for type definitions.

    Components are injectable; by default they are built from the config.
    """

    def __init__(
        self,
        config: GenerationConfig | None = None,
        validator: DefinitionValidator | None = None,
        resolver: AttributeResolver | None = None,
        synthesizer: CodeSynthesizer | None = None,
    ):
        self.config = config or load_config()
        self.validator = validator or DefinitionValidator(serde_enabled=self.config.serde_enabled)
        self.resolver = resolver or AttributeResolver()
        self.synthesizer = synthesizer or CodeSynthesizer(OperationRequest.from_config(self.config))

    def resolve(self, definition: TypeDefinition) -> ResolutionTable:
        """
        Validate and resolve a definition without synthesizing.

        Raises:
            GenerationError: definition is invalid or ambiguous
        """
        with LogContext(definition.name):
            logger.debug("Validating %d variants", len(definition.variants))
            self.validator.validate(definition).raise_for_errors()
            logger.debug("Resolving representations")
            return self.resolver.resolve(definition)

    def run(self, definition: TypeDefinition) -> GenerationPlan:
        """
        Run the full pass for one definition.

        Raises:
            GenerationError: the pass was aborted
        """
        metrics = get_metrics()
        started = time.perf_counter()

        with LogContext(definition.name):
            try:
                table = self.resolve(definition)
                logger.debug("Synthesizing operations")
                plan = self.synthesizer.synthesize(definition, table)
            except GenerationError as e:
                metrics.generation_failures.inc()
                logger.warning("Generation aborted: %s", e)
                raise

            metrics.types_generated.inc()
            metrics.variants_resolved.inc(len(table))
            metrics.operations_synthesized.inc(len(plan.operations))
            metrics.generation_duration_seconds.observe(time.perf_counter() - started)
            logger.info(
                "Planned %d operations for %d variants",
                len(plan.operations),
                len(table),
            )
            return plan

    def run_all(self, definitions: Iterable[TypeDefinition]) -> list[GenerationPlan]:
        """Run the pass for every definition, stopping at the first failure."""
        return [self.run(definition) for definition in definitions]


def create_pipeline(config: GenerationConfig | None = None) -> GenerationPipeline:
    """Factory for generation pipeline."""
    return GenerationPipeline(config=config)


def generate(
    definition: TypeDefinition,
    config: GenerationConfig | None = None,
) -> GenerationPlan:
    """Plan a single definition with a fresh pipeline."""
    return create_pipeline(config).run(definition)
