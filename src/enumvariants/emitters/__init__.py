"""
Emitters: generation plans to working code.

- Runtime: attach operations to an existing enum class
- Source: render a Python module
"""

from enumvariants.emitters.runtime import (
    PLAN_ATTRIBUTE,
    RuntimeEmitter,
    create_runtime_emitter,
)
from enumvariants.emitters.source import (
    SourceEmitter,
    table_names,
    table_prefix,
    create_source_emitter,
)

__all__ = [
    # Runtime
    "PLAN_ATTRIBUTE",
    "RuntimeEmitter",
    "create_runtime_emitter",
    # Source
    "SourceEmitter",
    "table_names",
    "table_prefix",
    "create_source_emitter",
]
