"""
Generation configuration.

Optional features and the requested operation families for a generation
pass. Values fall back to the ENUMVARIANTS_FEATURES environment variable
when loaded with load_config().
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping


SERDE_FEATURE = "serde"
KNOWN_FEATURES = frozenset({SERDE_FEATURE})

FEATURES_ENV_VAR = "ENUMVARIANTS_FEATURES"


@dataclass(frozen=True)
class GenerationConfig:
    """Configuration for a generation pass."""
    features: frozenset[str] = field(default_factory=frozenset)
    iteration: bool = True      # iter_variants family
    listing: bool = True        # variants_list_str family
    header: bool = True         # Banner comment in generated source

    def __post_init__(self):
        unknown = set(self.features) - KNOWN_FEATURES
        if unknown:
            raise ValueError(
                f"Unknown feature(s) {sorted(unknown)}, "
                f"expected any of {sorted(KNOWN_FEATURES)}"
            )

    @property
    def serde_enabled(self) -> bool:
        return SERDE_FEATURE in self.features

    def with_features(self, *features: str) -> "GenerationConfig":
        """Return copy with additional features enabled."""
        return replace(self, features=self.features | frozenset(features))


def parse_features(value: str | None) -> frozenset[str]:
    """Parse a comma-separated feature list."""
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def load_config(
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> GenerationConfig:
    """
    Build a config from the environment plus explicit overrides.

    Args:
        environ: Environment mapping (default: os.environ)
        overrides: GenerationConfig fields taking precedence
    """
    environ = os.environ if environ is None else environ
    values: dict[str, Any] = {"features": parse_features(environ.get(FEATURES_ENV_VAR))}
    values.update(overrides)
    values["features"] = frozenset(values["features"])
    return GenerationConfig(**values)


def create_config(**kwargs: Any) -> GenerationConfig:
    """Factory for configs that ignores the environment."""
    if "features" in kwargs:
        kwargs["features"] = frozenset(kwargs["features"])
    return GenerationConfig(**kwargs)
