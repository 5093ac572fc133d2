"""
The @variants class decorator.

Runs the generation pipeline when the class is created and attaches the
planned operations to it:

    @variants(rename=RenameCase.UPPERCASE, from_str=True)
    class Direction(Enum):
        North = auto()
        East = auto()

    Direction.North.as_str()        # "NORTH"
    Direction.from_str("EAS")       # Direction.East
"""

from typing import Any, Mapping

from enumvariants.config import GenerationConfig
from enumvariants.definitions.introspect import MemberDirectives, definition_from_enum
from enumvariants.emitters.runtime import RuntimeEmitter
from enumvariants.pipeline import GenerationPipeline


def variants(
    _cls: type | None = None,
    *,
    rename: Any = None,
    rename_abbr: Any = None,
    display: bool = False,
    from_str: bool = False,
    serialize: bool = False,
    deserialize: bool = False,
    members: Mapping[str, MemberDirectives | Mapping[str, Any]] | None = None,
    config: GenerationConfig | None = None,
):
    """
    Generate string representations and helpers for a unit-only enum.

    Usable bare (@variants) or with directives. Variant-level directives
    are given per member name through `members` using member().

    Raises:
        GenerationError: the class cannot be generated for; the class
            statement fails and nothing is attached
    """

    def decorate(cls: type) -> type:
        definition = definition_from_enum(
            cls,
            rename=rename,
            rename_abbr=rename_abbr,
            display=display,
            from_str=from_str,
            serialize=serialize,
            deserialize=deserialize,
            members=members,
        )
        plan = GenerationPipeline(config=config).run(definition)
        return RuntimeEmitter().emit(plan, cls)

    if _cls is not None:
        return decorate(_cls)
    return decorate
