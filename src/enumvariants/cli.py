#!/usr/bin/env python3
"""
enumvariants command line.

Usage:
    enumvariants generate <definitions.json> [-o module.py]
    enumvariants check <definitions.json>
    enumvariants table <definitions.json>

Examples:
    # Render a module from a definitions file
    enumvariants generate formats.json -o formats.py

    # Validate and plan every type, one [PASS]/[FAIL] line each
    enumvariants check formats.json --features serde

    # Show the resolved display and abbreviated strings
    enumvariants table formats.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from enumvariants.config import GenerationConfig, load_config, parse_features
from enumvariants.definitions import load_definitions
from enumvariants.emitters import SourceEmitter
from enumvariants.errors import GenerationError
from enumvariants.observability import configure_logging, get_metrics
from enumvariants.pipeline import GenerationPipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enumvariants",
        description="Generate string representations and helpers for unit-only enums",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Directives:
  type level     rename(uppercase|lowercase), rename_abbr(uppercase|lowercase),
                 display, from_str, serialize, deserialize
  variant level  skip, rename("text"|uppercase|lowercase),
                 rename_abbr("text"|uppercase|lowercase)

serialize and deserialize require the serde feature (--features serde or
ENUMVARIANTS_FEATURES=serde).
        """,
    )

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--features",
                        help="Comma-separated features to enable (default: $ENUMVARIANTS_FEATURES)")
    common.add_argument("--no-iteration", action="store_true",
                        help="Do not generate the iter_variants family")
    common.add_argument("--no-listing", action="store_true",
                        help="Do not generate the variants_list_str family")
    common.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose output")
    common.add_argument("--json-logs", action="store_true",
                        help="Emit logs as JSON lines")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", parents=[common],
                                     help="Render a Python module")
    generate.add_argument("definitions", help="Definitions file (JSON)")
    generate.add_argument("-o", "--output",
                          help="Output module path (default: stdout)")
    generate.add_argument("--no-header", action="store_true",
                          help="Omit the generated-file banner")

    check = subparsers.add_parser("check", parents=[common],
                                  help="Validate and plan every type")
    check.add_argument("definitions", help="Definitions file (JSON)")

    table = subparsers.add_parser("table", parents=[common],
                                  help="Print resolution tables")
    table.add_argument("definitions", help="Definitions file (JSON)")

    return parser


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    overrides = {
        "iteration": not args.no_iteration,
        "listing": not args.no_listing,
        "header": not getattr(args, "no_header", False),
    }
    if args.features is not None:
        overrides["features"] = parse_features(args.features)
    return load_config(**overrides)


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_generate(args: argparse.Namespace, pipeline: GenerationPipeline) -> int:
    definitions = load_definitions(args.definitions)
    plans = pipeline.run_all(definitions)
    source = SourceEmitter(pipeline.config).emit_module(plans)

    if args.output:
        Path(args.output).write_text(source, encoding="utf-8")
        print(f"[PASS] Generated {len(plans)} types to: {args.output}")
    else:
        sys.stdout.write(source)
    return 0


def cmd_check(args: argparse.Namespace, pipeline: GenerationPipeline) -> int:
    definitions = load_definitions(args.definitions)
    failed = 0

    for definition in definitions:
        try:
            plan = pipeline.run(definition)
        except GenerationError as e:
            failed += 1
            print(f"[FAIL] {definition.name}")
            print(f"  - {e}")
            continue
        print(
            f"[PASS] {definition.name} "
            f"({len(plan.variants)} variants, {len(plan.operations)} operations)"
        )
        if args.verbose:
            print(f"  operations: {', '.join(plan.operation_names())}")

    print(f"\n{len(definitions) - failed} passed, {failed} failed")
    return 1 if failed else 0


def cmd_table(args: argparse.Namespace, pipeline: GenerationPipeline) -> int:
    definitions = load_definitions(args.definitions)

    for definition in definitions:
        table = pipeline.resolve(definition)
        rows = table.to_rows()
        print(f"\n{table.type_name} ({len(rows)} variants)")
        print("=" * 80)
        if not rows:
            continue
        ident_width = max(len("ident"), *(len(row["ident"]) for row in rows))
        display_width = max(len("display"), *(len(row["display"]) for row in rows))
        abbr_width = max(len("abbr"), *(len(row["abbr"]) for row in rows))
        print(f"{'ident':{ident_width}s}  {'display':{display_width}s}  {'abbr':{abbr_width}s}  iterable")
        for row in rows:
            iterable = "yes" if row["iterable"] else "no (skip)"
            print(
                f"{row['ident']:{ident_width}s}  {row['display']:{display_width}s}  "
                f"{row['abbr']:{abbr_width}s}  {iterable}"
            )
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "check": cmd_check,
    "table": cmd_table,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        json_format=args.json_logs,
    )

    try:
        pipeline = GenerationPipeline(config=config_from_args(args))
        status = COMMANDS[args.command](args, pipeline)
    except GenerationError as e:
        print(f"[FAIL] {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"[FAIL] {args.definitions}: invalid definitions document", file=sys.stderr)
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            print(f"  - {location}: {error['msg']}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"[FAIL] {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(json.dumps(get_metrics().to_dict(), indent=2), file=sys.stderr)
    return status


if __name__ == "__main__":
    sys.exit(main())
