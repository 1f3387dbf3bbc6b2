#!/usr/bin/env python3

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from twfuse import __version__
from twfuse.merge import MergeEngine, MergeOptions, join, set_merge_options
from twfuse.merge.core import ArbitraryCollision, Collision, DefaultCollision
from twfuse.tw_parser import TW_DSL_VERSION
from twfuse.tw_variants import Registry


def describe_collision(collision: Optional[Collision]) -> Dict:
    """Describe a collision scope as a JSON-friendly dict."""
    if collision is None:
        return {}
    if isinstance(collision, DefaultCollision):
        key = {"collision_id": collision.collision_id}
    else:
        key = {"label": collision.label}
    return {
        **key,
        "variants": list(collision.variants),
        "important": collision.important,
    }


def parse_assignments(pairs: List[str], parser: argparse.ArgumentParser) -> Dict[str, str]:
    """Parse ``field=option`` pairs given with --set."""
    choices = {}
    for pair in pairs:
        if "=" not in pair:
            parser.error(f"--set expects field=option, got {pair!r}")
        field_name, option = pair.split("=", 1)
        choices[field_name.strip()] = option.strip()
    return choices


def write_explanation(engine: MergeEngine, classes: List[str], as_json: bool, out):
    resolutions = engine.resolve(classes)
    if as_json:
        json.dump(
            [
                {
                    "class": r.source,
                    "kept": r.kept,
                    **describe_collision(r.collision),
                }
                for r in resolutions
            ],
            out,
            indent=2,
        )
        out.write("\n")
        return
    for r in resolutions:
        status = "keep" if r.kept else "drop"
        scope = describe_collision(r.collision)
        if scope:
            group = scope.get("collision_id") or f"[{scope['label']}]"
            variants = ":".join(scope["variants"]) or "-"
            important = "!" if scope["important"] else ""
            out.write(f"{status}\t{r.source}\t{variants}\t{important}{group}\n")
        else:
            out.write(f"{status}\t{r.source}\t\t(no collision)\n")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Merge utility CSS classes, resolving conflicts (last class wins)."
    )
    parser.add_argument(
        "classes", nargs="*", help="Class strings (read from stdin when omitted)"
    )
    parser.add_argument(
        "--join",
        action="store_true",
        help="Only normalize whitespace, without conflict resolution",
    )
    parser.add_argument("--prefix", default="", help="Utility prefix, e.g. tw-")
    parser.add_argument("--separator", default=":", help="Variant separator")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Show the keep/drop decision and collision scope of every class",
    )
    parser.add_argument(
        "--json", action="store_true", help="Emit --explain output as JSON"
    )
    parser.add_argument(
        "--definitions", type=str, default=None, help="Variant definition file"
    )
    parser.add_argument(
        "--component",
        type=str,
        default=None,
        help="Component to render from --definitions; classes become the override",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="FIELD=OPTION",
        help="Choose a variant option for a component field (repeatable)",
    )
    parser.add_argument("--theme", type=str, default=None, help="Theme to render")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    args = parser.parse_args(argv)

    if args.version:
        print("Version information:")
        print(f"  twfuse: {__version__}")
        print(f"  DSL: {TW_DSL_VERSION}")
        return 0

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )
    logger = logging.getLogger("twmerge")

    if bool(args.definitions) != bool(args.component):
        parser.error("--definitions and --component must be given together")
    if args.explain and (args.component or args.join):
        parser.error("--explain cannot be combined with --component or --join")

    try:
        options = MergeOptions(prefix=args.prefix, separator=args.separator)
    except ValueError as e:
        parser.error(str(e))

    classes = args.classes
    if not classes and not args.component:
        classes = [sys.stdin.read()]

    if args.explain:
        write_explanation(MergeEngine(options), classes, args.json, sys.stdout)
        return 0

    if args.component:
        # Components fuse with the process-wide options
        set_merge_options(options)
        logger.info("Loading definitions from %s", args.definitions)
        registry = Registry.from_file(args.definitions)
        component = registry.component(args.component)
        choices = parse_assignments(args.assignments, parser)
        result = component.with_class(join(classes), args.theme, **choices)
    elif args.join:
        result = join(classes)
    else:
        result = MergeEngine(options).merge(classes)

    sys.stdout.write(result + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
