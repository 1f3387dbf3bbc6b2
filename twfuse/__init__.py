"""
twfuse - fuse utility CSS classes, resolving conflicts.

Two main utilities are included:

1. Fuse: join class strings, optionally resolving conflicts so that the
   right-most class wins per CSS property group (``merge``), or simply
   normalizing whitespace (``join``).
2. Variants: declare components and their variants (in the twfuse DSL or as
   AST objects) and render them through the merge.

    >>> merge("py-2 px-4", "p-4")
    'p-4'
    >>> merge("p-4", "py-2")
    'p-4 py-2'
"""

from twfuse.merge import (
    ArbitraryValue,
    ArbitraryValueError,
    ClassToken,
    MergeEngine,
    MergeOptions,
    get_collision_id,
    get_collisions,
    get_merge_options,
    join,
    merge,
    parse_classes,
    set_merge_options,
)
from twfuse.tw_ast import VariantDefinitionError
from twfuse.tw_parser import parse_file, parse_string
from twfuse.tw_variants import Component, ComponentBuilder, Registry, Variant

__version__ = "0.1.0"

__all__ = [
    "ArbitraryValue",
    "ArbitraryValueError",
    "ClassToken",
    "Component",
    "ComponentBuilder",
    "MergeEngine",
    "MergeOptions",
    "Registry",
    "Variant",
    "VariantDefinitionError",
    "get_collision_id",
    "get_collisions",
    "get_merge_options",
    "join",
    "merge",
    "parse_classes",
    "parse_file",
    "parse_string",
    "set_merge_options",
]
