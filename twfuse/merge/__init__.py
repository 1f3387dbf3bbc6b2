"""
twfuse merge package - class tokenization and conflict resolution.

This package provides the conflict-resolving merge of utility classes, broken
down into focused modules:

- core: Core data structures (ClassToken, collisions, MergeOptions)
- arbitrary: Bracket payloads and typed value extraction
- tokenizer: Splitting class strings into ClassToken records
- classifier: Static utility -> collision id table
- collisions: Static shorthand -> longhand implication table
- merge_engine: The backward merge pass and the join/merge entry points
"""

from .arbitrary import ArbitraryValue, ArbitraryValueError, Length
from .classifier import classify, get_collision_id
from .collisions import get_collisions
from .core import (
    ArbitraryCollision,
    ClassToken,
    DefaultCollision,
    MergeOptions,
    OptionsCell,
    get_merge_options,
    set_merge_options,
)
from .merge_engine import MergeEngine, Resolution, join, merge
from .tokenizer import Tokenizer, parse_classes

__all__ = [
    "ArbitraryCollision",
    "ArbitraryValue",
    "ArbitraryValueError",
    "ClassToken",
    "DefaultCollision",
    "Length",
    "MergeEngine",
    "MergeOptions",
    "OptionsCell",
    "Resolution",
    "Tokenizer",
    "classify",
    "get_collision_id",
    "get_collisions",
    "get_merge_options",
    "join",
    "merge",
    "parse_classes",
    "set_merge_options",
]
