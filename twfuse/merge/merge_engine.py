"""
Conflict resolution for the twfuse merge core.

Walks the parsed classes from last to first. Each token claims its collision
(and everything that collision implies) within its variant/importance scope;
a token whose own collision is already claimed by a later token is dropped.
Tokens without a collision are always kept.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .classifier import CollisionIdFn, classify
from .collisions import CollisionsFn, implied_collisions
from .core import (
    ArbitraryCollision,
    ClassToken,
    Collision,
    DefaultCollision,
    MergeOptions,
    get_merge_options,
)
from .tokenizer import ParsedClass, Tokenizer, iter_atoms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """The merge decision for one input class."""

    source: str
    collision: Optional[Collision]
    kept: bool


class MergeEngine:
    """
    Merges class strings, resolving conflicts between utilities.

    Args:
        options: Prefix/separator; the process-wide options when None
        collision_id_fn: Consulted before the static classification table
        collisions_fn: Consulted before the static implication table
    """

    def __init__(
        self,
        options: Optional[MergeOptions] = None,
        collision_id_fn: Optional[CollisionIdFn] = None,
        collisions_fn: Optional[CollisionsFn] = None,
    ):
        self.options = options if options is not None else get_merge_options()
        self.collision_id_fn = collision_id_fn
        self.collisions_fn = collisions_fn
        self.tokenizer = Tokenizer(self.options)

    def collision_for(self, parsed: ParsedClass) -> Optional[Collision]:
        """
        Determine the scope key a parsed class competes under.

        Returns:
            DefaultCollision for classified utilities, ArbitraryCollision for
            unclassified ``[label:value]`` payloads, None for opaque classes
        """
        if not isinstance(parsed, ClassToken):
            return None
        collision_id = classify(parsed, self.collision_id_fn)
        if collision_id is not None:
            return DefaultCollision(parsed.variants, parsed.important, collision_id)
        label = parsed.arbitrary.label if parsed.arbitrary is not None else None
        if label is not None:
            return ArbitraryCollision(parsed.variants, parsed.important, label)
        logger.debug("No collision id for %r", parsed.source)
        return None

    def resolve(self, classes: Iterable) -> List[Resolution]:
        """
        Decide which classes survive, returning one Resolution per class in input order.

        Args:
            classes: Class strings (or nested iterables of them)

        Returns:
            List of Resolution objects in original order
        """
        parsed_classes = self.tokenizer.tokenize(classes)
        claimed: Set[Collision] = set()
        decisions: List[Resolution] = []

        for parsed in reversed(parsed_classes):
            source = parsed.source if isinstance(parsed, ClassToken) else parsed
            collision = self.collision_for(parsed)
            if collision is None:
                decisions.append(Resolution(source, None, True))
                continue

            if collision in claimed:
                logger.debug("Dropping %r: %s already claimed", source, collision)
                decisions.append(Resolution(source, collision, False))
                continue

            claimed.add(collision)
            if isinstance(collision, DefaultCollision):
                for implied in implied_collisions(
                    collision.collision_id, self.collisions_fn
                ):
                    claimed.add(
                        DefaultCollision(collision.variants, collision.important, implied)
                    )
            decisions.append(Resolution(source, collision, True))

        decisions.reverse()
        return decisions

    def merge(self, classes: Iterable) -> str:
        """Merge classes into a single string, later classes taking precedence."""
        return " ".join(r.source for r in self.resolve(classes) if r.kept)


def join(*classes) -> str:
    """
    Join class strings without conflict resolution.

    Splits on whitespace, drops empty and falsy entries and rejoins with single
    spaces.
    """
    return " ".join(iter_atoms(classes))


def merge(
    *classes,
    options: Optional[MergeOptions] = None,
    collision_id_fn: Optional[CollisionIdFn] = None,
    collisions_fn: Optional[CollisionsFn] = None,
) -> str:
    """
    Merge class strings, resolving conflicts so the right-most class wins.

    Args:
        *classes: Class strings, None/False, or iterables of them
        options: Per-call options; the process-wide options when None
        collision_id_fn: Custom classifier consulted before the static table
        collisions_fn: Custom implication lookup consulted before the static table

    Returns:
        The merged class string
    """
    engine = MergeEngine(options, collision_id_fn, collisions_fn)
    return engine.merge(classes)
