"""
Class string tokenization for the twfuse merge core.

Splits whitespace-delimited class strings into ClassToken records: variant
chain, importance and negative markers, prefix stripping and bracket
(arbitrary value) syntax. Atoms that cannot be parsed are returned unchanged as
raw strings, so tokenization never fails.
"""

import logging
from functools import lru_cache
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .arbitrary import ArbitraryValue
from .core import ClassToken, MergeOptions, get_merge_options

logger = logging.getLogger(__name__)

ParsedClass = Union[ClassToken, str]

BRACKET_PAIRS = {"[": "]", "(": ")"}


def iter_atoms(classes) -> Iterator[str]:
    """
    Yield every whitespace-delimited atom from a nested collection of class strings.

    None, False and empty strings are skipped so conditional classes can be
    passed inline (``cond and "p-4"``).
    """
    if classes is None or classes is False:
        return
    if isinstance(classes, str):
        yield from classes.split()
        return
    for item in classes:
        yield from iter_atoms(item)


def _split_outside_brackets(text: str, separator: str) -> Optional[List[str]]:
    """Split on ``separator`` where it is not nested in [] or (); None if unbalanced."""
    parts = []
    stack = []
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in BRACKET_PAIRS:
            stack.append(BRACKET_PAIRS[ch])
        elif ch in ("]", ")"):
            if not stack or stack.pop() != ch:
                return None
        elif not stack and text.startswith(separator, i):
            parts.append(text[start:i])
            i += len(separator)
            start = i
            continue
        i += 1
    if stack:
        return None
    parts.append(text[start:])
    return parts


def _closing_bracket(text: str, start: int) -> int:
    """Index of the ``]`` matching the ``[`` at ``start``, or -1."""
    depth = 0
    for i in range(start, len(text)):
        if text[i] == "[":
            depth += 1
        elif text[i] == "]":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _split_base(
    base: str,
) -> Optional[Tuple[Tuple[str, ...], Optional[ArbitraryValue]]]:
    """Split a base utility into its dash-separated elements and bracket payload."""
    open_idx = base.find("[")
    if open_idx == -1:
        if "]" in base:
            return None
        elements = tuple(base.split("-"))
        if any(not e for e in elements):
            return None
        return elements, None

    # Either the whole base is bracketed, or brackets follow "name-"
    if open_idx > 0 and base[open_idx - 1] != "-":
        return None
    close_idx = _closing_bracket(base, open_idx)
    if close_idx == -1:
        return None
    tail = base[close_idx + 1 :]
    if tail and not tail.startswith("/"):
        return None
    inner = base[open_idx + 1 : close_idx]
    if not inner:
        return None

    name = base[: open_idx - 1] if open_idx else ""
    elements = tuple(name.split("-")) if name else ()
    if any(not e for e in elements):
        return None
    return elements, ArbitraryValue(inner)


@lru_cache(maxsize=4096)
def parse_atom(atom: str, prefix: str = "", separator: str = ":") -> ParsedClass:
    """
    Parse a single class atom into a ClassToken.

    Args:
        atom: One class name without surrounding whitespace
        prefix: Required utility prefix (e.g. ``tw-``), empty for none
        separator: Variant separator

    Returns:
        ClassToken, or the atom itself when it cannot be parsed
    """
    segments = _split_outside_brackets(atom, separator)
    if segments is None:
        logger.debug("Unbalanced brackets in %r", atom)
        return atom

    variants, base = tuple(segments[:-1]), segments[-1]
    if not base or any(not v for v in variants):
        return atom

    important = False
    if base.startswith("!"):
        important, base = True, base[1:]
    elif base.endswith("!"):
        important, base = True, base[:-1]

    negative = False
    if base.startswith("-"):
        negative, base = True, base[1:]

    if prefix:
        if not base.startswith(prefix):
            return atom
        base = base[len(prefix) :]
        # tw--mt-4 style negatives put the dash after the prefix
        if not negative and base.startswith("-"):
            negative, base = True, base[1:]

    if not base:
        return atom

    split = _split_base(base)
    if split is None:
        logger.debug("Unparseable utility %r", atom)
        return atom
    elements, arbitrary = split

    return ClassToken(
        source=atom,
        variants=variants,
        important=important,
        negative=negative,
        elements=elements,
        arbitrary=arbitrary,
    )


class Tokenizer:
    """Tokenizes class strings with a fixed prefix and separator."""

    def __init__(self, options: Optional[MergeOptions] = None):
        self.options = options if options is not None else get_merge_options()

    def parse(self, atom: str) -> ParsedClass:
        return parse_atom(atom, self.options.prefix, self.options.separator)

    def tokenize(self, classes: Iterable) -> List[ParsedClass]:
        """
        Tokenize class strings into parsed records, one per atom, in input order.

        Args:
            classes: Class strings (or nested iterables of them)

        Returns:
            List of ClassToken objects, with raw strings for opaque atoms
        """
        return [self.parse(atom) for atom in iter_atoms(classes)]


def parse_classes(
    classes: Iterable, options: Optional[MergeOptions] = None
) -> List[ParsedClass]:
    return Tokenizer(options).tokenize(classes)
